"""Journal service — owner-scoped journal entry CRUD.

Learn: Every method takes the owner id from the verified token, never
from the request body. Reads filter on it; writes match on
(entry_id, owner_id) together. An entry that belongs to someone else
is therefore reported exactly like one that doesn't exist (NotFound),
so non-owners can't even confirm an id is real.
"""

import uuid
from typing import Any, Optional

import structlog

from voyagehub.errors import NotFound, ValidationError
from voyagehub.records import JournalEntryRecord
from voyagehub.repositories.base import JournalRepository

logger = structlog.get_logger()

# Fields a client may change. user_id, id and created_at are not among them.
UPDATABLE_FIELDS = frozenset({"title", "content", "location", "images", "date"})
_REQUIRED_TEXT_FIELDS = ("title", "content")


def _require_text(name: str, value: Any) -> None:
    if not isinstance(value, str) or value == "":
        raise ValidationError(f"{name} is required")


class JournalService:
    """Journal store, always accessed on behalf of one owner."""

    def __init__(self, journals: JournalRepository):
        self.journals = journals

    async def list_entries(self, owner_id: uuid.UUID) -> list[JournalEntryRecord]:
        return await self.journals.find(owner_id)

    async def create(
        self,
        owner_id: uuid.UUID,
        title: str,
        content: str,
        location: Optional[str] = None,
        images: Optional[list[str]] = None,
    ) -> JournalEntryRecord:
        _require_text("title", title)
        _require_text("content", content)

        entry = await self.journals.insert(
            owner_id=owner_id,
            title=title,
            content=content,
            location=location,
            images=list(images or []),
        )
        logger.info("voyagehub.journal.created", entry_id=str(entry.id))
        return entry

    async def update(
        self, owner_id: uuid.UUID, entry_id: uuid.UUID, fields: dict[str, Any]
    ) -> JournalEntryRecord:
        """Overwrite only the supplied fields. NotFound if not owned."""
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update: {', '.join(sorted(unknown))}")
        for name in _REQUIRED_TEXT_FIELDS:
            if name in fields:
                _require_text(name, fields[name])
        if "images" in fields and fields["images"] is None:
            raise ValidationError("images may not be null")

        if fields:
            entry = await self.journals.update_where(owner_id, entry_id, fields)
        else:
            entry = await self.journals.find_one(owner_id, entry_id)

        if entry is None:
            raise NotFound()
        logger.info(
            "voyagehub.journal.updated",
            entry_id=str(entry_id),
            fields=sorted(fields),
        )
        return entry

    async def delete(self, owner_id: uuid.UUID, entry_id: uuid.UUID) -> None:
        deleted = await self.journals.delete_where(owner_id, entry_id)
        if not deleted:
            raise NotFound()
        logger.info("voyagehub.journal.deleted", entry_id=str(entry_id))
