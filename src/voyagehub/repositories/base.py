"""Repository interfaces — the storage boundary services depend on.

Learn: Services never touch the ORM. They talk to these abstract
repositories, which hand back plain records from voyagehub.records.
The SQLAlchemy implementations live in sql.py; anything that honours
these signatures (an in-memory fake, another database) can be swapped in.

Ownership-scoped writes take the owner id as part of the match
predicate. Implementations must apply the (id, owner) match and the
write in a single atomic step.
"""

import uuid
from abc import ABC, abstractmethod
from typing import Any, Optional

from voyagehub.records import JournalEntryRecord, UserRecord


class UserRepository(ABC):
    """Persistence for user identity records."""

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[UserRecord]:
        ...

    @abstractmethod
    async def find_by_username_or_email(
        self, username: str, email: str
    ) -> Optional[UserRecord]:
        """Return any user matching either field (one combined lookup)."""

    @abstractmethod
    async def insert(
        self, username: str, email: str, password_hash: str
    ) -> UserRecord:
        """Insert a user. Raises Conflict on a uniqueness violation."""


class JournalRepository(ABC):
    """Persistence for journal entries, always filtered by owner."""

    @abstractmethod
    async def find(self, owner_id: uuid.UUID) -> list[JournalEntryRecord]:
        """All entries for owner_id, newest created first."""

    @abstractmethod
    async def find_one(
        self, owner_id: uuid.UUID, entry_id: uuid.UUID
    ) -> Optional[JournalEntryRecord]:
        ...

    @abstractmethod
    async def insert(
        self,
        owner_id: uuid.UUID,
        title: str,
        content: str,
        location: Optional[str],
        images: list[str],
    ) -> JournalEntryRecord:
        ...

    @abstractmethod
    async def update_where(
        self, owner_id: uuid.UUID, entry_id: uuid.UUID, fields: dict[str, Any]
    ) -> Optional[JournalEntryRecord]:
        """Apply fields to the entry matching (entry_id, owner_id).

        Returns the updated record, or None if nothing matched.
        """

    @abstractmethod
    async def delete_where(self, owner_id: uuid.UUID, entry_id: uuid.UUID) -> bool:
        """Delete the entry matching (entry_id, owner_id). True if deleted."""
