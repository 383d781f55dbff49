"""Journal API routes.

Learn: The whole router sits behind the access guard (see
api/__init__.py). Handlers still ask for get_current_user to learn
*who* is calling; FastAPI resolves it once per request. The owner id
passed to the service always comes from the token.

A path id that isn't a UUID can't name any entry, so it is reported
as 404 like any other unknown id.
"""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from voyagehub.auth.dependencies import get_current_user
from voyagehub.db.engine import get_db
from voyagehub.errors import NotFound
from voyagehub.records import Claims
from voyagehub.repositories.sql import SqlJournalRepository
from voyagehub.schemas.auth import MessageResponse
from voyagehub.schemas.journal import JournalCreate, JournalRead, JournalUpdate
from voyagehub.services.journal_service import JournalService

router = APIRouter(prefix="/journals")


def get_journal_service(db: AsyncSession = Depends(get_db)) -> JournalService:
    return JournalService(SqlJournalRepository(db))


def _entry_id(raw: str) -> uuid.UUID:
    try:
        return uuid.UUID(raw)
    except ValueError:
        raise NotFound()


@router.get("", response_model=list[JournalRead])
async def list_journals(
    identity: Claims = Depends(get_current_user),
    svc: JournalService = Depends(get_journal_service),
):
    """The caller's entries, newest first."""
    return await svc.list_entries(identity.user_id)


@router.post("", response_model=JournalRead, status_code=201)
async def create_journal(
    body: JournalCreate,
    identity: Claims = Depends(get_current_user),
    svc: JournalService = Depends(get_journal_service),
):
    return await svc.create(
        owner_id=identity.user_id,
        title=body.title,
        content=body.content,
        location=body.location,
        images=body.images,
    )


@router.put("/{entry_id}", response_model=JournalRead)
async def update_journal(
    entry_id: str,
    body: JournalUpdate,
    identity: Claims = Depends(get_current_user),
    svc: JournalService = Depends(get_journal_service),
):
    """Partial update — only fields present in the body are written."""
    return await svc.update(
        identity.user_id, _entry_id(entry_id), body.model_dump(exclude_unset=True)
    )


@router.delete("/{entry_id}", response_model=MessageResponse)
async def delete_journal(
    entry_id: str,
    identity: Claims = Depends(get_current_user),
    svc: JournalService = Depends(get_journal_service),
):
    await svc.delete(identity.user_id, _entry_id(entry_id))
    return MessageResponse(message="Journal deleted successfully")
