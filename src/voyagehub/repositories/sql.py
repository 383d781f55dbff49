"""SQLAlchemy implementations of the repository interfaces.

Learn: Each repository wraps one AsyncSession (one per request) and
commits after every write, so each create/update/delete is its own
atomic unit. Journal UPDATE and DELETE are single statements whose
WHERE clause carries both the entry id and the owner id, with RETURNING
telling us whether anything matched. There is no read-then-write
window in which ownership could change.

Any SQLAlchemyError is logged here and re-raised as StorageError, so
callers only ever see domain errors.
"""

import uuid
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

import structlog
from sqlalchemy import delete, or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from voyagehub.db.models import JournalEntry, User
from voyagehub.errors import Conflict, StorageError
from voyagehub.records import JournalEntryRecord, UserRecord
from voyagehub.repositories.base import JournalRepository, UserRepository

logger = structlog.get_logger()


def _user_record(row: User) -> UserRecord:
    return UserRecord(
        id=row.id,
        username=row.username,
        email=row.email,
        password_hash=row.password_hash,
        created_at=row.created_at,
    )


def _entry_record(row: JournalEntry) -> JournalEntryRecord:
    return JournalEntryRecord(
        id=row.id,
        user_id=row.user_id,
        title=row.title,
        content=row.content,
        location=row.location,
        images=list(row.images or []),
        date=row.date,
        created_at=row.created_at,
    )


class _SqlRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def _storage(self, operation: str) -> AsyncIterator[None]:
        """Translate driver/ORM failures into StorageError."""
        try:
            yield
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                "voyagehub.storage.failed",
                operation=operation,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise StorageError() from e


class SqlUserRepository(_SqlRepository, UserRepository):
    async def find_by_email(self, email: str) -> Optional[UserRecord]:
        async with self._storage("users.find_by_email"):
            result = await self.db.execute(select(User).where(User.email == email))
            row = result.scalars().first()
        return _user_record(row) if row else None

    async def find_by_username_or_email(
        self, username: str, email: str
    ) -> Optional[UserRecord]:
        async with self._storage("users.find_by_username_or_email"):
            result = await self.db.execute(
                select(User).where(or_(User.username == username, User.email == email))
            )
            row = result.scalars().first()
        return _user_record(row) if row else None

    async def insert(
        self, username: str, email: str, password_hash: str
    ) -> UserRecord:
        async with self._storage("users.insert"):
            user = User(username=username, email=email, password_hash=password_hash)
            self.db.add(user)
            try:
                await self.db.commit()
            except IntegrityError:
                # Lost a race with a concurrent registration.
                await self.db.rollback()
                raise Conflict()
            await self.db.refresh(user)
        return _user_record(user)


class SqlJournalRepository(_SqlRepository, JournalRepository):
    async def find(self, owner_id: uuid.UUID) -> list[JournalEntryRecord]:
        async with self._storage("journals.find"):
            result = await self.db.execute(
                select(JournalEntry)
                .where(JournalEntry.user_id == owner_id)
                .order_by(JournalEntry.created_at.desc())
            )
            rows = result.scalars().all()
        return [_entry_record(r) for r in rows]

    async def find_one(
        self, owner_id: uuid.UUID, entry_id: uuid.UUID
    ) -> Optional[JournalEntryRecord]:
        async with self._storage("journals.find_one"):
            result = await self.db.execute(
                select(JournalEntry).where(
                    JournalEntry.id == entry_id, JournalEntry.user_id == owner_id
                )
            )
            row = result.scalars().first()
        return _entry_record(row) if row else None

    async def insert(
        self,
        owner_id: uuid.UUID,
        title: str,
        content: str,
        location: Optional[str],
        images: list[str],
    ) -> JournalEntryRecord:
        async with self._storage("journals.insert"):
            entry = JournalEntry(
                user_id=owner_id,
                title=title,
                content=content,
                location=location,
                images=images,
            )
            self.db.add(entry)
            await self.db.commit()
            await self.db.refresh(entry)
        return _entry_record(entry)

    async def update_where(
        self, owner_id: uuid.UUID, entry_id: uuid.UUID, fields: dict[str, Any]
    ) -> Optional[JournalEntryRecord]:
        async with self._storage("journals.update_where"):
            result = await self.db.execute(
                update(JournalEntry)
                .where(JournalEntry.id == entry_id, JournalEntry.user_id == owner_id)
                .values(**fields)
                .returning(JournalEntry)
                .execution_options(populate_existing=True)
            )
            row = result.scalars().first()
            record = _entry_record(row) if row else None
            await self.db.commit()
        return record

    async def delete_where(self, owner_id: uuid.UUID, entry_id: uuid.UUID) -> bool:
        async with self._storage("journals.delete_where"):
            result = await self.db.execute(
                delete(JournalEntry)
                .where(JournalEntry.id == entry_id, JournalEntry.user_id == owner_id)
                .returning(JournalEntry.id)
            )
            deleted = result.first() is not None
            await self.db.commit()
        return deleted
