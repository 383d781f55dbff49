"""Service-layer tests against in-memory repositories.

Learn: Services depend only on the repository interfaces, so these
tests exercise the business rules (validation, ownership, login
failure modes) with no database at all.
"""

import uuid
from datetime import datetime, timezone

import pytest

from voyagehub.auth.jwt import TokenService
from voyagehub.auth.password import PasswordHasher
from voyagehub.errors import Conflict, InvalidCredentials, NotFound, ValidationError
from voyagehub.records import Claims, JournalEntryRecord, UserRecord
from voyagehub.repositories.base import JournalRepository, UserRepository
from voyagehub.services.journal_service import JournalService
from voyagehub.services.user_service import UserService


class MemoryUsers(UserRepository):
    def __init__(self):
        self.rows: list[UserRecord] = []

    async def find_by_email(self, email):
        return next((u for u in self.rows if u.email == email), None)

    async def find_by_username_or_email(self, username, email):
        return next(
            (u for u in self.rows if u.username == username or u.email == email), None
        )

    async def insert(self, username, email, password_hash):
        user = UserRecord(
            id=uuid.uuid4(),
            username=username,
            email=email,
            password_hash=password_hash,
            created_at=datetime.now(timezone.utc),
        )
        self.rows.append(user)
        return user


class MemoryJournals(JournalRepository):
    def __init__(self):
        self.rows: dict[uuid.UUID, JournalEntryRecord] = {}

    async def find(self, owner_id):
        mine = [e for e in self.rows.values() if e.user_id == owner_id]
        return sorted(mine, key=lambda e: e.created_at, reverse=True)

    async def find_one(self, owner_id, entry_id):
        entry = self.rows.get(entry_id)
        return entry if entry and entry.user_id == owner_id else None

    async def insert(self, owner_id, title, content, location, images):
        now = datetime.now(timezone.utc)
        entry = JournalEntryRecord(
            id=uuid.uuid4(),
            user_id=owner_id,
            title=title,
            content=content,
            location=location,
            images=images,
            date=now,
            created_at=now,
        )
        self.rows[entry.id] = entry
        return entry

    async def update_where(self, owner_id, entry_id, fields):
        entry = await self.find_one(owner_id, entry_id)
        if entry is None:
            return None
        updated = JournalEntryRecord(**{**entry.__dict__, **fields})
        self.rows[entry_id] = updated
        return updated

    async def delete_where(self, owner_id, entry_id):
        if await self.find_one(owner_id, entry_id) is None:
            return False
        del self.rows[entry_id]
        return True


@pytest.fixture()
def user_service(settings):
    return UserService(MemoryUsers(), PasswordHasher(rounds=4), TokenService(settings))


@pytest.fixture()
def journals():
    return JournalService(MemoryJournals())


# ─── Credential store ───────────────────────────────────


@pytest.mark.asyncio
async def test_register_then_login(user_service):
    user_id = await user_service.register("amy", "amy@x.com", "secret123")
    user, token = await user_service.login("amy@x.com", "secret123")
    assert user.id == user_id
    assert user_service.tokens.verify(token) == Claims(user_id=user_id, username="amy")


@pytest.mark.asyncio
async def test_register_conflict_on_either_field(user_service):
    await user_service.register("amy", "amy@x.com", "secret123")
    with pytest.raises(Conflict):
        await user_service.register("amy", "new@x.com", "secret123")
    with pytest.raises(Conflict):
        await user_service.register("new", "amy@x.com", "secret123")


@pytest.mark.asyncio
async def test_lookup_by_email(user_service):
    await user_service.register("amy", "amy@x.com", "secret123")
    assert (await user_service.lookup_by_email("amy@x.com")).username == "amy"
    assert await user_service.lookup_by_email("nobody@x.com") is None


@pytest.mark.asyncio
@pytest.mark.parametrize("email,password", [("amy@x.com", "wrong"), ("nobody@x.com", "secret123")])
async def test_login_failures(user_service, email, password):
    await user_service.register("amy", "amy@x.com", "secret123")
    with pytest.raises(InvalidCredentials):
        await user_service.login(email, password)


# ─── Journal store ──────────────────────────────────────


@pytest.mark.asyncio
async def test_create_requires_text(journals):
    owner = uuid.uuid4()
    with pytest.raises(ValidationError):
        await journals.create(owner, "", "content")
    with pytest.raises(ValidationError):
        await journals.create(owner, "title", "")


@pytest.mark.asyncio
async def test_whitespace_text_is_kept_verbatim(journals):
    owner = uuid.uuid4()
    entry = await journals.create(owner, "  ", " \n")
    assert (entry.title, entry.content) == ("  ", " \n")


@pytest.mark.asyncio
async def test_update_refuses_owner_field(journals):
    owner = uuid.uuid4()
    entry = await journals.create(owner, "t", "c")
    with pytest.raises(ValidationError):
        await journals.update(owner, entry.id, {"user_id": uuid.uuid4()})


@pytest.mark.asyncio
async def test_cross_owner_update_and_delete_not_found(journals):
    alice, bob = uuid.uuid4(), uuid.uuid4()
    entry = await journals.create(alice, "t", "c")

    with pytest.raises(NotFound):
        await journals.update(bob, entry.id, {"title": "mine now"})
    with pytest.raises(NotFound):
        await journals.delete(bob, entry.id)

    [still_there] = await journals.list_entries(alice)
    assert still_there.title == "t"


@pytest.mark.asyncio
async def test_list_scoped_to_owner(journals):
    alice, bob = uuid.uuid4(), uuid.uuid4()
    for i in range(4):
        await journals.create(alice, f"a{i}", "c")
    await journals.create(bob, "b", "c")

    assert len(await journals.list_entries(alice)) == 4
    assert [e.title for e in await journals.list_entries(bob)] == ["b"]
