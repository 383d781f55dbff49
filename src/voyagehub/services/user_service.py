"""User service — registration, lookup, and login.

Learn: Service layer separates business logic from HTTP routing.
Routes call services, services call repositories. The service only
knows the UserRepository interface, so it is storage-agnostic.

Account enumeration: login gives the same InvalidCredentials for an
unknown email and a wrong password, and burns a bcrypt verification in
both cases so the two can't be told apart by timing either.
"""

import asyncio
import uuid
from typing import Optional

import structlog

from voyagehub.auth.jwt import TokenService
from voyagehub.auth.password import PasswordHasher
from voyagehub.errors import Conflict, InvalidCredentials
from voyagehub.records import UserRecord
from voyagehub.repositories.base import UserRepository

logger = structlog.get_logger()


class UserService:
    """Credential store: user identity records and login."""

    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
    ):
        self.users = users
        self.hasher = hasher
        self.tokens = tokens

    async def register(self, username: str, email: str, password: str) -> uuid.UUID:
        """Create an account. Raises Conflict if username or email is taken."""
        existing = await self.users.find_by_username_or_email(username, email)
        if existing:
            logger.info("voyagehub.auth.register_conflict")
            raise Conflict()

        password_hash = await asyncio.to_thread(self.hasher.hash, password)
        user = await self.users.insert(username, email, password_hash)
        logger.info("voyagehub.auth.registered", user_id=str(user.id))
        return user.id

    async def lookup_by_email(self, email: str) -> Optional[UserRecord]:
        return await self.users.find_by_email(email)

    async def login(self, email: str, password: str) -> tuple[UserRecord, str]:
        """Check credentials and issue a bearer token."""
        user = await self.lookup_by_email(email)
        if user is None:
            await asyncio.to_thread(self.hasher.verify_dummy, password)
            logger.info("voyagehub.auth.login_failed")
            raise InvalidCredentials()

        ok = await asyncio.to_thread(self.hasher.verify, password, user.password_hash)
        if not ok:
            logger.info("voyagehub.auth.login_failed")
            raise InvalidCredentials()

        token = self.tokens.issue(user.id, user.username)
        logger.info("voyagehub.auth.login", user_id=str(user.id))
        return user, token
