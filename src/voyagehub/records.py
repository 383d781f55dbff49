"""Plain data records passed between repositories, services and routes.

Learn: ORM rows never leave the repository layer. Services work with
these frozen dataclasses, so they can be tested against any repository
implementation and can't accidentally lazy-load or mutate a row.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class UserRecord:
    id: uuid.UUID
    username: str
    email: str
    password_hash: str
    created_at: datetime


@dataclass(frozen=True)
class JournalEntryRecord:
    id: uuid.UUID
    user_id: uuid.UUID
    title: str
    content: str
    date: datetime
    created_at: datetime
    location: Optional[str] = None
    images: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Claims:
    """Decoded payload of a verified bearer token."""

    user_id: uuid.UUID
    username: str


@dataclass(frozen=True)
class TokenRejection:
    """Why a bearer token failed verification (for logs, not clients)."""

    reason: str
