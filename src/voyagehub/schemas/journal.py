"""Pydantic schemas for journal entries.

Learn: Separate "Create"/"Update" schemas (input) from "Read" (output).
Neither input schema has a user_id field and pydantic drops unknown
keys, so a client can't reassign ownership through the body. The update
schema is partial: the route forwards only the keys the client actually
sent (model_dump(exclude_unset=True)).
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class JournalCreate(BaseModel):
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    location: Optional[str] = None
    images: list[str] = Field(default_factory=list)


class JournalUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    content: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = None
    images: Optional[list[str]] = None
    date: Optional[datetime] = None

    @field_validator("title", "content", "images", "date")
    @classmethod
    def not_null(cls, v):
        # Only runs for keys the client sent; omitting a field is fine.
        if v is None:
            raise ValueError("may not be null")
        return v


class JournalRead(BaseModel):
    id: uuid.UUID
    title: str
    content: str
    location: Optional[str] = None
    images: list[str]
    date: datetime
    user_id: uuid.UUID
    created_at: datetime

    model_config = {"from_attributes": True}
