"""Shared base for every Cosmos DB document."""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    return datetime.now(UTC)


class DocumentBase(BaseModel):
    """Fields common to all stored documents.

    ``etag`` is read from Cosmos ``_etag`` and never written back; repositories
    pass it as the optimistic-concurrency precondition on replace.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    deleted_at: datetime | None = None
    etag: str | None = Field(default=None, validation_alias="_etag", exclude=True)


class LetterDocument(DocumentBase):
    """A document stored in the ``letters`` container, partitioned by letter."""

    type: str
    letter_id: str
