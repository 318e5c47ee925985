"""Issuance document model — the single committed issuance of a letter."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Any, Literal

from pydantic import Field, model_validator

from letter_issuance.models.base import LetterDocument, utcnow


class IssuanceChannel(StrEnum):
    PRINT = "PRINT"
    EMAIL = "EMAIL"


class DocumentStatus(StrEnum):
    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"


def issuance_document_id(letter_id: str) -> str:
    """One issuance per letter: a second create with this id is a conflict."""
    return f"{letter_id}:issuance"


class Issuance(LetterDocument):
    """Record of a letter being finalized and handed out."""

    type: Literal["issuance"] = "issuance"
    version_number: int
    issued_by: str
    issued_at: datetime = Field(default_factory=utcnow)
    channel: IssuanceChannel = IssuanceChannel.PRINT
    content_hash: str
    verification_token: str
    letter_number: int | None = None
    print_count: int = 0
    max_prints: int = 1
    document_status: DocumentStatus = DocumentStatus.PENDING

    @model_validator(mode="before")
    @classmethod
    def _deterministic_id(cls, data: Any) -> Any:
        if isinstance(data, dict) and "id" not in data and data.get("letter_id"):
            return {**data, "id": issuance_document_id(data["letter_id"])}
        return data

    @property
    def prints_remaining(self) -> int:
        return max(self.max_prints - self.print_count, 0)
