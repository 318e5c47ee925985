"""Letter document model — the mutable head of a letter's history."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Any, Literal

from pydantic import Field, model_validator

from letter_issuance.models.base import LetterDocument


class LetterContext(StrEnum):
    """Issuing authorities a letter can be written under."""

    COMPANY = "COMPANY"
    BCBA = "BCBA"


class LetterStatus(StrEnum):
    DRAFT = "DRAFT"
    APPROVED = "APPROVED"
    ISSUED = "ISSUED"
    REJECTED = "REJECTED"
    REVOKED = "REVOKED"


class Letter(LetterDocument):
    """A letter moving through draft, approval and issuance.

    Content, department and tags may only change while the letter is a draft.
    ``current_version`` mirrors the highest version number written to the
    version ledger and is the precondition checked at issuance.
    """

    type: Literal["letter"] = "letter"
    letter_id: str = ""
    context: LetterContext
    department_id: str
    tag_ids: list[str] = Field(default_factory=list)
    content: str
    status: LetterStatus = LetterStatus.DRAFT
    committee_id: str | None = None
    created_by: str
    current_version: int = 0
    letter_number: int | None = None
    rejection_reason: str | None = None
    rejected_at: datetime | None = None
    revoked_at: datetime | None = None
    revoked_by: str | None = None
    revocation_reason: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _partition_on_own_id(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("id") and not data.get("letter_id"):
            return {**data, "letter_id": data["id"]}
        return data

    @model_validator(mode="after")
    def _default_partition(self) -> Letter:
        if not self.letter_id:
            self.letter_id = self.id
        return self

    @property
    def is_editable(self) -> bool:
        return self.status == LetterStatus.DRAFT
