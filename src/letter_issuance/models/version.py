"""LetterVersion document model — immutable content snapshots."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import model_validator

from letter_issuance.models.base import LetterDocument


def version_document_id(letter_id: str, version_number: int) -> str:
    """Deterministic id so the store rejects a second write of the same version."""
    return f"{letter_id}:v{version_number}"


class LetterVersion(LetterDocument):
    """One entry of a letter's append-only version ledger.

    ``content_hash`` is the digest of the raw content. ``fingerprint`` and
    ``verification_token`` are set only on the version frozen at issuance.
    """

    type: Literal["version"] = "version"
    version_number: int
    content: str
    content_hash: str
    created_by: str
    fingerprint: str | None = None
    verification_token: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _deterministic_id(cls, data: Any) -> Any:
        if isinstance(data, dict) and "id" not in data:
            letter_id = data.get("letter_id")
            number = data.get("version_number")
            if letter_id and number is not None:
                return {**data, "id": version_document_id(letter_id, number)}
        return data
