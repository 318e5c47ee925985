"""Acknowledgement document model — proof that an issued letter was received."""

from __future__ import annotations

from typing import Literal

from letter_issuance.models.base import LetterDocument


class Acknowledgement(LetterDocument):
    type: Literal["acknowledgement"] = "acknowledgement"
    job_reference: str
    file_url: str | None = None
    captured_by: str
