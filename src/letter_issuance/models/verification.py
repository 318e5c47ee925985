"""Caller-facing verification verdict."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel


class VerificationStatus(StrEnum):
    VALID = "valid"
    REVOKED = "revoked"
    INVALID = "invalid"


class ApprovedVia(StrEnum):
    APPROVER = "APPROVER"
    COMMITTEE = "COMMITTEE"


class DocumentDetails(BaseModel):
    context: str
    department: str | None = None
    status: str
    letter_number: int | None = None
    version_number: int
    issued_at: datetime | None = None
    issued_by: str | None = None
    approved_by: str | None = None
    approved_at: datetime | None = None
    approved_via: ApprovedVia | None = None
    committee_id: str | None = None
    issuance_exists: bool = False


class VerificationResult(BaseModel):
    valid: bool
    status: VerificationStatus
    message: str | None = None
    document_details: DocumentDetails | None = None
