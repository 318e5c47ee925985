"""AuditLog document model — one entry per workflow transition."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import Field

from letter_issuance.models.base import DocumentBase


class AuditAction(StrEnum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    APPROVE = "APPROVE"
    COMMITTEE_APPROVE = "COMMITTEE_APPROVE"
    REJECT = "REJECT"
    REVOKE = "REVOKE"
    ISSUE = "ISSUE"
    PRINT = "PRINT"
    REPRINT_REQUEST = "REPRINT_REQUEST"
    REPRINT_APPROVE = "REPRINT_APPROVE"
    REPRINT_DENY = "REPRINT_DENY"
    ACKNOWLEDGE = "ACKNOWLEDGE"


class AuditLog(DocumentBase):
    action: AuditAction
    entity_type: str = "LETTER"
    entity_id: str
    actor_id: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
