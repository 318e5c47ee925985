"""Approval document models — direct and committee approvals as a tagged union."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Annotated, Literal

from pydantic import Field

from letter_issuance.models.base import LetterDocument, utcnow


class ApprovalKind(StrEnum):
    DIRECT = "DIRECT"
    COMMITTEE = "COMMITTEE"


class DirectApproval(LetterDocument):
    """Approval granted by a single approver."""

    type: Literal["approval"] = "approval"
    kind: Literal["DIRECT"] = "DIRECT"
    approver_id: str
    comment: str | None = None
    approved_at: datetime | None = Field(default_factory=utcnow)


class CommitteeApproval(LetterDocument):
    """Approval granted on behalf of the committee assigned to the letter."""

    type: Literal["committee_approval"] = "committee_approval"
    kind: Literal["COMMITTEE"] = "COMMITTEE"
    committee_id: str
    approver_id: str
    comment: str | None = None
    approved_at: datetime | None = Field(default_factory=utcnow)


Approval = Annotated[DirectApproval | CommitteeApproval, Field(discriminator="kind")]
