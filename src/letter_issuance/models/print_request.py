"""PrintRequest document model — reprint approvals beyond the print limit."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Literal

from letter_issuance.models.base import LetterDocument


class PrintRequestStatus(StrEnum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    DENIED = "DENIED"


class PrintRequest(LetterDocument):
    type: Literal["print_request"] = "print_request"
    issuance_id: str
    requested_by: str
    reason: str
    status: PrintRequestStatus = PrintRequestStatus.PENDING
    decided_by: str | None = None
    decided_at: datetime | None = None
