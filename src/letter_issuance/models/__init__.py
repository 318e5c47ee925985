"""Data models for Cosmos DB document types."""

from letter_issuance.models.acknowledgement import Acknowledgement
from letter_issuance.models.approval import (
    Approval,
    ApprovalKind,
    CommitteeApproval,
    DirectApproval,
)
from letter_issuance.models.audit_log import AuditAction, AuditLog
from letter_issuance.models.issuance import DocumentStatus, Issuance, IssuanceChannel
from letter_issuance.models.letter import Letter, LetterContext, LetterStatus
from letter_issuance.models.print_request import PrintRequest, PrintRequestStatus
from letter_issuance.models.reference import Committee, Department, Tag
from letter_issuance.models.verification import (
    ApprovedVia,
    DocumentDetails,
    VerificationResult,
    VerificationStatus,
)
from letter_issuance.models.version import LetterVersion

__all__ = [
    "Acknowledgement",
    "Approval",
    "ApprovalKind",
    "ApprovedVia",
    "AuditAction",
    "AuditLog",
    "Committee",
    "CommitteeApproval",
    "Department",
    "DirectApproval",
    "DocumentDetails",
    "DocumentStatus",
    "Issuance",
    "IssuanceChannel",
    "Letter",
    "LetterContext",
    "LetterStatus",
    "LetterVersion",
    "PrintRequest",
    "PrintRequestStatus",
    "Tag",
    "VerificationResult",
    "VerificationStatus",
]
