"""Repository modules for each Cosmos DB container."""

from letter_issuance.database.repositories.acknowledgements import AcknowledgementRepository
from letter_issuance.database.repositories.approvals import ApprovalRepository
from letter_issuance.database.repositories.audit_logs import AuditLogRepository
from letter_issuance.database.repositories.counters import CounterRepository
from letter_issuance.database.repositories.issuances import IssuanceRepository
from letter_issuance.database.repositories.letters import LetterRepository
from letter_issuance.database.repositories.print_requests import PrintRequestRepository
from letter_issuance.database.repositories.reference import (
    CommitteeRepository,
    DepartmentRepository,
    TagRepository,
)
from letter_issuance.database.repositories.versions import VersionRepository

__all__ = [
    "AcknowledgementRepository",
    "ApprovalRepository",
    "AuditLogRepository",
    "CommitteeRepository",
    "CounterRepository",
    "DepartmentRepository",
    "IssuanceRepository",
    "LetterRepository",
    "PrintRequestRepository",
    "TagRepository",
    "VersionRepository",
]
