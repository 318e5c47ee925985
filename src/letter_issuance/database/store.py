"""Bundle of the repositories the letter workflow reads and writes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from letter_issuance.database.repositories import (
    AcknowledgementRepository,
    ApprovalRepository,
    AuditLogRepository,
    CommitteeRepository,
    CounterRepository,
    DepartmentRepository,
    IssuanceRepository,
    LetterRepository,
    PrintRequestRepository,
    TagRepository,
    VersionRepository,
)

if TYPE_CHECKING:
    from azure.cosmos.aio import DatabaseProxy


@dataclass
class LetterStore:
    letters: LetterRepository
    versions: VersionRepository
    approvals: ApprovalRepository
    issuances: IssuanceRepository
    print_requests: PrintRequestRepository
    acknowledgements: AcknowledgementRepository
    audit_logs: AuditLogRepository
    departments: DepartmentRepository
    committees: CommitteeRepository
    tags: TagRepository
    counters: CounterRepository

    @classmethod
    def from_database(cls, database: DatabaseProxy) -> LetterStore:
        return cls(
            letters=LetterRepository(database),
            versions=VersionRepository(database),
            approvals=ApprovalRepository(database),
            issuances=IssuanceRepository(database),
            print_requests=PrintRequestRepository(database),
            acknowledgements=AcknowledgementRepository(database),
            audit_logs=AuditLogRepository(database),
            departments=DepartmentRepository(database),
            committees=CommitteeRepository(database),
            tags=TagRepository(database),
            counters=CounterRepository(database),
        )
