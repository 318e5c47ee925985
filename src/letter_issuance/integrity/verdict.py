"""Verification verdicts assembled from a letter snapshot."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from letter_issuance.integrity.reconcile import reconcile_approvals, split_approvals
from letter_issuance.models.approval import Approval
from letter_issuance.models.issuance import Issuance
from letter_issuance.models.letter import Letter, LetterStatus
from letter_issuance.models.verification import (
    DocumentDetails,
    VerificationResult,
    VerificationStatus,
)

INVALID_MESSAGE = "Invalid or unknown document."
REVOKED_MESSAGE = "Document has been revoked."

_VALID_STATUSES = frozenset({LetterStatus.APPROVED, LetterStatus.ISSUED})


@dataclass(frozen=True)
class VerificationSnapshot:
    """Everything the verdict reads, fetched up front by the caller."""

    letter: Letter
    version_number: int
    department_name: str | None = None
    approvals: Sequence[Approval] = field(default_factory=tuple)
    issuances: Sequence[Issuance] = field(default_factory=tuple)


def invalid_verdict() -> VerificationResult:
    """The outward answer for unknown keys and non-verifiable letters.

    It deliberately carries no details, so a guessed key cannot reveal whether
    a record exists.
    """
    return VerificationResult(
        valid=False,
        status=VerificationStatus.INVALID,
        message=INVALID_MESSAGE,
    )


def build_verification_response(snapshot: VerificationSnapshot) -> VerificationResult:
    """Project a snapshot to a verdict.

    Revocation is checked first and overrides any approval or issuance
    history. Only APPROVED and ISSUED letters verify as valid; every other
    status gets the generic invalid verdict.
    """
    letter = snapshot.letter
    issuance = snapshot.issuances[0] if snapshot.issuances else None

    if letter.status == LetterStatus.REVOKED:
        return VerificationResult(
            valid=False,
            status=VerificationStatus.REVOKED,
            message=REVOKED_MESSAGE,
            document_details=DocumentDetails(
                context=str(letter.context),
                department=snapshot.department_name,
                status=str(letter.status),
                letter_number=letter.letter_number,
                version_number=snapshot.version_number,
                issued_at=issuance.issued_at if issuance else None,
                issued_by=issuance.issued_by if issuance else None,
                issuance_exists=False,
            ),
        )

    if letter.status not in _VALID_STATUSES:
        return invalid_verdict()

    direct, committee = split_approvals(snapshot.approvals)
    selected = reconcile_approvals(direct, committee)

    return VerificationResult(
        valid=True,
        status=VerificationStatus.VALID,
        document_details=DocumentDetails(
            context=str(letter.context),
            department=snapshot.department_name,
            status=str(letter.status),
            letter_number=letter.letter_number,
            version_number=snapshot.version_number,
            issued_at=issuance.issued_at if issuance else None,
            issued_by=issuance.issued_by if issuance else None,
            approved_by=selected.approval.approver_id if selected else None,
            approved_at=selected.approval.approved_at if selected else None,
            approved_via=selected.via if selected else None,
            committee_id=selected.committee_id if selected else None,
            issuance_exists=bool(snapshot.issuances),
        ),
    )
