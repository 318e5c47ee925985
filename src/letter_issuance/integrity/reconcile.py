"""Selection of the authoritative approval among direct and committee approvals."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TypeVar

from letter_issuance.models.approval import Approval, CommitteeApproval, DirectApproval
from letter_issuance.models.verification import ApprovedVia

_EARLIEST = datetime.min.replace(tzinfo=UTC)

_A = TypeVar("_A", DirectApproval, CommitteeApproval)


@dataclass(frozen=True)
class ReconciledApproval:
    approval: DirectApproval | CommitteeApproval
    via: ApprovedVia
    committee_id: str | None = None


def _timestamp(approval: DirectApproval | CommitteeApproval) -> datetime:
    """Sort key; approvals without a timestamp sort before everything else."""
    approved_at = approval.approved_at
    if approved_at is None:
        return _EARLIEST
    if approved_at.tzinfo is None:
        return approved_at.replace(tzinfo=UTC)
    return approved_at


def latest_approval(approvals: Iterable[_A]) -> _A | None:
    """Return the most recent approval; on equal timestamps the later entry wins."""
    latest: _A | None = None
    for approval in approvals:
        if latest is None or _timestamp(approval) >= _timestamp(latest):
            latest = approval
    return latest


def split_approvals(
    approvals: Iterable[Approval],
) -> tuple[list[DirectApproval], list[CommitteeApproval]]:
    direct: list[DirectApproval] = []
    committee: list[CommitteeApproval] = []
    for approval in approvals:
        if isinstance(approval, CommitteeApproval):
            committee.append(approval)
        else:
            direct.append(approval)
    return direct, committee


def reconcile_approvals(
    direct: Sequence[DirectApproval],
    committee: Sequence[CommitteeApproval],
) -> ReconciledApproval | None:
    """Pick the single approval that authorizes the letter.

    The latest approval of each kind is chosen first, then the more recent of
    the two wins. A committee approval wins an exact tie. Returns None when no
    approval exists.
    """
    latest_direct = latest_approval(direct)
    latest_committee = latest_approval(committee)

    if latest_committee is not None and (
        latest_direct is None or _timestamp(latest_committee) >= _timestamp(latest_direct)
    ):
        return ReconciledApproval(
            approval=latest_committee,
            via=ApprovedVia.COMMITTEE,
            committee_id=latest_committee.committee_id,
        )
    if latest_direct is not None:
        return ReconciledApproval(approval=latest_direct, via=ApprovedVia.APPROVER)
    return None
