"""Tests for approval reconciliation."""

from datetime import UTC, datetime, timedelta

from letter_issuance.integrity.reconcile import (
    latest_approval,
    reconcile_approvals,
    split_approvals,
)
from letter_issuance.models.approval import CommitteeApproval, DirectApproval
from letter_issuance.models.verification import ApprovedVia

T0 = datetime(2025, 1, 1, 10, 0, tzinfo=UTC)


def _direct(approver: str, at: datetime | None) -> DirectApproval:
    return DirectApproval(letter_id="letter-1", approver_id=approver, approved_at=at)


def _committee(approver: str, at: datetime | None, committee: str = "committee-1"):
    return CommitteeApproval(
        letter_id="letter-1", committee_id=committee, approver_id=approver, approved_at=at
    )


def test_no_approvals_yields_none():
    assert reconcile_approvals([], []) is None


def test_only_direct_approval():
    result = reconcile_approvals([_direct("approver-3", T0)], [])
    assert result is not None
    assert result.via == ApprovedVia.APPROVER
    assert result.committee_id is None
    assert result.approval.approver_id == "approver-3"


def test_only_committee_approval():
    result = reconcile_approvals([], [_committee("approver-2", T0)])
    assert result is not None
    assert result.via == ApprovedVia.COMMITTEE
    assert result.committee_id == "committee-1"


def test_later_committee_approval_wins():
    result = reconcile_approvals(
        [_direct("approver-1", T0)],
        [_committee("approver-2", T0 + timedelta(days=1))],
    )
    assert result.via == ApprovedVia.COMMITTEE
    assert result.approval.approver_id == "approver-2"


def test_later_direct_approval_wins():
    result = reconcile_approvals(
        [_direct("approver-1", T0 + timedelta(hours=1))],
        [_committee("approver-2", T0)],
    )
    assert result.via == ApprovedVia.APPROVER
    assert result.committee_id is None


def test_committee_wins_exact_tie():
    result = reconcile_approvals([_direct("approver-1", T0)], [_committee("approver-2", T0)])
    assert result.via == ApprovedVia.COMMITTEE


def test_latest_within_list_is_chosen_regardless_of_order():
    approvals = [
        _direct("approver-2", T0 + timedelta(hours=2)),
        _direct("approver-1", T0),
        _direct("approver-3", T0 + timedelta(hours=1)),
    ]
    assert latest_approval(approvals).approver_id == "approver-2"


def test_later_entry_wins_tie_within_list():
    approvals = [_direct("approver-1", T0), _direct("approver-2", T0)]
    assert latest_approval(approvals).approver_id == "approver-2"


def test_missing_timestamp_is_never_preferred():
    result = reconcile_approvals(
        [_direct("approver-1", T0)],
        [_committee("approver-2", None)],
    )
    assert result.via == ApprovedVia.APPROVER


def test_naive_timestamps_compare_as_utc():
    result = reconcile_approvals(
        [_direct("approver-1", datetime(2025, 1, 1, 11, 0))],
        [_committee("approver-2", T0)],
    )
    assert result.via == ApprovedVia.APPROVER


def test_split_approvals_by_kind():
    direct, committee = split_approvals(
        [_direct("a", T0), _committee("b", T0), _direct("c", T0)]
    )
    assert [a.approver_id for a in direct] == ["a", "c"]
    assert [a.approver_id for a in committee] == ["b"]
