"""Tests for the verification service, including the full issue-verify-revoke path."""

from letter_issuance.integrity.verdict import INVALID_MESSAGE, REVOKED_MESSAGE
from letter_issuance.models.letter import LetterContext
from letter_issuance.models.verification import ApprovedVia, VerificationStatus
from letter_issuance.services import letters as letters_svc
from letter_issuance.services import verification as verification_svc
from letter_issuance.services.issuance import issue_letter


async def _issue(store, audit, author, approver, issuer, renderer, **create_kwargs):
    letter = await letters_svc.create_letter(
        author,
        store,
        audit,
        context=LetterContext.COMPANY,
        department_id="dept-9",
        content="To whom it may concern",
        tag_ids=["alpha"],
        **create_kwargs,
    )
    await letters_svc.approve_letter(letter.id, approver, store, audit)
    outcome = await issue_letter(
        letter.id, issuer, store, audit, renderer, verify_base_url="https://v.example.com"
    )
    return letter, outcome


async def test_create_approve_issue_verify_revoke(
    store, audit, author, approver, issuer, admin, renderer
):
    """Walk a letter through issuance and revocation, verifying by token."""
    letter, outcome = await _issue(store, audit, author, approver, issuer, renderer)
    token = outcome.receipt.verification_token

    result = await verification_svc.verify(token, store)

    assert result.valid is True
    assert result.status == VerificationStatus.VALID
    details = result.document_details
    assert details.approved_via == ApprovedVia.APPROVER
    assert details.approved_by == "approver-1"
    assert details.committee_id is None
    assert details.issuance_exists is True
    assert details.department == "Human Resources"
    assert details.status == "ISSUED"
    assert details.version_number == 2
    assert details.letter_number == 1

    await letters_svc.revoke_letter(letter.id, admin, store, audit, reason="Withdrawn")
    result = await verification_svc.verify(token, store)

    assert result.valid is False
    assert result.status == VerificationStatus.REVOKED
    assert result.message == REVOKED_MESSAGE


async def test_verify_by_content_hash(store, audit, author, approver, issuer, renderer):
    """Verify the fingerprint resolves to the same verdict as the token."""
    _, outcome = await _issue(store, audit, author, approver, issuer, renderer)

    by_hash = await verification_svc.verify(outcome.receipt.issuance.content_hash.upper(), store)
    by_token = await verification_svc.verify(outcome.receipt.verification_token, store)

    assert by_hash == by_token


async def test_committee_letter_reports_committee(store, audit, author, issuer, admin, renderer):
    letter = await letters_svc.create_letter(
        author,
        store,
        audit,
        context=LetterContext.COMPANY,
        department_id="dept-9",
        content="Board resolution",
        committee_id="committee-1",
    )
    await letters_svc.committee_approve_letter(letter.id, admin, store, audit)
    outcome = await issue_letter(
        letter.id, issuer, store, audit, renderer, verify_base_url="https://v.example.com"
    )

    result = await verification_svc.verify(outcome.receipt.verification_token, store)

    assert result.document_details.approved_via == ApprovedVia.COMMITTEE
    assert result.document_details.committee_id == "committee-1"


async def test_unknown_and_malformed_keys_are_indistinguishable(store):
    unknown = await verification_svc.verify("0" * 64, store)
    malformed = await verification_svc.verify("not a key", store)

    assert unknown == malformed
    assert unknown.valid is False
    assert unknown.status == VerificationStatus.INVALID
    assert unknown.message == INVALID_MESSAGE
    assert unknown.document_details is None
