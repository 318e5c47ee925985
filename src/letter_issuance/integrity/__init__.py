"""Content integrity primitives — tags, fingerprints, reconciliation, verdicts."""

from letter_issuance.integrity.fingerprint import build_content_hash, hash_content
from letter_issuance.integrity.keys import (
    VerificationKey,
    VerificationKeyKind,
    new_verification_token,
)
from letter_issuance.integrity.reconcile import ReconciledApproval, reconcile_approvals
from letter_issuance.integrity.tags import normalize_tag_ids
from letter_issuance.integrity.verdict import (
    VerificationSnapshot,
    build_verification_response,
    invalid_verdict,
)

__all__ = [
    "ReconciledApproval",
    "VerificationKey",
    "VerificationKeyKind",
    "VerificationSnapshot",
    "build_content_hash",
    "build_verification_response",
    "hash_content",
    "invalid_verdict",
    "new_verification_token",
    "normalize_tag_ids",
    "reconcile_approvals",
]
