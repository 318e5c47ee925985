"""Public verification — resolve a verification key to a verdict."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from letter_issuance.integrity.keys import VerificationKey
from letter_issuance.integrity.verdict import (
    VerificationSnapshot,
    build_verification_response,
    invalid_verdict,
)

if TYPE_CHECKING:
    from letter_issuance.database.store import LetterStore
    from letter_issuance.models.verification import VerificationResult

logger = logging.getLogger(__name__)


async def verify(raw_key: str, store: LetterStore) -> VerificationResult:
    """Look up an issued document by fingerprint or token and judge it.

    Malformed keys, unknown keys and dangling issuances all produce the same
    invalid verdict.
    """
    key = VerificationKey.parse(raw_key)
    if key is None:
        return invalid_verdict()

    issuance = await store.issuances.get_by_key(key)
    if issuance is None:
        logger.info("Verification miss — kind=%s", key.kind)
        return invalid_verdict()

    letter = await store.letters.get_letter(issuance.letter_id)
    if letter is None:
        logger.warning(
            "Issuance without letter — issuance=%s letter=%s",
            issuance.id,
            issuance.letter_id,
        )
        return invalid_verdict()

    department, approvals = await asyncio.gather(
        store.departments.get(letter.department_id, letter.department_id),
        store.approvals.list_by_letter(letter.id),
    )
    result = build_verification_response(
        VerificationSnapshot(
            letter=letter,
            version_number=issuance.version_number,
            department_name=department.name if department else None,
            approvals=approvals,
            issuances=[issuance],
        )
    )
    logger.info(
        "Verification — kind=%s letter=%s status=%s", key.kind, letter.id, result.status
    )
    return result
