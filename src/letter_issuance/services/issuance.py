"""Issuance — freeze the approved version and commit exactly one issuance per letter."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from letter_issuance.auth.actor import Role, require_roles
from letter_issuance.errors import (
    IssuanceConflictError,
    LetterValidationError,
    NotFoundError,
    PersistenceError,
    VersionConflictError,
)
from letter_issuance.integrity.fingerprint import build_content_hash
from letter_issuance.integrity.keys import new_verification_token
from letter_issuance.integrity.tags import normalize_tag_ids
from letter_issuance.models.audit_log import AuditAction
from letter_issuance.models.issuance import DocumentStatus, Issuance, IssuanceChannel
from letter_issuance.models.letter import Letter, LetterStatus
from letter_issuance.services.versions import build_version

if TYPE_CHECKING:
    from letter_issuance.auth.actor import Actor
    from letter_issuance.database.repositories.issuances import IssuanceRepository
    from letter_issuance.database.repositories.letters import LetterRepository
    from letter_issuance.database.store import LetterStore
    from letter_issuance.services.audit import AuditTrail
    from letter_issuance.services.rendering import DocumentRenderer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IssuanceReceipt:
    issuance: Issuance
    letter: Letter
    replayed: bool = False

    @property
    def verification_token(self) -> str:
        return self.issuance.verification_token


@dataclass(frozen=True)
class IssueOutcome:
    """What the issue endpoint reports back, including the rendering result."""

    receipt: IssuanceReceipt
    verify_url: str
    document: str | None

    @property
    def document_status(self) -> DocumentStatus:
        return self.receipt.issuance.document_status


def letter_number_counter(letter: Letter) -> str:
    return f"letter-number:{letter.context}"


def build_verify_url(base_url: str, token: str) -> str:
    return f"{base_url.rstrip('/')}/{token}"


class IssuanceCoordinator:
    """Commit an issuance as one atomic unit guarded by the expected version.

    The letter flip to ISSUED, the frozen version and the issuance record go
    out in a single batch. The issuance id is derived from the letter id, so a
    second issuance of the same letter can never be stored; a caller that
    loses that race gets the winner's issuance back.
    """

    def __init__(self, letters: LetterRepository, issuances: IssuanceRepository) -> None:
        self._letters = letters
        self._issuances = issuances

    async def _existing(self, letter: Letter) -> IssuanceReceipt:
        issuance = await self._issuances.get_by_letter(letter.id)
        if issuance is None:
            raise PersistenceError(f"Letter {letter.id} is ISSUED but has no issuance record")
        logger.info(
            "Issuance replayed — letter=%s issuance=%s", letter.id, issuance.id
        )
        return IssuanceReceipt(issuance=issuance, letter=letter, replayed=True)

    async def issue(
        self,
        letter_id: str,
        issuer_id: str,
        expected_version: int,
        fingerprint: str,
        channel: IssuanceChannel,
        token: str,
        *,
        letter_number: int | None = None,
        max_prints: int = 1,
    ) -> IssuanceReceipt:
        letter = await self._letters.get_letter(letter_id)
        if letter is None:
            raise NotFoundError("Letter not found")
        if letter.status == LetterStatus.ISSUED:
            return await self._existing(letter)
        if letter.status != LetterStatus.APPROVED:
            raise LetterValidationError("Letter must be APPROVED to issue.")
        if letter.current_version != expected_version:
            raise IssuanceConflictError(
                f"Letter {letter_id} is at version {letter.current_version}, "
                f"expected {expected_version}"
            )

        frozen_number = expected_version + 1
        version = build_version(
            letter_id,
            frozen_number,
            letter.content,
            issuer_id,
            fingerprint=fingerprint,
            verification_token=token,
        )
        issuance = Issuance(
            letter_id=letter_id,
            version_number=frozen_number,
            issued_by=issuer_id,
            channel=channel,
            content_hash=fingerprint,
            verification_token=token,
            letter_number=letter_number,
            max_prints=max_prints,
        )

        def apply(target: Letter) -> None:
            target.status = LetterStatus.ISSUED
            target.current_version = frozen_number
            if letter_number is not None and target.letter_number is None:
                target.letter_number = letter_number

        try:
            await self._letters.commit_if_version(
                letter, expected_version, apply, create=[version, issuance]
            )
        except VersionConflictError as exc:
            current = await self._letters.get_letter(letter_id)
            if current is not None and current.status == LetterStatus.ISSUED:
                return await self._existing(current)
            raise IssuanceConflictError(
                f"Letter {letter_id} changed while it was being issued"
            ) from exc

        logger.info(
            "Letter issued — letter=%s version=%d issuance=%s",
            letter_id,
            frozen_number,
            issuance.id,
        )
        return IssuanceReceipt(issuance=issuance, letter=letter)


async def issue_letter(
    letter_id: str,
    actor: Actor,
    store: LetterStore,
    audit: AuditTrail,
    renderer: DocumentRenderer,
    *,
    channel: IssuanceChannel = IssuanceChannel.PRINT,
    verify_base_url: str,
    max_prints: int = 1,
) -> IssueOutcome:
    """Fingerprint the approved letter, commit its issuance and render the document.

    A rendering failure does not undo the issuance: the issuance is marked
    ``document_status=failed`` and the outcome carries no document.
    """
    require_roles(actor, Role.ISSUER, Role.ADMIN, action="issue letters")

    letter = await store.letters.get_letter(letter_id)
    if letter is None:
        raise NotFoundError("Letter not found")

    coordinator = IssuanceCoordinator(store.letters, store.issuances)
    expected = letter.current_version
    letter_number = letter.letter_number
    if letter.status == LetterStatus.APPROVED and letter_number is None:
        letter_number = await store.counters.next_value(letter_number_counter(letter))

    fingerprint = build_content_hash(
        letter_id=letter.id,
        version_number=expected + 1,
        context=str(letter.context),
        department_id=letter.department_id,
        tag_ids=normalize_tag_ids(letter.tag_ids),
        content=letter.content,
    )
    receipt = await coordinator.issue(
        letter_id,
        actor.id,
        expected,
        fingerprint,
        channel,
        new_verification_token(),
        letter_number=letter_number,
        max_prints=max_prints,
    )
    verify_url = build_verify_url(verify_base_url, receipt.verification_token)
    if receipt.replayed:
        return IssueOutcome(receipt=receipt, verify_url=verify_url, document=None)

    await audit.record(
        AuditAction.ISSUE,
        receipt.letter,
        actor.id,
        channel=str(channel),
        content_hash=receipt.issuance.content_hash,
        letter_number=receipt.issuance.letter_number,
    )

    document: str | None
    try:
        department = await store.departments.get(letter.department_id, letter.department_id)
        document = renderer.render_letter(
            receipt.letter,
            receipt.issuance,
            department_name=department.name if department else None,
            verify_url=verify_url,
        )
    except Exception:  # noqa: BLE001
        logger.error(
            "Document rendering failed — letter=%s issuance=%s",
            letter_id,
            receipt.issuance.id,
            exc_info=True,
        )
        document = None

    issuance = receipt.issuance
    issuance.document_status = (
        DocumentStatus.READY if document is not None else DocumentStatus.FAILED
    )
    try:
        await store.issuances.update(issuance, letter_id)
    except (PersistenceError, VersionConflictError):
        logger.warning(
            "Could not record document status — issuance=%s status=%s",
            issuance.id,
            issuance.document_status,
            exc_info=True,
        )

    return IssueOutcome(receipt=receipt, verify_url=verify_url, document=document)
