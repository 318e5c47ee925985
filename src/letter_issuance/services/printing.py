"""Printing — print counting, reprint requests and delivery acknowledgements."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from letter_issuance.auth.actor import Role, require_roles
from letter_issuance.errors import AuthorizationError, LetterValidationError, NotFoundError
from letter_issuance.models.acknowledgement import Acknowledgement
from letter_issuance.models.audit_log import AuditAction
from letter_issuance.models.issuance import Issuance, IssuanceChannel
from letter_issuance.models.letter import Letter, LetterStatus
from letter_issuance.models.print_request import PrintRequest, PrintRequestStatus

if TYPE_CHECKING:
    from letter_issuance.auth.actor import Actor
    from letter_issuance.database.store import LetterStore
    from letter_issuance.services.audit import AuditTrail

logger = logging.getLogger(__name__)


async def _issued(letter_id: str, store: LetterStore) -> tuple[Letter, Issuance]:
    letter = await store.letters.get_letter(letter_id)
    if letter is None:
        raise NotFoundError("Letter not found")
    if letter.status != LetterStatus.ISSUED:
        raise LetterValidationError("Only ISSUED letters can be printed.")
    issuance = await store.issuances.get_by_letter(letter_id)
    if issuance is None:
        raise NotFoundError("Issuance not found")
    return letter, issuance


async def record_print(
    letter_id: str,
    actor: Actor,
    store: LetterStore,
    audit: AuditTrail,
) -> Issuance:
    """Count one print of an issued letter, refusing once the limit is reached."""
    require_roles(actor, Role.ISSUER, Role.ADMIN, action="print letters")
    letter, issuance = await _issued(letter_id, store)
    if issuance.channel != IssuanceChannel.PRINT:
        raise LetterValidationError("Letter was not issued for printing.")
    if issuance.prints_remaining <= 0:
        raise AuthorizationError("Print limit reached. Submit a reprint request.")

    issuance.print_count += 1
    await store.issuances.update(issuance, letter_id)
    logger.info(
        "Letter printed — letter=%s print=%d/%d",
        letter_id,
        issuance.print_count,
        issuance.max_prints,
    )
    await audit.record(
        AuditAction.PRINT,
        letter,
        actor.id,
        print_count=issuance.print_count,
        max_prints=issuance.max_prints,
    )
    return issuance


async def request_reprint(
    letter_id: str,
    actor: Actor,
    store: LetterStore,
    audit: AuditTrail,
    *,
    reason: str | None,
) -> PrintRequest:
    if reason is None or not reason.strip():
        raise LetterValidationError("A reprint reason is required.")
    letter, issuance = await _issued(letter_id, store)

    request = PrintRequest(
        letter_id=letter_id,
        issuance_id=issuance.id,
        requested_by=actor.id,
        reason=reason.strip(),
    )
    await store.print_requests.create(request)
    await audit.record(
        AuditAction.REPRINT_REQUEST,
        letter,
        actor.id,
        print_request_id=request.id,
        reason=request.reason,
    )
    return request


async def _pending_request(
    letter_id: str, request_id: str, store: LetterStore
) -> tuple[Letter, PrintRequest]:
    letter = await store.letters.get_letter(letter_id)
    if letter is None:
        raise NotFoundError("Letter not found")
    request = await store.print_requests.get(request_id, letter_id)
    if request is None or request.type != "print_request":
        raise NotFoundError("Print request not found")
    if request.status != PrintRequestStatus.PENDING:
        raise LetterValidationError("Print request has already been decided.")
    return letter, request


def _decide(request: PrintRequest, status: PrintRequestStatus, actor: Actor) -> None:
    request.status = status
    request.decided_by = actor.id
    request.decided_at = datetime.now(UTC)


async def approve_reprint(
    letter_id: str,
    request_id: str,
    actor: Actor,
    store: LetterStore,
    audit: AuditTrail,
) -> Issuance:
    """Grant one more print: raises the issuance limit and closes the request together."""
    require_roles(actor, Role.ADMIN, action="approve reprints")
    letter, request = await _pending_request(letter_id, request_id, store)
    if letter.status != LetterStatus.ISSUED:
        raise LetterValidationError("Reprints can only be approved for ISSUED letters.")
    issuance = await store.issuances.get_by_letter(letter_id)
    if issuance is None:
        raise NotFoundError("Issuance not found")

    issuance.max_prints += 1
    _decide(request, PrintRequestStatus.APPROVED, actor)
    await store.letters.commit_if_version(
        letter, letter.current_version, replace=[issuance, request]
    )
    await audit.record(
        AuditAction.REPRINT_APPROVE,
        letter,
        actor.id,
        print_request_id=request.id,
        max_prints=issuance.max_prints,
    )
    return issuance


async def deny_reprint(
    letter_id: str,
    request_id: str,
    actor: Actor,
    store: LetterStore,
    audit: AuditTrail,
) -> PrintRequest:
    require_roles(actor, Role.ADMIN, action="deny reprints")
    letter, request = await _pending_request(letter_id, request_id, store)

    _decide(request, PrintRequestStatus.DENIED, actor)
    await store.letters.commit_if_version(letter, letter.current_version, replace=[request])
    await audit.record(
        AuditAction.REPRINT_DENY,
        letter,
        actor.id,
        print_request_id=request.id,
    )
    return request


async def record_acknowledgement(
    letter_id: str,
    actor: Actor,
    store: LetterStore,
    audit: AuditTrail,
    *,
    job_reference: str,
    file_url: str | None = None,
) -> Acknowledgement:
    """Record proof that an issued letter reached its recipient."""
    if not job_reference or not job_reference.strip():
        raise LetterValidationError("job_reference is required.")
    letter = await store.letters.get_letter(letter_id)
    if letter is None:
        raise NotFoundError("Letter not found")

    acknowledgement = Acknowledgement(
        letter_id=letter_id,
        job_reference=job_reference.strip(),
        file_url=file_url,
        captured_by=actor.id,
    )
    await store.acknowledgements.create(acknowledgement)
    await audit.record(
        AuditAction.ACKNOWLEDGE,
        letter,
        actor.id,
        job_reference=acknowledgement.job_reference,
        file_url=file_url,
    )
    return acknowledgement
