"""Letter workflow — drafting, editing, approval, rejection and revocation."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from letter_issuance.auth.actor import Role, require_roles
from letter_issuance.errors import (
    AuthorizationError,
    LetterValidationError,
    NotFoundError,
)
from letter_issuance.integrity.tags import normalize_tag_ids
from letter_issuance.models.approval import CommitteeApproval, DirectApproval
from letter_issuance.models.audit_log import AuditAction
from letter_issuance.models.letter import Letter, LetterContext, LetterStatus
from letter_issuance.services.versions import VersionLedger

if TYPE_CHECKING:
    from letter_issuance.auth.actor import Actor
    from letter_issuance.database.store import LetterStore
    from letter_issuance.models.version import LetterVersion
    from letter_issuance.services.audit import AuditTrail

logger = logging.getLogger(__name__)

COMMITTEE_ROUTE_MESSAGE = (
    "This letter is assigned to a committee. Use the Committee Approval endpoint."
)


def _require_content(content: str | None) -> str:
    if content is None or not content.strip():
        raise LetterValidationError("content is required.")
    return content


async def _load(letter_id: str, store: LetterStore) -> Letter:
    letter = await store.letters.get_letter(letter_id)
    if letter is None:
        raise NotFoundError("Letter not found")
    return letter


async def _check_references(
    store: LetterStore,
    context: LetterContext,
    department_id: str | None,
    committee_id: str | None,
    tag_ids: list[str] | None = None,
) -> None:
    if department_id is not None:
        department = await store.departments.get(department_id, department_id)
        if department is None or department.context != context:
            raise LetterValidationError(f"Unknown department for {context}: {department_id}")
    if committee_id is not None:
        committee = await store.committees.get(committee_id, committee_id)
        if committee is None or committee.context != context:
            raise LetterValidationError(f"Unknown committee for {context}: {committee_id}")
    if tag_ids:
        known = {tag.id for tag in await store.tags.list_by_context(context)}
        unknown = [tag_id for tag_id in tag_ids if tag_id not in known]
        if unknown:
            raise LetterValidationError(f"Unknown tags for {context}: {', '.join(unknown)}")


async def create_letter(
    actor: Actor,
    store: LetterStore,
    audit: AuditTrail,
    *,
    context: LetterContext,
    department_id: str,
    content: str,
    tag_ids: Any = None,
    committee_id: str | None = None,
) -> Letter:
    """Create a DRAFT letter together with version 1 of its content."""
    content = _require_content(content)
    if not department_id:
        raise LetterValidationError("department_id is required.")
    tags = normalize_tag_ids(tag_ids)
    await _check_references(store, context, department_id, committee_id, tags)

    letter = Letter(
        context=context,
        department_id=department_id,
        tag_ids=tags,
        content=content,
        committee_id=committee_id,
        created_by=actor.id,
    )
    await VersionLedger(store.letters, store.versions).start(letter, actor.id)
    await audit.record(
        AuditAction.CREATE,
        letter,
        actor.id,
        context=str(context),
        department_id=department_id,
        tag_count=len(letter.tag_ids),
    )
    return letter


async def edit_letter(
    letter_id: str,
    actor: Actor,
    store: LetterStore,
    audit: AuditTrail,
    *,
    content: str,
    department_id: str | None = None,
    tag_ids: Any = None,
) -> tuple[Letter, LetterVersion]:
    """Replace the content of a DRAFT letter and record it as the next version.

    ``department_id`` and ``tag_ids`` are left unchanged when omitted.
    """
    content = _require_content(content)
    current = await _load(letter_id, store)
    tags = normalize_tag_ids(tag_ids) if tag_ids is not None else None
    await _check_references(store, current.context, department_id, None, tags)

    def guard(letter: Letter) -> None:
        if not letter.is_editable:
            raise LetterValidationError("Only DRAFT letters can be edited.")
        if letter.created_by != actor.id and not actor.is_admin:
            raise AuthorizationError("User does not have permission to edit this letter.")

    def mutation(letter: Letter) -> None:
        if department_id is not None:
            letter.department_id = department_id
        if tags is not None:
            letter.tag_ids = tags

    ledger = VersionLedger(store.letters, store.versions)
    letter, version = await ledger.record_version(
        letter_id, content, actor.id, guard=guard, mutation=mutation
    )
    await audit.record(
        AuditAction.UPDATE,
        letter,
        actor.id,
        department_id=letter.department_id,
        content_length=len(content),
        version_number=version.version_number,
    )
    return letter, version


async def list_letters(
    store: LetterStore,
    *,
    context: LetterContext | None = None,
    page: int = 1,
    limit: int = 50,
) -> list[Letter]:
    return await store.letters.list_page(context=context, page=page, limit=limit)


async def get_letter(letter_id: str, store: LetterStore) -> Letter:
    return await _load(letter_id, store)


async def list_versions(letter_id: str, store: LetterStore) -> list[LetterVersion]:
    await _load(letter_id, store)
    return await store.versions.list_by_letter(letter_id)


async def approve_letter(
    letter_id: str,
    actor: Actor,
    store: LetterStore,
    audit: AuditTrail,
    *,
    comment: str | None = None,
) -> Letter:
    """Approve a DRAFT letter directly. Committee letters must use committee approval."""
    require_roles(actor, Role.APPROVER, Role.ADMIN, action="approve letters")
    letter = await _load(letter_id, store)
    if letter.committee_id:
        raise AuthorizationError(COMMITTEE_ROUTE_MESSAGE)
    if letter.status != LetterStatus.DRAFT:
        raise LetterValidationError("Letter is not in DRAFT status")

    approval = DirectApproval(letter_id=letter.id, approver_id=actor.id, comment=comment)

    def apply(target: Letter) -> None:
        target.status = LetterStatus.APPROVED

    await store.letters.commit_if_version(
        letter, letter.current_version, apply, create=[approval]
    )
    logger.info("Letter approved — letter=%s approver=%s", letter.id, actor.id)
    await audit.record(AuditAction.APPROVE, letter, actor.id, approver_id=actor.id)
    return letter


async def committee_approve_letter(
    letter_id: str,
    actor: Actor,
    store: LetterStore,
    audit: AuditTrail,
    *,
    comment: str | None = None,
) -> Letter:
    """Approve a DRAFT letter on behalf of its assigned committee."""
    letter = await _load(letter_id, store)
    if not letter.committee_id:
        raise LetterValidationError("Letter is not assigned to a committee.")
    if letter.status != LetterStatus.DRAFT:
        raise LetterValidationError("Letter is not in DRAFT status")

    committee = await store.committees.get(letter.committee_id, letter.committee_id)
    if not actor.is_admin and (committee is None or not committee.has_member(actor.id)):
        raise AuthorizationError("User is not a member of the assigned committee.")

    approval = CommitteeApproval(
        letter_id=letter.id,
        committee_id=letter.committee_id,
        approver_id=actor.id,
        comment=comment,
    )

    def apply(target: Letter) -> None:
        target.status = LetterStatus.APPROVED

    await store.letters.commit_if_version(
        letter, letter.current_version, apply, create=[approval]
    )
    logger.info(
        "Letter approved by committee — letter=%s committee=%s approver=%s",
        letter.id,
        letter.committee_id,
        actor.id,
    )
    await audit.record(
        AuditAction.COMMITTEE_APPROVE,
        letter,
        actor.id,
        committee_id=letter.committee_id,
        approver_id=actor.id,
    )
    return letter


async def reject_letter(
    letter_id: str,
    actor: Actor,
    store: LetterStore,
    audit: AuditTrail,
    *,
    reason: str | None,
) -> Letter:
    require_roles(actor, Role.APPROVER, Role.ADMIN, action="reject letters")
    if reason is None or not reason.strip():
        raise LetterValidationError("A rejection reason is required.")
    reason = reason.strip()
    letter = await _load(letter_id, store)
    if letter.status not in (LetterStatus.DRAFT, LetterStatus.APPROVED):
        raise LetterValidationError("Only DRAFT or APPROVED letters can be rejected.")

    def apply(target: Letter) -> None:
        target.status = LetterStatus.REJECTED
        target.rejection_reason = reason
        target.rejected_at = datetime.now(UTC)

    await store.letters.commit_if_version(letter, letter.current_version, apply)
    logger.info("Letter rejected — letter=%s actor=%s", letter.id, actor.id)
    await audit.record(AuditAction.REJECT, letter, actor.id, reason=letter.rejection_reason)
    return letter


async def revoke_letter(
    letter_id: str,
    actor: Actor,
    store: LetterStore,
    audit: AuditTrail,
    *,
    reason: str | None = None,
) -> Letter:
    """Revoke an APPROVED or ISSUED letter. Verification reports it as revoked from then on."""
    require_roles(actor, Role.ISSUER, Role.ADMIN, action="revoke letters")
    letter = await _load(letter_id, store)
    if letter.status not in (LetterStatus.APPROVED, LetterStatus.ISSUED):
        raise LetterValidationError("Only APPROVED or ISSUED letters can be revoked.")

    def apply(target: Letter) -> None:
        target.status = LetterStatus.REVOKED
        target.revoked_at = datetime.now(UTC)
        target.revoked_by = actor.id
        target.revocation_reason = reason

    await store.letters.commit_if_version(letter, letter.current_version, apply)
    logger.info("Letter revoked — letter=%s actor=%s", letter.id, actor.id)
    await audit.record(AuditAction.REVOKE, letter, actor.id, reason=reason)
    return letter
