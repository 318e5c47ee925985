"""Audit trail — persisted audit entries plus lifecycle events."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from letter_issuance.errors import PersistenceError
from letter_issuance.events.contracts import LetterEvent
from letter_issuance.models.audit_log import AuditAction, AuditLog

if TYPE_CHECKING:
    from letter_issuance.database.repositories.audit_logs import AuditLogRepository
    from letter_issuance.events import EventPublisher
    from letter_issuance.models.letter import Letter

logger = logging.getLogger(__name__)

_EVENT_NAMES = {
    AuditAction.CREATE: "letter-created",
    AuditAction.UPDATE: "letter-updated",
    AuditAction.APPROVE: "letter-approved",
    AuditAction.COMMITTEE_APPROVE: "letter-approved",
    AuditAction.REJECT: "letter-rejected",
    AuditAction.REVOKE: "letter-revoked",
    AuditAction.ISSUE: "letter-issued",
    AuditAction.PRINT: "letter-printed",
}


class AuditTrail:
    """Record workflow transitions after they have been committed.

    Entries are written after the letter batch commits, so a failure here is
    logged rather than raised: the transition itself has already happened.
    """

    def __init__(
        self,
        audit_logs: AuditLogRepository,
        events: EventPublisher | None = None,
    ) -> None:
        self._audit_logs = audit_logs
        self._events = events

    async def record(
        self,
        action: AuditAction,
        letter: Letter,
        actor_id: str | None,
        **metadata: Any,
    ) -> None:
        entry = AuditLog(
            action=action,
            entity_id=letter.id,
            actor_id=actor_id,
            metadata=metadata,
        )
        try:
            await self._audit_logs.create(entry)
        except PersistenceError:
            logger.error(
                "Failed to write audit entry — action=%s letter=%s",
                action,
                letter.id,
                exc_info=True,
            )

        event_name = _EVENT_NAMES.get(action)
        if self._events is not None and event_name is not None:
            event = LetterEvent(
                letter_id=letter.id,
                action=action,
                actor_id=actor_id,
                status=letter.status,
                version_number=letter.current_version,
            )
            await self._events.publish(event_name, event.model_dump(mode="json"))
