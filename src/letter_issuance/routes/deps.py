"""Per-request access to the store, audit trail and renderer held on app state."""

from __future__ import annotations

from typing import TYPE_CHECKING

from letter_issuance.database.store import LetterStore
from letter_issuance.services.audit import AuditTrail

if TYPE_CHECKING:
    from fastapi import Request


def get_store(request: Request) -> LetterStore:
    return LetterStore.from_database(request.app.state.cosmos.database)


def get_audit(request: Request, store: LetterStore) -> AuditTrail:
    return AuditTrail(store.audit_logs, getattr(request.app.state, "event_publisher", None))
