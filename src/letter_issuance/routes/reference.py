"""Reference data routes — departments, committees, tags and the audit log."""

from __future__ import annotations

from fastapi import APIRouter, Query, Request

from letter_issuance.auth.actor import Role, require_roles
from letter_issuance.auth.middleware import require_actor
from letter_issuance.models.audit_log import AuditLog
from letter_issuance.models.letter import LetterContext
from letter_issuance.models.reference import Committee, Department, Tag
from letter_issuance.routes.deps import get_store

router = APIRouter(prefix="/api", tags=["reference"])


@router.get("/departments")
async def list_departments(
    request: Request, context: LetterContext | None = None
) -> list[Department]:
    require_actor(request)
    return await get_store(request).departments.list_by_context(context)


@router.get("/committees")
async def list_committees(
    request: Request, context: LetterContext | None = None
) -> list[Committee]:
    require_actor(request)
    return await get_store(request).committees.list_by_context(context)


@router.get("/tags")
async def list_tags(request: Request, context: LetterContext | None = None) -> list[Tag]:
    require_actor(request)
    return await get_store(request).tags.list_by_context(context)


@router.get("/audit-logs")
async def list_audit_logs(
    request: Request, limit: int = Query(default=50, ge=1, le=500)
) -> list[AuditLog]:
    """Most recent audit entries, newest first."""
    actor = require_actor(request)
    require_roles(actor, Role.ADMIN, action="view audit logs")
    return await get_store(request).audit_logs.list_recent(limit)
