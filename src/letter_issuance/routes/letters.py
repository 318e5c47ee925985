"""Letter routes — drafting, listing, approval, rejection, revocation and issuance."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Query, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from letter_issuance.auth.middleware import require_actor
from letter_issuance.models.issuance import IssuanceChannel
from letter_issuance.models.letter import Letter, LetterContext
from letter_issuance.models.version import LetterVersion
from letter_issuance.routes.deps import get_audit, get_store
from letter_issuance.services import issuance as issuance_svc
from letter_issuance.services import letters as letters_svc

router = APIRouter(prefix="/api/letters", tags=["letters"])

logger = logging.getLogger(__name__)


class LetterDraftBody(BaseModel):
    context: LetterContext
    department_id: str
    content: str
    tag_ids: Any = None
    committee_id: str | None = None


class LetterEditBody(BaseModel):
    content: str
    department_id: str | None = None
    tag_ids: Any = None


class CommentBody(BaseModel):
    comment: str | None = None


class ReasonBody(BaseModel):
    reason: str | None = None


class IssueBody(BaseModel):
    channel: IssuanceChannel = IssuanceChannel.PRINT


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_letter(request: Request, body: LetterDraftBody) -> Letter:
    """Create a DRAFT letter and its first version."""
    actor = require_actor(request)
    store = get_store(request)
    letter = await letters_svc.create_letter(
        actor,
        store,
        get_audit(request, store),
        context=body.context,
        department_id=body.department_id,
        content=body.content,
        tag_ids=body.tag_ids,
        committee_id=body.committee_id,
    )
    logger.info("Letter created — letter=%s actor=%s", letter.id, actor.id)
    return letter


@router.get("")
async def list_letters(
    request: Request,
    context: LetterContext | None = None,
    page: int = Query(default=1, ge=1, le=10_000),
    limit: int = Query(default=50, ge=1, le=500),
) -> list[Letter]:
    require_actor(request)
    return await letters_svc.list_letters(
        get_store(request), context=context, page=page, limit=limit
    )


@router.get("/{letter_id}")
async def get_letter(request: Request, letter_id: str) -> Letter:
    require_actor(request)
    return await letters_svc.get_letter(letter_id, get_store(request))


@router.put("/{letter_id}")
async def edit_letter(request: Request, letter_id: str, body: LetterEditBody) -> Letter:
    """Edit a DRAFT letter; every edit becomes a new version."""
    actor = require_actor(request)
    store = get_store(request)
    letter, _version = await letters_svc.edit_letter(
        letter_id,
        actor,
        store,
        get_audit(request, store),
        content=body.content,
        department_id=body.department_id,
        tag_ids=body.tag_ids,
    )
    return letter


@router.get("/{letter_id}/versions")
async def list_versions(request: Request, letter_id: str) -> list[LetterVersion]:
    require_actor(request)
    return await letters_svc.list_versions(letter_id, get_store(request))


@router.post("/{letter_id}/approve")
async def approve_letter(
    request: Request, letter_id: str, body: CommentBody | None = None
) -> dict[str, str]:
    actor = require_actor(request)
    store = get_store(request)
    await letters_svc.approve_letter(
        letter_id,
        actor,
        store,
        get_audit(request, store),
        comment=body.comment if body else None,
    )
    return {"message": "Letter approved successfully"}


@router.post("/{letter_id}/committee-approve")
async def committee_approve_letter(
    request: Request, letter_id: str, body: CommentBody | None = None
) -> dict[str, str]:
    actor = require_actor(request)
    store = get_store(request)
    await letters_svc.committee_approve_letter(
        letter_id,
        actor,
        store,
        get_audit(request, store),
        comment=body.comment if body else None,
    )
    return {"message": "Letter approved by Committee successfully"}


@router.post("/{letter_id}/reject")
async def reject_letter(request: Request, letter_id: str, body: ReasonBody) -> Letter:
    actor = require_actor(request)
    store = get_store(request)
    return await letters_svc.reject_letter(
        letter_id, actor, store, get_audit(request, store), reason=body.reason
    )


@router.post("/{letter_id}/revoke")
async def revoke_letter(
    request: Request, letter_id: str, body: ReasonBody | None = None
) -> Letter:
    actor = require_actor(request)
    store = get_store(request)
    return await letters_svc.revoke_letter(
        letter_id,
        actor,
        store,
        get_audit(request, store),
        reason=body.reason if body else None,
    )


@router.post("/{letter_id}/issue")
async def issue_letter(
    request: Request, letter_id: str, body: IssueBody | None = None
) -> JSONResponse:
    """Issue an APPROVED letter; repeating the call returns the original issuance."""
    actor = require_actor(request)
    settings = request.app.state.settings
    store = get_store(request)
    outcome = await issuance_svc.issue_letter(
        letter_id,
        actor,
        store,
        get_audit(request, store),
        request.app.state.renderer,
        channel=body.channel if body else IssuanceChannel.PRINT,
        verify_base_url=settings.app.verify_base_url,
        max_prints=settings.app.default_max_prints,
    )
    issuance = outcome.receipt.issuance
    return JSONResponse(
        {
            "message": "Letter already issued" if outcome.receipt.replayed else "Letter issued",
            "issuance_id": issuance.id,
            "letter_number": issuance.letter_number,
            "version_number": issuance.version_number,
            "content_hash": issuance.content_hash,
            "verification_token": issuance.verification_token,
            "verify_url": outcome.verify_url,
            "document": outcome.document,
            "document_status": str(outcome.document_status),
            "replayed": outcome.receipt.replayed,
        }
    )
