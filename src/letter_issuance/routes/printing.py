"""Printing routes — print counting, reprint requests and acknowledgements."""

from __future__ import annotations

from fastapi import APIRouter, Request, status
from pydantic import BaseModel

from letter_issuance.auth.middleware import require_actor
from letter_issuance.models.acknowledgement import Acknowledgement
from letter_issuance.models.issuance import Issuance
from letter_issuance.models.print_request import PrintRequest
from letter_issuance.routes.deps import get_audit, get_store
from letter_issuance.services import printing as printing_svc

router = APIRouter(prefix="/api", tags=["printing"])


class ReprintBody(BaseModel):
    reason: str | None = None


class AcknowledgementBody(BaseModel):
    letter_id: str
    job_reference: str
    file_url: str | None = None


@router.post("/letters/{letter_id}/print")
async def record_print(request: Request, letter_id: str) -> Issuance:
    actor = require_actor(request)
    store = get_store(request)
    return await printing_svc.record_print(letter_id, actor, store, get_audit(request, store))


@router.post("/letters/{letter_id}/reprint-request", status_code=status.HTTP_201_CREATED)
async def request_reprint(
    request: Request, letter_id: str, body: ReprintBody
) -> PrintRequest:
    actor = require_actor(request)
    store = get_store(request)
    return await printing_svc.request_reprint(
        letter_id, actor, store, get_audit(request, store), reason=body.reason
    )


@router.post("/letters/{letter_id}/print-requests/{request_id}/approve")
async def approve_reprint(request: Request, letter_id: str, request_id: str) -> Issuance:
    actor = require_actor(request)
    store = get_store(request)
    return await printing_svc.approve_reprint(
        letter_id, request_id, actor, store, get_audit(request, store)
    )


@router.post("/letters/{letter_id}/print-requests/{request_id}/deny")
async def deny_reprint(request: Request, letter_id: str, request_id: str) -> PrintRequest:
    actor = require_actor(request)
    store = get_store(request)
    return await printing_svc.deny_reprint(
        letter_id, request_id, actor, store, get_audit(request, store)
    )


@router.post("/acknowledgements", status_code=status.HTTP_201_CREATED)
async def record_acknowledgement(
    request: Request, body: AcknowledgementBody
) -> Acknowledgement:
    actor = require_actor(request)
    store = get_store(request)
    return await printing_svc.record_acknowledgement(
        body.letter_id,
        actor,
        store,
        get_audit(request, store),
        job_reference=body.job_reference,
        file_url=body.file_url,
    )
