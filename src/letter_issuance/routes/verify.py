"""Public verification route."""

from __future__ import annotations

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from letter_issuance.auth.middleware import require_verify_access
from letter_issuance.models.verification import VerificationStatus
from letter_issuance.routes.deps import get_store
from letter_issuance.services import verification as verification_svc

router = APIRouter(prefix="/api/verify", tags=["verify"])


@router.get("/{key}")
async def verify_document(request: Request, key: str) -> JSONResponse:
    """Return the verdict for a fingerprint or verification token.

    Unknown and non-verifiable documents answer 404 with the generic invalid
    verdict; valid and revoked documents answer 200.
    """
    require_verify_access(request)
    result = await verification_svc.verify(key, get_store(request))
    status_code = (
        status.HTTP_404_NOT_FOUND
        if result.status == VerificationStatus.INVALID
        else status.HTTP_200_OK
    )
    return JSONResponse(result.model_dump(mode="json"), status_code=status_code)
