"""Request authentication — session actor resolution and the verify access gate."""

from __future__ import annotations

import secrets
from typing import Any

from fastapi import HTTPException, Request, status

from letter_issuance.auth.actor import DEMO_ACTOR, Actor


VERIFY_KEY_HEADER = "X-Verify-Key"


def _demo_mode(request: Request) -> bool:
    settings = getattr(request.app.state, "settings", None)
    return settings is not None and settings.app.demo_mode is True


def get_actor(request: Request) -> Actor | None:
    """Return the actor stored in the session by the sign-in flow, if any."""
    if _demo_mode(request):
        return DEMO_ACTOR
    user: dict[str, Any] | None = (
        request.session.get("user") if hasattr(request, "session") else None
    )
    if not user or not user.get("id"):
        return None
    return Actor(id=str(user["id"]), roles=frozenset(user.get("roles") or []))


def require_actor(request: Request) -> Actor:
    """Return the authenticated actor or raise HTTP 401."""
    actor = get_actor(request)
    if actor is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return actor


def require_verify_access(request: Request) -> None:
    """Enforce the shared-secret header when a verify access key is configured."""
    expected = request.app.state.settings.app.verify_access_key
    if not expected:
        return
    provided = request.headers.get(VERIFY_KEY_HEADER, "")
    if not provided or not secrets.compare_digest(provided, expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Verification access key required",
        )
