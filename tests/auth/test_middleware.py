"""Tests for the authentication middleware."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from fastapi import HTTPException

from letter_issuance.auth.actor import DEMO_ACTOR, Role
from letter_issuance.auth.middleware import (
    VERIFY_KEY_HEADER,
    get_actor,
    require_actor,
    require_verify_access,
)


def _request(*, demo_mode: bool = False, verify_access_key: str = "", headers=None):
    request = MagicMock()
    request.app.state.settings = SimpleNamespace(
        app=SimpleNamespace(demo_mode=demo_mode, verify_access_key=verify_access_key)
    )
    request.headers = headers or {}
    return request


def test_get_actor_returns_none_without_session():
    request = _request()
    del request.session  # Simulate no session attribute
    assert get_actor(request) is None


def test_get_actor_returns_none_for_empty_session():
    request = _request()
    request.session = {}
    assert get_actor(request) is None


def test_get_actor_builds_actor_from_session():
    request = _request()
    request.session = {"user": {"id": "user-1", "roles": ["APPROVER"]}}
    actor = get_actor(request)
    assert actor.id == "user-1"
    assert actor.has_any_role(Role.APPROVER)
    assert not actor.is_admin


def test_demo_mode_injects_demo_actor():
    request = _request(demo_mode=True)
    request.session = {}
    assert get_actor(request) is DEMO_ACTOR


def test_require_actor_raises_401():
    request = _request()
    request.session = {}
    with pytest.raises(HTTPException) as exc_info:
        require_actor(request)
    assert exc_info.value.status_code == 401


def test_verify_gate_open_without_configured_key():
    require_verify_access(_request())


def test_verify_gate_rejects_missing_header():
    with pytest.raises(HTTPException) as exc_info:
        require_verify_access(_request(verify_access_key="secret"))
    assert exc_info.value.status_code == 401


def test_verify_gate_rejects_wrong_key():
    request = _request(verify_access_key="secret", headers={VERIFY_KEY_HEADER: "guess"})
    with pytest.raises(HTTPException):
        require_verify_access(request)


def test_verify_gate_accepts_matching_key():
    request = _request(verify_access_key="secret", headers={VERIFY_KEY_HEADER: "secret"})
    require_verify_access(request)
