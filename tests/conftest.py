"""Shared fixtures for the letter workflow tests."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from letter_issuance.auth.actor import Actor, Role
from letter_issuance.database.store import LetterStore
from letter_issuance.services.audit import AuditTrail
from letter_issuance.services.rendering import DocumentRenderer
from tests.fakes import make_store, seed_reference_data

DEPARTMENT_ID = "dept-9"
COMMITTEE_ID = "committee-1"


@pytest.fixture
def store() -> LetterStore:
    store = make_store()
    seed_reference_data(store, DEPARTMENT_ID, COMMITTEE_ID)
    return store


@pytest.fixture
def events() -> AsyncMock:
    publisher = AsyncMock()
    publisher.publish = AsyncMock()
    return publisher


@pytest.fixture
def audit(store: LetterStore, events: AsyncMock) -> AuditTrail:
    return AuditTrail(store.audit_logs, events)


@pytest.fixture
def renderer() -> DocumentRenderer:
    return DocumentRenderer()


@pytest.fixture
def author() -> Actor:
    return Actor(id="author-1", roles=frozenset({Role.USER}))


@pytest.fixture
def approver() -> Actor:
    return Actor(id="approver-1", roles=frozenset({Role.APPROVER}))


@pytest.fixture
def issuer() -> Actor:
    return Actor(id="issuer-1", roles=frozenset({Role.ISSUER}))


@pytest.fixture
def admin() -> Actor:
    return Actor(id="admin-1", roles=frozenset({Role.ADMIN}))
