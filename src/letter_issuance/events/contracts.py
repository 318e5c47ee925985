"""Typed contracts for letter lifecycle events."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class EventEnvelope(BaseModel):
    """Canonical event envelope used on Service Bus."""

    event: str
    data: dict[str, Any] | str


class LetterEvent(BaseModel):
    """Payload published for every letter status transition."""

    letter_id: str
    action: str
    actor_id: str | None = None
    status: str | None = None
    version_number: int | None = None
