"""Event contracts and publishing interfaces for letter lifecycle events."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from letter_issuance.events.contracts import EventEnvelope, LetterEvent
from letter_issuance.events.servicebus import ServiceBusPublisher


@runtime_checkable
class EventPublisher(Protocol):
    """Protocol for publishing letter events to downstream consumers."""

    async def publish(self, event_type: str, data: dict[str, Any] | str) -> None:
        """Broadcast an event to all connected consumers."""
        ...


__all__ = [
    "EventEnvelope",
    "EventPublisher",
    "LetterEvent",
    "ServiceBusPublisher",
]
