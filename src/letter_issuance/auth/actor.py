"""Resolved actor identity and role checks used by the workflow services."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from letter_issuance.errors import AuthorizationError


class Role(StrEnum):
    ADMIN = "ADMIN"
    APPROVER = "APPROVER"
    ISSUER = "ISSUER"
    USER = "USER"


@dataclass(frozen=True)
class Actor:
    """An authenticated caller, as handed over by the identity provider."""

    id: str
    roles: frozenset[str] = field(default_factory=frozenset)

    def has_any_role(self, *roles: Role) -> bool:
        return any(role in self.roles for role in roles)

    @property
    def is_admin(self) -> bool:
        return Role.ADMIN in self.roles


DEMO_ACTOR = Actor(
    id="00000000-0000-0000-0000-000000000001",
    roles=frozenset({Role.ADMIN, Role.APPROVER, Role.ISSUER}),
)


def require_roles(actor: Actor, *roles: Role, action: str) -> None:
    """Raise AuthorizationError unless the actor holds one of ``roles``."""
    if not actor.has_any_role(*roles):
        raise AuthorizationError(f"User does not have permission to {action}.")
