"""Authentication module — session actors, role checks and the verify gate."""

from letter_issuance.auth.actor import Actor, Role, require_roles
from letter_issuance.auth.middleware import (
    get_actor,
    require_actor,
    require_verify_access,
)

__all__ = [
    "Actor",
    "Role",
    "get_actor",
    "require_actor",
    "require_roles",
    "require_verify_access",
]
