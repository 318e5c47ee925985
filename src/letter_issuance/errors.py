"""Error taxonomy for the letter workflow.

Every error carries the HTTP status code the API layer responds with, so
services can raise without knowing about FastAPI.
"""

from __future__ import annotations


class LetterError(Exception):
    """Base class for workflow errors surfaced to callers."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class LetterValidationError(LetterError):
    """Missing input or a transition not allowed from the current status."""

    status_code = 400


class AuthorizationError(LetterError):
    """The actor lacks the role or committee membership the action needs."""

    status_code = 403


class NotFoundError(LetterError):
    status_code = 404


class ConflictError(LetterError):
    status_code = 409


class VersionConflictError(ConflictError):
    """A concurrent writer committed first; the caller may re-read and retry."""


class IssuanceConflictError(ConflictError):
    """The letter changed between fingerprinting and the issuance commit."""


class PersistenceError(LetterError):
    """A read or write against the store failed."""

    status_code = 500
