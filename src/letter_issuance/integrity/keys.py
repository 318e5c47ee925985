"""Verification keys accepted by the public verify endpoint.

A key is either the issuance fingerprint (64 hex characters) or the random
verification token minted at issuance (32 URL-safe characters). The two
formats never overlap, so the kind is decided from the shape alone.
"""

from __future__ import annotations

import re
import secrets
from dataclasses import dataclass
from enum import StrEnum

_TOKEN_BYTES = 24
_CONTENT_HASH_RE = re.compile(r"[0-9a-fA-F]{64}")
_TOKEN_RE = re.compile(r"[A-Za-z0-9_-]{32}")


class VerificationKeyKind(StrEnum):
    CONTENT_HASH = "content_hash"
    TOKEN = "token"


@dataclass(frozen=True)
class VerificationKey:
    kind: VerificationKeyKind
    value: str

    @classmethod
    def parse(cls, raw: str) -> VerificationKey | None:
        """Classify ``raw``; returns None for anything that is neither format."""
        candidate = raw.strip()
        if _CONTENT_HASH_RE.fullmatch(candidate):
            return cls(VerificationKeyKind.CONTENT_HASH, candidate.lower())
        if _TOKEN_RE.fullmatch(candidate):
            return cls(VerificationKeyKind.TOKEN, candidate)
        return None


def new_verification_token() -> str:
    return secrets.token_urlsafe(_TOKEN_BYTES)
