"""Content fingerprints.

Two granularities exist and must not be mixed up:

* :func:`hash_content` digests the raw body only. The version ledger stores it
  on every version.
* :func:`build_content_hash` digests the body together with the letter id,
  version number, context, department and tag ids. It is computed at
  issuance, printed on the document and accepted by the verify endpoint, so
  two letters with identical text never share a fingerprint.

Both are SHA-256 rendered as lowercase hex.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Sequence


def hash_content(content: str) -> str:
    """Digest of the raw letter body."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def canonical_payload(
    *,
    letter_id: str,
    version_number: int,
    context: str,
    department_id: str,
    tag_ids: Sequence[str],
    content: str,
) -> bytes:
    """Serialize the fingerprint inputs with a fixed field order and no whitespace."""
    for name, value in (
        ("letter_id", letter_id),
        ("context", context),
        ("department_id", department_id),
        ("content", content),
    ):
        if not isinstance(value, str):
            raise TypeError(f"{name} must be a string, got {type(value).__name__}")
    if isinstance(version_number, bool) or not isinstance(version_number, int):
        raise TypeError(
            f"version_number must be an int, got {type(version_number).__name__}"
        )
    if isinstance(tag_ids, str) or not all(isinstance(tag, str) for tag in tag_ids):
        raise TypeError("tag_ids must be a sequence of strings")

    payload = {
        "letter_id": str(letter_id),
        "version": version_number,
        "context": str(context),
        "department_id": str(department_id),
        "tag_ids": [str(tag) for tag in tag_ids],
        "content": str(content),
    }
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode(
        "utf-8"
    )


def build_content_hash(
    *,
    letter_id: str,
    version_number: int,
    context: str,
    department_id: str,
    tag_ids: Sequence[str],
    content: str,
) -> str:
    """Fingerprint a letter version together with its structural context.

    Tag ids are hashed in the order given; callers pass them through
    :func:`letter_issuance.integrity.tags.normalize_tag_ids` first.
    """
    payload = canonical_payload(
        letter_id=letter_id,
        version_number=version_number,
        context=context,
        department_id=department_id,
        tag_ids=tag_ids,
        content=content,
    )
    return hashlib.sha256(payload).hexdigest()
