"""Tag id canonicalization."""

from __future__ import annotations


def normalize_tag_ids(tag_ids: object) -> list[str]:
    """Return the deduplicated, code-point sorted tag ids contained in ``tag_ids``.

    Anything that is not a list or tuple yields an empty list. Entries that are
    not strings, or are blank once whitespace is stripped, are dropped; kept
    entries are compared and stored exactly as given.
    """
    if not isinstance(tag_ids, (list, tuple)):
        return []
    cleaned = {tag for tag in tag_ids if isinstance(tag, str) and tag.strip()}
    return sorted(cleaned)
