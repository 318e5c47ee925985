"""Master data models — departments, committees and tags."""

from __future__ import annotations

from pydantic import Field

from letter_issuance.models.base import DocumentBase
from letter_issuance.models.letter import LetterContext


class Department(DocumentBase):
    name: str
    context: LetterContext


class Committee(DocumentBase):
    """A group of actors allowed to approve letters assigned to it."""

    name: str
    context: LetterContext
    member_ids: list[str] = Field(default_factory=list)

    def has_member(self, actor_id: str) -> bool:
        return actor_id in self.member_ids


class Tag(DocumentBase):
    """A catalogue entry a letter may be tagged with, scoped to one context."""

    name: str
    context: LetterContext
