"""Repositories for master data — departments, committees and tags (partitioned by /id)."""

from __future__ import annotations

from typing import Any

from letter_issuance.database.repositories.base import BaseRepository
from letter_issuance.models.letter import LetterContext
from letter_issuance.models.reference import Committee, Department, Tag


def _context_filter(context: LetterContext | None) -> tuple[str, list[dict[str, Any]]]:
    if context is None:
        return "SELECT * FROM c WHERE NOT IS_DEFINED(c.deleted_at) ORDER BY c.name", []
    return (
        "SELECT * FROM c WHERE c.context = @context AND NOT IS_DEFINED(c.deleted_at)"
        " ORDER BY c.name",
        [{"name": "@context", "value": context.value}],
    )


class DepartmentRepository(BaseRepository[Department]):
    container_name = "departments"
    model_class = Department

    async def list_by_context(self, context: LetterContext | None = None) -> list[Department]:
        return await self.query(*_context_filter(context))


class CommitteeRepository(BaseRepository[Committee]):
    container_name = "committees"
    model_class = Committee

    async def list_by_context(self, context: LetterContext | None = None) -> list[Committee]:
        return await self.query(*_context_filter(context))


class TagRepository(BaseRepository[Tag]):
    container_name = "tags"
    model_class = Tag

    async def list_by_context(self, context: LetterContext | None = None) -> list[Tag]:
        return await self.query(*_context_filter(context))
