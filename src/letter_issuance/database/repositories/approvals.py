"""Repository for direct and committee approvals (letters container)."""

from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter

from letter_issuance.database.repositories.base import BaseRepository
from letter_issuance.database.repositories.letters import LETTERS_CONTAINER
from letter_issuance.models.approval import Approval, CommitteeApproval, DirectApproval

_APPROVAL_ADAPTER: TypeAdapter[DirectApproval | CommitteeApproval] = TypeAdapter(Approval)


class ApprovalRepository(BaseRepository[DirectApproval | CommitteeApproval]):  # type: ignore[type-var]
    container_name = LETTERS_CONTAINER

    def _validate(self, data: dict[str, Any]) -> DirectApproval | CommitteeApproval:
        return _APPROVAL_ADAPTER.validate_python(data)

    async def list_by_letter(self, letter_id: str) -> list[DirectApproval | CommitteeApproval]:
        """Fetch every approval of either kind recorded against a letter."""
        return await self.query(
            "SELECT * FROM c WHERE c.letter_id = @letter_id"
            " AND c.type IN ('approval', 'committee_approval')",
            [{"name": "@letter_id", "value": letter_id}],
            partition_key=letter_id,
        )
