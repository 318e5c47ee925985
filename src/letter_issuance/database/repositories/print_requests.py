"""Repository for reprint requests (letters container, partitioned by /letter_id)."""

from __future__ import annotations

from letter_issuance.database.repositories.base import BaseRepository
from letter_issuance.database.repositories.letters import LETTERS_CONTAINER
from letter_issuance.models.print_request import PrintRequest, PrintRequestStatus


class PrintRequestRepository(BaseRepository[PrintRequest]):
    container_name = LETTERS_CONTAINER
    model_class = PrintRequest

    async def list_by_status(
        self, letter_id: str, status: PrintRequestStatus
    ) -> list[PrintRequest]:
        return await self.query(
            "SELECT * FROM c WHERE c.letter_id = @letter_id AND c.type = 'print_request'"
            " AND c.status = @status ORDER BY c.created_at ASC",
            [
                {"name": "@letter_id", "value": letter_id},
                {"name": "@status", "value": status.value},
            ],
            partition_key=letter_id,
        )
