"""Repository for receipt acknowledgements (letters container)."""

from __future__ import annotations

from letter_issuance.database.repositories.base import BaseRepository
from letter_issuance.database.repositories.letters import LETTERS_CONTAINER
from letter_issuance.models.acknowledgement import Acknowledgement


class AcknowledgementRepository(BaseRepository[Acknowledgement]):
    container_name = LETTERS_CONTAINER
    model_class = Acknowledgement

    async def list_by_letter(self, letter_id: str) -> list[Acknowledgement]:
        return await self.query(
            "SELECT * FROM c WHERE c.letter_id = @letter_id AND c.type = 'acknowledgement'",
            [{"name": "@letter_id", "value": letter_id}],
            partition_key=letter_id,
        )
