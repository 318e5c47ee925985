"""Repository for letter versions (letters container, partitioned by /letter_id)."""

from __future__ import annotations

from letter_issuance.database.repositories.base import BaseRepository
from letter_issuance.database.repositories.letters import LETTERS_CONTAINER
from letter_issuance.models.version import LetterVersion, version_document_id


class VersionRepository(BaseRepository[LetterVersion]):
    container_name = LETTERS_CONTAINER
    model_class = LetterVersion

    async def get_latest(self, letter_id: str) -> LetterVersion | None:
        """Fetch the highest-numbered version of a letter."""
        results = await self.query(
            "SELECT TOP 1 * FROM c WHERE c.letter_id = @letter_id AND c.type = 'version'"
            " ORDER BY c.version_number DESC",
            [{"name": "@letter_id", "value": letter_id}],
            partition_key=letter_id,
        )
        return results[0] if results else None

    async def list_by_letter(self, letter_id: str) -> list[LetterVersion]:
        """Fetch the full version history of a letter, oldest first."""
        return await self.query(
            "SELECT * FROM c WHERE c.letter_id = @letter_id AND c.type = 'version'"
            " ORDER BY c.version_number ASC",
            [{"name": "@letter_id", "value": letter_id}],
            partition_key=letter_id,
        )

    async def get_version(self, letter_id: str, version_number: int) -> LetterVersion | None:
        return await self.get(version_document_id(letter_id, version_number), letter_id)
