"""Repository for issuances (letters container, partitioned by /letter_id)."""

from __future__ import annotations

from letter_issuance.database.repositories.base import BaseRepository
from letter_issuance.database.repositories.letters import LETTERS_CONTAINER
from letter_issuance.integrity.keys import VerificationKey, VerificationKeyKind
from letter_issuance.models.issuance import Issuance, issuance_document_id

_KEY_FIELDS = {
    VerificationKeyKind.CONTENT_HASH: "content_hash",
    VerificationKeyKind.TOKEN: "verification_token",
}


class IssuanceRepository(BaseRepository[Issuance]):
    container_name = LETTERS_CONTAINER
    model_class = Issuance

    async def get_by_letter(self, letter_id: str) -> Issuance | None:
        return await self.get(issuance_document_id(letter_id), letter_id)

    async def get_by_key(self, key: VerificationKey) -> Issuance | None:
        """Look an issuance up by fingerprint or verification token."""
        field = _KEY_FIELDS[key.kind]
        results = await self.query(
            f"SELECT * FROM c WHERE c.type = 'issuance' AND c.{field} = @value"
            " AND NOT IS_DEFINED(c.deleted_at)",
            [{"name": "@value", "value": key.value}],
        )
        return results[0] if results else None
