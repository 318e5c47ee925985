"""Repository for the audit_logs container (partitioned by /entity_id)."""

from __future__ import annotations

from letter_issuance.database.repositories.base import BaseRepository
from letter_issuance.models.audit_log import AuditLog


class AuditLogRepository(BaseRepository[AuditLog]):
    container_name = "audit_logs"
    model_class = AuditLog

    async def list_recent(self, limit: int = 50) -> list[AuditLog]:
        """Fetch the most recent audit entries across all entities."""
        return await self.query(
            "SELECT TOP @limit * FROM c ORDER BY c.created_at DESC",
            [{"name": "@limit", "value": limit}],
        )

    async def list_by_entity(self, entity_id: str) -> list[AuditLog]:
        return await self.query(
            "SELECT * FROM c WHERE c.entity_id = @entity_id ORDER BY c.created_at ASC",
            [{"name": "@entity_id", "value": entity_id}],
            partition_key=entity_id,
        )
