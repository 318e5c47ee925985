"""Repository for the counters container — monotonically allocated numbers."""

from __future__ import annotations

import logging
from typing import Any, cast

from azure.core import MatchConditions
from azure.cosmos.exceptions import CosmosHttpResponseError, CosmosResourceNotFoundError

from letter_issuance.database.repositories.base import is_conflict
from letter_issuance.errors import PersistenceError

logger = logging.getLogger(__name__)

_MAX_ATTEMPTS = 10


class CounterRepository:
    """Allocate sequence values with etag-guarded read-increment-replace.

    Values are unique and increasing; a value is lost if the caller fails
    after allocating it.
    """

    container_name = "counters"

    def __init__(self, database: Any) -> None:
        self._container = database.get_container_client(self.container_name)

    async def next_value(self, name: str) -> int:
        for attempt in range(1, _MAX_ATTEMPTS + 1):
            try:
                value = await self._try_increment(name)
            except CosmosHttpResponseError as exc:
                if not is_conflict(exc):
                    raise PersistenceError(
                        f"Failed to allocate counter {name}: {exc.message}"
                    ) from exc
                logger.debug("Counter contention — name=%s attempt=%d", name, attempt)
                continue
            return value
        raise PersistenceError(
            f"Failed to allocate counter {name} after {_MAX_ATTEMPTS} attempts"
        )

    async def _try_increment(self, name: str) -> int:
        try:
            data = cast(
                "dict[str, Any]",
                await self._container.read_item(item=name, partition_key=name),
            )
        except CosmosResourceNotFoundError:
            await self._container.create_item(body={"id": name, "value": 1})
            return 1

        value = int(data.get("value", 0)) + 1
        await self._container.replace_item(
            item=name,
            body={"id": name, "value": value},
            etag=data.get("_etag"),
            match_condition=MatchConditions.IfNotModified,
        )
        return value
