"""Generic repository over a single Cosmos DB container."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar, cast

from azure.core import MatchConditions
from azure.cosmos.exceptions import CosmosHttpResponseError, CosmosResourceNotFoundError

from letter_issuance.errors import PersistenceError, VersionConflictError
from letter_issuance.models.base import DocumentBase

if TYPE_CHECKING:
    from azure.cosmos.aio import DatabaseProxy

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=DocumentBase)

HTTP_CONFLICT = 409
HTTP_PRECONDITION_FAILED = 412


def is_conflict(exc: CosmosHttpResponseError) -> bool:
    """True for uniqueness (409) and etag precondition (412) failures."""
    return exc.status_code in (HTTP_CONFLICT, HTTP_PRECONDITION_FAILED)


def to_document(item: DocumentBase) -> dict[str, Any]:
    return item.model_dump(mode="json", exclude_none=True)


class BaseRepository(Generic[T]):
    """CRUD and query helpers shared by every container repository.

    Cosmos SDK errors never leave a repository: uniqueness and etag failures
    become :class:`VersionConflictError`, everything else
    :class:`PersistenceError`.
    """

    container_name: ClassVar[str]
    model_class: type[T]

    def __init__(self, database: DatabaseProxy) -> None:
        self._container = database.get_container_client(self.container_name)

    def _validate(self, data: dict[str, Any]) -> T:
        return self.model_class.model_validate(data)

    async def get(self, item_id: str, partition_key: str) -> T | None:
        """Read a document by id, ignoring soft-deleted documents."""
        try:
            data = cast(
                "dict[str, Any]",
                await self._container.read_item(item=item_id, partition_key=partition_key),
            )
        except CosmosResourceNotFoundError:
            return None
        except CosmosHttpResponseError as exc:
            raise PersistenceError(
                f"Failed to read {self.container_name}/{item_id}: {exc.message}"
            ) from exc
        if data.get("deleted_at") is not None:
            return None
        return self._validate(data)

    async def create(self, item: T) -> T:
        try:
            data = await self._container.create_item(body=to_document(item))
        except CosmosHttpResponseError as exc:
            if exc.status_code == HTTP_CONFLICT:
                raise VersionConflictError(
                    f"{self.container_name}/{item.id} already exists"
                ) from exc
            raise PersistenceError(
                f"Failed to create {self.container_name}/{item.id}: {exc.message}"
            ) from exc
        if isinstance(data, dict):
            item.etag = data.get("_etag")
        return item

    async def update(self, item: T, partition_key: str) -> T:
        """Replace a document, guarded by its etag when one was read."""
        item.updated_at = datetime.now(UTC)
        kwargs: dict[str, Any] = {}
        if item.etag:
            kwargs = {"etag": item.etag, "match_condition": MatchConditions.IfNotModified}
        try:
            data = await self._container.replace_item(
                item=item.id, body=to_document(item), **kwargs
            )
        except CosmosHttpResponseError as exc:
            if is_conflict(exc):
                raise VersionConflictError(
                    f"{self.container_name}/{item.id} was modified concurrently"
                ) from exc
            raise PersistenceError(
                f"Failed to update {self.container_name}/{item.id}: {exc.message}"
            ) from exc
        logger.debug(
            "Updated document — container=%s id=%s partition=%s",
            self.container_name,
            item.id,
            partition_key,
        )
        if isinstance(data, dict):
            item.etag = data.get("_etag")
        return item

    async def query(
        self,
        query: str,
        parameters: list[dict[str, Any]] | None = None,
        *,
        partition_key: str | None = None,
    ) -> list[T]:
        """Run a SQL query; cross-partition unless ``partition_key`` is given."""
        kwargs: dict[str, Any] = {"parameters": parameters or []}
        if partition_key is not None:
            kwargs["partition_key"] = partition_key
        try:
            return [
                self._validate(cast("dict[str, Any]", item))
                async for item in self._container.query_items(query, **kwargs)
            ]
        except CosmosHttpResponseError as exc:
            raise PersistenceError(
                f"Failed to query {self.container_name}: {exc.message}"
            ) from exc
