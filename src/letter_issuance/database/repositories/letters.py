"""Repository for letter head documents in the letters container (partitioned by /letter_id).

Every document a letter owns lives in the same partition, so a letter update
and the documents it produces can be committed as one transactional batch.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from typing import Any, cast

from azure.cosmos.exceptions import CosmosBatchOperationError, CosmosHttpResponseError

from letter_issuance.database.repositories.base import (
    BaseRepository,
    is_conflict,
    to_document,
)
from letter_issuance.errors import PersistenceError, VersionConflictError
from letter_issuance.models.base import LetterDocument
from letter_issuance.models.letter import Letter, LetterContext

logger = logging.getLogger(__name__)

LETTERS_CONTAINER = "letters"


class LetterRepository(BaseRepository[Letter]):
    container_name = LETTERS_CONTAINER
    model_class = Letter

    async def get_letter(self, letter_id: str) -> Letter | None:
        letter = await self.get(letter_id, letter_id)
        if letter is None or letter.type != "letter":
            return None
        return letter

    async def list_page(
        self,
        *,
        context: LetterContext | None = None,
        page: int = 1,
        limit: int = 50,
    ) -> list[Letter]:
        """Fetch one page of letters, newest first."""
        offset = (max(page, 1) - 1) * limit
        filters = "c.type = 'letter' AND NOT IS_DEFINED(c.deleted_at)"
        parameters: list[dict[str, Any]] = [
            {"name": "@offset", "value": offset},
            {"name": "@limit", "value": limit},
        ]
        if context is not None:
            filters += " AND c.context = @context"
            parameters.append({"name": "@context", "value": context.value})
        return await self.query(
            f"SELECT * FROM c WHERE {filters}"
            " ORDER BY c.created_at DESC OFFSET @offset LIMIT @limit",
            parameters,
        )

    async def commit_if_version(
        self,
        letter: Letter,
        expected_version: int,
        mutation: Callable[[Letter], None] | None = None,
        *,
        create: Sequence[LetterDocument] = (),
        replace: Sequence[LetterDocument] = (),
    ) -> Letter:
        """Apply ``mutation`` to ``letter`` and write it with its new documents atomically.

        ``letter`` must be the state as read: its ``current_version`` has to
        equal ``expected_version`` and its etag is sent as the batch
        precondition, so the write only lands if nobody committed in between.
        A letter without an etag has never been stored and is created instead.
        Any precondition or uniqueness failure raises
        :class:`VersionConflictError` and nothing is written.
        """
        if letter.current_version != expected_version:
            raise VersionConflictError(
                f"Letter {letter.id} is at version {letter.current_version}, "
                f"expected {expected_version}"
            )
        if mutation is not None:
            mutation(letter)

        letter.updated_at = datetime.now(UTC)
        operations: list[tuple[Any, ...]] = []
        if letter.etag:
            operations.append(
                ("replace", (letter.id, to_document(letter)), {"if_match_etag": letter.etag})
            )
        else:
            operations.append(("create", (to_document(letter),)))
        for document in create:
            self._check_partition(letter, document)
            operations.append(("create", (to_document(document),)))
        for document in replace:
            self._check_partition(letter, document)
            kwargs = {"if_match_etag": document.etag} if document.etag else {}
            operations.append(("replace", (document.id, to_document(document)), kwargs))

        try:
            results = await self._container.execute_item_batch(
                batch_operations=operations,
                partition_key=letter.letter_id,
            )
        except CosmosBatchOperationError as exc:
            if is_conflict(exc):
                raise VersionConflictError(
                    f"Letter {letter.id} changed concurrently (status={exc.status_code})"
                ) from exc
            raise PersistenceError(f"Failed to commit letter {letter.id}: {exc.message}") from exc
        except CosmosHttpResponseError as exc:
            if is_conflict(exc):
                raise VersionConflictError(
                    f"Letter {letter.id} changed concurrently (status={exc.status_code})"
                ) from exc
            raise PersistenceError(f"Failed to commit letter {letter.id}: {exc.message}") from exc

        documents = [letter, *create, *replace]
        for document, result in zip(documents, results or [], strict=False):
            body = cast("dict[str, Any]", result).get("resourceBody") or {}
            document.etag = body.get("_etag") or result.get("eTag")

        logger.debug(
            "Committed letter batch — letter=%s version=%d operations=%d",
            letter.id,
            letter.current_version,
            len(operations),
        )
        return letter

    @staticmethod
    def _check_partition(letter: Letter, document: LetterDocument) -> None:
        if document.letter_id != letter.letter_id:
            raise ValueError(
                f"Document {document.id} belongs to letter {document.letter_id}, "
                f"not {letter.letter_id}"
            )
