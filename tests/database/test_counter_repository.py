"""Tests for the counter repository."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from azure.core import MatchConditions
from azure.cosmos.exceptions import CosmosHttpResponseError, CosmosResourceNotFoundError

from letter_issuance.database.repositories.counters import CounterRepository
from letter_issuance.errors import PersistenceError


@pytest.fixture
def repo() -> CounterRepository:
    mock_db = MagicMock()
    mock_db.get_container_client.return_value = AsyncMock()
    return CounterRepository(mock_db)


async def test_first_value_creates_counter(repo: CounterRepository) -> None:
    repo._container.read_item.side_effect = CosmosResourceNotFoundError(  # noqa: SLF001
        status_code=404, message="Not found"
    )

    assert await repo.next_value("letter-number:COMPANY") == 1
    repo._container.create_item.assert_awaited_once_with(  # noqa: SLF001
        body={"id": "letter-number:COMPANY", "value": 1}
    )


async def test_increments_with_etag(repo: CounterRepository) -> None:
    repo._container.read_item.return_value = {  # noqa: SLF001
        "id": "letter-number:COMPANY",
        "value": 41,
        "_etag": "etag-1",
    }

    assert await repo.next_value("letter-number:COMPANY") == 42
    kwargs = repo._container.replace_item.call_args.kwargs  # noqa: SLF001
    assert kwargs["body"]["value"] == 42
    assert kwargs["etag"] == "etag-1"
    assert kwargs["match_condition"] == MatchConditions.IfNotModified


async def test_retries_on_contention(repo: CounterRepository) -> None:
    """Verify a lost etag race is retried with a fresh read."""
    repo._container.read_item.side_effect = [  # noqa: SLF001
        {"id": "c", "value": 1, "_etag": "etag-1"},
        {"id": "c", "value": 2, "_etag": "etag-2"},
    ]
    repo._container.replace_item.side_effect = [  # noqa: SLF001
        CosmosHttpResponseError(status_code=412, message="Precondition failed"),
        {"id": "c", "value": 3},
    ]

    assert await repo.next_value("c") == 3


async def test_other_errors_are_persistence_errors(repo: CounterRepository) -> None:
    repo._container.read_item.side_effect = CosmosHttpResponseError(  # noqa: SLF001
        status_code=503, message="Service unavailable"
    )

    with pytest.raises(PersistenceError):
        await repo.next_value("c")


async def test_gives_up_after_repeated_contention(repo: CounterRepository) -> None:
    repo._container.read_item.return_value = {"id": "c", "value": 1, "_etag": "e"}  # noqa: SLF001
    repo._container.replace_item.side_effect = CosmosHttpResponseError(  # noqa: SLF001
        status_code=412, message="Precondition failed"
    )

    with pytest.raises(PersistenceError, match="after"):
        await repo.next_value("c")
