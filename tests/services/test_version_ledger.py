"""Tests for the version ledger."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from letter_issuance.errors import (
    LetterValidationError,
    NotFoundError,
    PersistenceError,
    VersionConflictError,
)
from letter_issuance.integrity.fingerprint import hash_content
from letter_issuance.models.letter import Letter, LetterContext
from letter_issuance.services.versions import VersionLedger


def _letter(letter_id: str = "letter-1") -> Letter:
    return Letter(
        id=letter_id,
        context=LetterContext.COMPANY,
        department_id="dept-9",
        content="draft",
        created_by="author-1",
    )


async def _stored_letter(store, letter_id: str = "letter-1") -> Letter:
    """A letter at version 0, stored without any versions."""
    letter = _letter(letter_id)
    await store.letters.commit_if_version(letter, 0)
    return letter


class TestVersionLedger:
    """Test the Version Ledger."""

    async def test_first_version_is_one(self, store) -> None:
        """Verify the first recorded version of a fresh letter is 1."""
        await _stored_letter(store)
        ledger = VersionLedger(store.letters, store.versions)

        letter, version = await ledger.record_version("letter-1", "some content", "user-1")

        assert version.version_number == 1
        assert version.content_hash == hash_content("some content")
        assert version.created_by == "user-1"
        assert letter.current_version == 1
        assert letter.content == "some content"

    async def test_sequential_edits_have_no_gaps(self, store) -> None:
        """Verify N sequential edits produce versions 1..N."""
        await _stored_letter(store)
        ledger = VersionLedger(store.letters, store.versions)

        for index in range(5):
            await ledger.record_version("letter-1", f"content {index}", "user-1")

        versions = await store.versions.list_by_letter("letter-1")
        assert [v.version_number for v in versions] == [1, 2, 3, 4, 5]
        assert versions[-1].content == "content 4"

    async def test_concurrent_edits_get_distinct_versions(self, store) -> None:
        """Verify two racing edits from version 0 end up as versions 1 and 2."""
        await _stored_letter(store)
        ledger = VersionLedger(store.letters, store.versions)

        results = await asyncio.gather(
            ledger.record_version("letter-1", "edit A", "user-a"),
            ledger.record_version("letter-1", "edit B", "user-b"),
        )

        numbers = sorted(version.version_number for _, version in results)
        assert numbers == [1, 2]
        stored = await store.versions.list_by_letter("letter-1")
        assert [v.version_number for v in stored] == [1, 2]
        letter = await store.letters.get_letter("letter-1")
        assert letter.current_version == 2
        assert letter.content == stored[-1].content

    async def test_many_concurrent_edits_stay_gap_free(self, store) -> None:
        """Verify a burst of concurrent edits is numbered 1..N."""
        await _stored_letter(store)
        ledger = VersionLedger(store.letters, store.versions, max_attempts=20)

        await asyncio.gather(
            *(ledger.record_version("letter-1", f"edit {i}", "user-1") for i in range(6))
        )

        stored = await store.versions.list_by_letter("letter-1")
        assert [v.version_number for v in stored] == [1, 2, 3, 4, 5, 6]

    async def test_start_writes_letter_and_version_one(self, store) -> None:
        """Verify start creates the letter together with version 1."""
        ledger = VersionLedger(store.letters, store.versions)
        letter = _letter("letter-2")

        version = await ledger.start(letter, "author-1")

        assert version.version_number == 1
        assert version.id == "letter-2:v1"
        stored = await store.letters.get_letter("letter-2")
        assert stored.current_version == 1

    async def test_guard_aborts_without_writing(self, store) -> None:
        """Verify a failing guard leaves no version behind."""
        await _stored_letter(store)
        ledger = VersionLedger(store.letters, store.versions)

        def guard(letter: Letter) -> None:
            raise LetterValidationError("Only DRAFT letters can be edited.")

        with pytest.raises(LetterValidationError):
            await ledger.record_version("letter-1", "x", "user-1", guard=guard)

        assert await store.versions.list_by_letter("letter-1") == []

    async def test_unknown_letter(self, store) -> None:
        """Verify recording against a missing letter raises NotFoundError."""
        ledger = VersionLedger(store.letters, store.versions)
        with pytest.raises(NotFoundError):
            await ledger.record_version("missing", "x", "user-1")

    async def test_gives_up_after_max_attempts(self) -> None:
        """Verify persistent conflicts surface as VersionConflictError."""
        letters = MagicMock()
        letters.get_letter = AsyncMock(return_value=_letter())
        letters.commit_if_version = AsyncMock(side_effect=VersionConflictError("race"))
        versions = MagicMock()
        versions.get_latest = AsyncMock(return_value=None)
        ledger = VersionLedger(letters, versions, max_attempts=3)

        with pytest.raises(VersionConflictError):
            await ledger.record_version("letter-1", "x", "user-1")

        assert letters.commit_if_version.await_count == 3

    async def test_persistence_failure_is_not_retried(self) -> None:
        """Verify write failures other than conflicts abort immediately."""
        letters = MagicMock()
        letters.get_letter = AsyncMock(return_value=_letter())
        letters.commit_if_version = AsyncMock(side_effect=PersistenceError("down"))
        versions = MagicMock()
        versions.get_latest = AsyncMock(return_value=None)
        ledger = VersionLedger(letters, versions)

        with pytest.raises(PersistenceError):
            await ledger.record_version("letter-1", "x", "user-1")

        letters.commit_if_version.assert_awaited_once()

    async def test_next_number_follows_highest_stored_version(self) -> None:
        """Verify numbering continues after the highest stored version."""
        letter = _letter()
        letter.current_version = 5
        letters = MagicMock()
        letters.get_letter = AsyncMock(return_value=letter)
        letters.commit_if_version = AsyncMock(return_value=letter)
        versions = MagicMock()
        versions.get_latest = AsyncMock(return_value=MagicMock(version_number=5))
        ledger = VersionLedger(letters, versions)

        _, version = await ledger.record_version("letter-1", "new content", "user-1")

        assert version.version_number == 6
        args, kwargs = letters.commit_if_version.call_args
        assert args[1] == 5
        assert kwargs["create"][0].id == "letter-1:v6"
