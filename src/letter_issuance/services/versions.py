"""Version ledger — append-only, gap-free version numbering per letter."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from letter_issuance.errors import NotFoundError, VersionConflictError
from letter_issuance.integrity.fingerprint import hash_content
from letter_issuance.models.version import LetterVersion

if TYPE_CHECKING:
    from collections.abc import Callable

    from letter_issuance.database.repositories.letters import LetterRepository
    from letter_issuance.database.repositories.versions import VersionRepository
    from letter_issuance.models.letter import Letter

logger = logging.getLogger(__name__)

MAX_COMMIT_ATTEMPTS = 5


def build_version(
    letter_id: str,
    version_number: int,
    content: str,
    actor_id: str,
    *,
    fingerprint: str | None = None,
    verification_token: str | None = None,
) -> LetterVersion:
    return LetterVersion(
        letter_id=letter_id,
        version_number=version_number,
        content=content,
        content_hash=hash_content(content),
        created_by=actor_id,
        fingerprint=fingerprint,
        verification_token=verification_token,
    )


class VersionLedger:
    """Mint versions together with the letter change that produced them.

    The next number is derived from the highest stored version, then the
    letter update and the new version are committed in one batch guarded by
    the letter's etag and the version's deterministic id. When a concurrent
    writer wins, the whole read-compute-commit cycle is retried, so two edits
    racing from the same state end up as consecutive versions.
    """

    def __init__(
        self,
        letters: LetterRepository,
        versions: VersionRepository,
        *,
        max_attempts: int = MAX_COMMIT_ATTEMPTS,
    ) -> None:
        self._letters = letters
        self._versions = versions
        self._max_attempts = max_attempts

    async def current_version(self, letter: Letter) -> int:
        latest = await self._versions.get_latest(letter.id)
        stored = latest.version_number if latest else 0
        return max(stored, letter.current_version)

    async def start(self, letter: Letter, actor_id: str) -> LetterVersion:
        """Create a new letter together with version 1 of its content."""
        version = build_version(letter.id, 1, letter.content, actor_id)

        def apply(target: Letter) -> None:
            target.current_version = version.version_number

        await self._letters.commit_if_version(letter, 0, apply, create=[version])
        logger.info("Letter created — letter=%s version=1", letter.id)
        return version

    async def record_version(
        self,
        letter_id: str,
        content: str,
        actor_id: str,
        *,
        guard: Callable[[Letter], None] | None = None,
        mutation: Callable[[Letter], None] | None = None,
    ) -> tuple[Letter, LetterVersion]:
        """Append the next version of ``letter_id`` and update the letter with it.

        ``guard`` runs against every fresh read of the letter and raises to
        abort (e.g. the letter is no longer a draft). ``mutation`` applies any
        other letter changes that belong to the same edit.
        """
        for attempt in range(1, self._max_attempts + 1):
            letter = await self._letters.get_letter(letter_id)
            if letter is None:
                raise NotFoundError("Letter not found")
            if guard is not None:
                guard(letter)

            expected = letter.current_version
            next_number = await self.current_version(letter) + 1
            version = build_version(letter_id, next_number, content, actor_id)

            def apply(target: Letter, number: int = next_number) -> None:
                if mutation is not None:
                    mutation(target)
                target.content = content
                target.current_version = number

            try:
                await self._letters.commit_if_version(
                    letter, expected, apply, create=[version]
                )
            except VersionConflictError:
                logger.warning(
                    "Version race on letter=%s attempt=%d/%d — retrying",
                    letter_id,
                    attempt,
                    self._max_attempts,
                )
                continue

            logger.info(
                "Version recorded — letter=%s version=%d hash=%s",
                letter_id,
                version.version_number,
                version.content_hash[:12],
            )
            return letter, version

        raise VersionConflictError(
            f"Could not record a new version of letter {letter_id} "
            f"after {self._max_attempts} attempts"
        )
