from __future__ import annotations

import random
from contextlib import aclosing
from datetime import datetime, timezone
from typing import AsyncIterator, Awaitable, Callable, Optional

from services.errors import IdentifierSpaceExhausted

SEQUENCE_SPACE = 1000
DEFAULT_MAX_ATTEMPTS = 20


def format_candidate(prefix: str, year: int, rng: random.Random) -> str:
    """Build one candidate id, e.g. KR-2026-042."""
    return f"{prefix}-{year}-{rng.randrange(SEQUENCE_SPACE):03d}"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IdentifierGenerator:
    """
    Draws candidates until `exists` reports one as free.
    The check is advisory only: the store's unique index decides on insert.
    """

    def __init__(
        self,
        exists: Callable[[str], Awaitable[bool]],
        prefix: str = "KR",
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._exists = exists
        self.prefix = prefix
        self.max_attempts = max_attempts
        self._rng = rng or random.SystemRandom()
        self._clock = clock

    def candidate(self) -> str:
        return format_candidate(self.prefix, self._clock().year, self._rng)

    async def free_candidates(self) -> AsyncIterator[str]:
        """
        Yield candidates that passed the existence check.
        Every draw, free or taken, counts against max_attempts, so callers that
        also retry on insert collisions stay within the same budget.
        """
        for _ in range(self.max_attempts):
            candidate = self.candidate()
            if not await self._exists(candidate):
                yield candidate
        raise IdentifierSpaceExhausted(self.max_attempts)

    async def generate_unique_id(self) -> str:
        async with aclosing(self.free_candidates()) as candidates:
            return await anext(candidates)
