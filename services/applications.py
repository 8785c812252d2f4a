from __future__ import annotations

from contextlib import aclosing
from datetime import datetime, timezone
from typing import Any, Callable

from models import CreditApplication
from services.application_store import ApplicationStore
from services.errors import DuplicateIdentifier
from services.identifiers import IdentifierGenerator


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


async def create_application(
    store: ApplicationStore,
    generator: IdentifierGenerator,
    fields: dict[str, Any],
    clock: Callable[[], datetime] = _utcnow,
) -> CreditApplication:
    """
    Assign a fresh id and insert the application.
    A concurrent creator can claim the same id between the generator's check
    and our insert; the store then raises DuplicateIdentifier and we take the
    next candidate. Pre-check misses and insert collisions draw from the
    generator's single max_attempts budget, after which it raises
    IdentifierSpaceExhausted.
    """
    async with aclosing(generator.free_candidates()) as candidates:
        async for candidate in candidates:
            try:
                return await store.insert(candidate, fields, clock())
            except DuplicateIdentifier:
                continue
