"""
Creation workflow: ids are unique, well formed, and a lost race on the same
candidate is retried instead of overwriting or duplicating.
"""
import asyncio
import random
import re
import unittest
from datetime import datetime, timezone

from _db import APPLICANT, DatabaseTestCase, FakeClock, FileDatabaseTestCase, SequenceRandom
from database import build_sessionmaker
from services.application_store import ApplicationStore
from services.applications import create_application
from services.errors import IdentifierSpaceExhausted
from services.identifiers import IdentifierGenerator

ID_PATTERN = re.compile(r"^KR-\d{4}-\d{3}$")


def _year_clock():
    return datetime(2026, 6, 15, tzinfo=timezone.utc)


class TestCreateApplication(DatabaseTestCase):
    async def asyncSetUp(self):
        await super().asyncSetUp()
        self.store = ApplicationStore(self.session)

    async def test_many_creations_yield_distinct_ids(self):
        generator = IdentifierGenerator(self.store.exists, rng=random.Random(1234), clock=_year_clock)
        ids = []
        for _ in range(60):
            app = await create_application(self.store, generator, APPLICANT, clock=FakeClock())
            ids.append(app.application_id)
        self.assertEqual(len(set(ids)), 60)
        for application_id in ids:
            self.assertRegex(application_id, ID_PATTERN)
        self.assertEqual(await self.store.count(), 60)

    async def test_lost_race_retries_with_new_candidate(self):
        # Both creators draw 7; the second one's pre-check ran before the first insert
        async def stale_exists(candidate):
            return False

        first = IdentifierGenerator(stale_exists, rng=SequenceRandom([7]), clock=_year_clock)
        second = IdentifierGenerator(stale_exists, rng=SequenceRandom([7, 8]), clock=_year_clock)

        winner = await create_application(self.store, first, APPLICANT)
        winner_id = winner.application_id
        loser = await create_application(self.store, second, {**APPLICANT, "first_name": "Late"})

        self.assertEqual(winner_id, "KR-2026-007")
        self.assertEqual(loser.application_id, "KR-2026-008")
        kept = await self.store.find_by_id("KR-2026-007")
        self.assertEqual(kept.first_name, "A")
        self.assertEqual(await self.store.count(), 2)

    async def test_repeated_collisions_exhaust(self):
        async def stale_exists(candidate):
            return False

        await self.store.insert("KR-2026-007", APPLICANT, _year_clock())
        rng = SequenceRandom([7] * 10)
        generator = IdentifierGenerator(stale_exists, max_attempts=3, rng=rng, clock=_year_clock)
        with self.assertRaises(IdentifierSpaceExhausted):
            await create_application(self.store, generator, APPLICANT)
        self.assertEqual(rng.calls, 3)
        self.assertEqual(await self.store.count(), 1)

    async def test_precheck_skips_taken_ids(self):
        await self.store.insert("KR-2026-001", APPLICANT, _year_clock())
        rng = SequenceRandom([1, 2])
        generator = IdentifierGenerator(self.store.exists, rng=rng, clock=_year_clock)
        app = await create_application(self.store, generator, APPLICANT)
        self.assertEqual(app.application_id, "KR-2026-002")
        self.assertEqual(rng.calls, 2)

    async def test_precheck_misses_and_collisions_share_one_budget(self):
        # 001 is visibly taken; 007 is taken but the pre-check does not see it
        await self.store.insert("KR-2026-001", APPLICANT, _year_clock())
        await self.store.insert("KR-2026-007", APPLICANT, _year_clock())
        checks = []

        async def partial_exists(candidate):
            checks.append(candidate)
            return candidate == "KR-2026-001"

        rng = SequenceRandom([1, 7, 1, 7, 1, 7, 1, 7])
        generator = IdentifierGenerator(partial_exists, max_attempts=4, rng=rng, clock=_year_clock)
        with self.assertRaises(IdentifierSpaceExhausted) as ctx:
            await create_application(self.store, generator, APPLICANT)
        self.assertEqual(ctx.exception.attempts, 4)
        self.assertEqual(rng.calls, 4)
        self.assertEqual(len(checks), 4)
        self.assertEqual(await self.store.count(), 2)

    async def test_concurrent_creations_on_single_connection(self):
        sessions = build_sessionmaker(self.engine)
        ids = await asyncio.gather(*(_create_in_own_session(sessions) for _ in range(10)))
        self.assertEqual(len(set(ids)), 10)


async def _create_in_own_session(sessions):
    # Every creator replays the same draws, so they all contend for the same ids
    async with sessions() as session:
        store = ApplicationStore(session)
        generator = IdentifierGenerator(store.exists, rng=SequenceRandom(range(1000)), clock=_year_clock)
        app = await create_application(store, generator, APPLICANT)
        await session.commit()
        return app.application_id


class TestConcurrentCreation(FileDatabaseTestCase):
    async def test_concurrent_creations_yield_distinct_ids(self):
        ids = await asyncio.gather(*(_create_in_own_session(self.sessions) for _ in range(10)))
        self.assertEqual(sorted(ids), [f"KR-2026-{n:03d}" for n in range(10)])
        async with self.sessions() as session:
            self.assertEqual(await ApplicationStore(session).count(), 10)

    async def test_concurrent_creations_with_random_draws(self):
        async def create(seed):
            async with self.sessions() as session:
                store = ApplicationStore(session)
                generator = IdentifierGenerator(store.exists, rng=random.Random(seed), clock=_year_clock)
                app = await create_application(store, generator, APPLICANT)
                await session.commit()
                return app.application_id

        ids = await asyncio.gather(*(create(seed) for seed in range(25)))
        self.assertEqual(len(set(ids)), 25)
        for application_id in ids:
            self.assertRegex(application_id, ID_PATTERN)


if __name__ == "__main__":
    unittest.main()
