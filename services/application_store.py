from __future__ import annotations

from datetime import datetime
from typing import Any, Collection, Sequence

from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from models import CreditApplication
from services.errors import DuplicateIdentifier, InvalidTransition, NotFound

APPLICANT_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "country",
    "city",
    "address",
    "amount",
    "months",
    "income",
)


class ApplicationStore:
    """Durable application records keyed by their human-readable id."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def insert(self, candidate_id: str, fields: dict[str, Any], now: datetime) -> CreditApplication:
        """
        Insert a pending application under `candidate_id`.
        Runs inside a savepoint so a unique violation rolls back only this insert
        and surfaces as DuplicateIdentifier; the existing row is never touched.
        """
        missing = [f for f in APPLICANT_FIELDS if fields.get(f) is None]
        if missing:
            raise ValueError(f"Missing applicant fields: {', '.join(missing)}")
        app = CreditApplication(
            application_id=candidate_id,
            status="pending",
            created_at=now,
            updated_at=now,
            **{f: fields[f] for f in APPLICANT_FIELDS},
        )
        try:
            async with self.session.begin_nested():
                self.session.add(app)
        except IntegrityError as e:
            if await self.exists(candidate_id):
                raise DuplicateIdentifier(candidate_id) from e
            raise
        return app

    async def exists(self, application_id: str) -> bool:
        result = await self.session.execute(
            select(CreditApplication.id).where(CreditApplication.application_id == application_id)
        )
        return result.first() is not None

    async def find_by_id(self, application_id: str, refresh: bool = False) -> CreditApplication:
        stmt = select(CreditApplication).where(CreditApplication.application_id == application_id)
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        app = result.scalar_one_or_none()
        if app is None:
            raise NotFound(application_id)
        return app

    async def list_all(self) -> Sequence[CreditApplication]:
        """Newest first; insertion order breaks equal timestamps."""
        result = await self.session.execute(
            select(CreditApplication).order_by(CreditApplication.created_at.desc(), CreditApplication.id.desc())
        )
        return result.scalars().all()

    async def update_status(
        self,
        application_id: str,
        new_status: str,
        now: datetime,
        frozen_statuses: Collection[str] = (),
    ) -> CreditApplication:
        """
        Overwrite status and updated_at in one conditional UPDATE.
        Rows whose current status is in `frozen_statuses` only accept their own
        status again; otherwise the update matches nothing and InvalidTransition
        is raised with the status found on a follow-up read.
        """
        stmt = update(CreditApplication).where(CreditApplication.application_id == application_id)
        if frozen_statuses:
            stmt = stmt.where(
                or_(
                    CreditApplication.status.not_in(list(frozen_statuses)),
                    CreditApplication.status == new_status,
                )
            )
        stmt = stmt.values(status=new_status, updated_at=now).execution_options(synchronize_session=False)
        result = await self.session.execute(stmt)
        app = await self.find_by_id(application_id, refresh=True)
        if result.rowcount == 0:
            raise InvalidTransition(app.status, new_status)
        return app

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(CreditApplication))
        return result.scalar_one()
