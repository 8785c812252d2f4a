from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from models import MESSAGE_AUTHORS, ApplicationMessage
from services.application_store import ApplicationStore
from services.errors import ApplicationNotFound, InvalidAuthor, InvalidMessageBody, NotFound


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MessageThreadManager:
    """Append-only conversation attached to each application."""

    def __init__(
        self,
        session: AsyncSession,
        store: ApplicationStore,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.session = session
        self.store = store
        self._clock = clock

    async def append_message(self, application_id: str, body: str, author: str) -> ApplicationMessage:
        """
        Append one message after confirming the parent application exists.
        Nothing is written when the application is missing.
        """
        if author not in MESSAGE_AUTHORS:
            raise InvalidAuthor(author)
        if not isinstance(body, str) or not body.strip():
            raise InvalidMessageBody()
        try:
            await self.store.find_by_id(application_id)
        except NotFound as e:
            raise ApplicationNotFound(application_id) from e
        message = ApplicationMessage(
            application_id=application_id,
            body=body,
            author=author,
            created_at=self._clock(),
        )
        self.session.add(message)
        await self.session.flush()
        return message

    async def append_user_message(
        self, application_id: str, body: str, claimed_author: Optional[str] = None
    ) -> ApplicationMessage:
        """Applicant-side append; a request claiming any other author is refused."""
        if claimed_author is not None and claimed_author != "user":
            raise InvalidAuthor(claimed_author)
        return await self.append_message(application_id, body, "user")

    async def append_admin_message(self, application_id: str, body: str) -> ApplicationMessage:
        return await self.append_message(application_id, body, "admin")

    async def list_messages(self, application_id: str) -> Sequence[ApplicationMessage]:
        # Unknown applications yield an empty thread rather than ApplicationNotFound
        result = await self.session.execute(
            select(ApplicationMessage)
            .where(ApplicationMessage.application_id == application_id)
            .order_by(ApplicationMessage.created_at.asc(), ApplicationMessage.id.asc())
        )
        return result.scalars().all()

    async def count_messages(self, application_id: Optional[str] = None) -> int:
        stmt = select(func.count()).select_from(ApplicationMessage)
        if application_id is not None:
            stmt = stmt.where(ApplicationMessage.application_id == application_id)
        result = await self.session.execute(stmt)
        return result.scalar_one()
