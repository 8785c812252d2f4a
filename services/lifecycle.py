"""
Application status state machine.

pending is the initial state; approved and rejected are terminal. In the
default "permissive" mode any known status is accepted whatever the current
state, which is how reviewers have always been able to reopen or flip a
decision. "strict" mode refuses to move a terminal application to a
different status.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Literal

from models import APPLICATION_STATUSES, CreditApplication
from services.application_store import ApplicationStore
from services.errors import InvalidStatusValue

TransitionMode = Literal["permissive", "strict"]

TERMINAL_STATUSES = frozenset({"approved", "rejected"})


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LifecycleManager:
    def __init__(
        self,
        store: ApplicationStore,
        mode: TransitionMode = "permissive",
        clock: Callable[[], datetime] = _utcnow,
    ):
        if mode not in ("permissive", "strict"):
            raise ValueError(f"Unknown transition mode: {mode}")
        self.store = store
        self.mode = mode
        self._clock = clock

    async def apply_status(self, application_id: str, requested_status: object) -> CreditApplication:
        if requested_status not in APPLICATION_STATUSES:
            raise InvalidStatusValue(requested_status)
        # Strict mode is enforced inside the UPDATE itself so two reviewers
        # racing on a pending application cannot both win
        frozen = TERMINAL_STATUSES if self.mode == "strict" else ()
        return await self.store.update_status(
            application_id, requested_status, self._clock(), frozen_statuses=frozen
        )
