"""FastAPI providers wiring the per-request session into the application services."""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from database import get_db
from services.application_store import ApplicationStore
from services.identifiers import IdentifierGenerator
from services.lifecycle import LifecycleManager
from services.threads import MessageThreadManager


def get_store(db: AsyncSession = Depends(get_db)) -> ApplicationStore:
    return ApplicationStore(db)


def get_generator(store: ApplicationStore = Depends(get_store)) -> IdentifierGenerator:
    return IdentifierGenerator(
        store.exists,
        prefix=settings.application_id_prefix,
        max_attempts=settings.id_max_attempts,
    )


def get_lifecycle(store: ApplicationStore = Depends(get_store)) -> LifecycleManager:
    return LifecycleManager(store, mode=settings.status_transition_mode)


def get_threads(store: ApplicationStore = Depends(get_store)) -> MessageThreadManager:
    return MessageThreadManager(store.session, store)
