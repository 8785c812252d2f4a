from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import AsyncAdaptedQueuePool

from config import settings


def _is_memory_sqlite(database_url: str) -> bool:
    return make_url(database_url).database in (None, "", ":memory:")


def _get_engine_kwargs(database_url: str):
    """Return dialect-specific engine options for SQLite vs PostgreSQL."""
    kwargs = {"echo": settings.debug}
    if make_url(database_url).get_backend_name() != "sqlite":
        return kwargs
    if _is_memory_sqlite(database_url):
        # The database lives in one connection; sessions queue for it instead of sharing it
        kwargs["poolclass"] = AsyncAdaptedQueuePool
        kwargs["pool_size"] = 1
        kwargs["max_overflow"] = 0
        kwargs["pool_timeout"] = settings.sqlite_busy_timeout
        kwargs["connect_args"] = {"check_same_thread": False}
    else:
        kwargs["connect_args"] = {
            "check_same_thread": False,
            "timeout": settings.sqlite_busy_timeout,
        }
    return kwargs


def enable_sqlite_savepoints(async_engine: AsyncEngine, begin_statement: str = "BEGIN") -> None:
    """
    Let SQLAlchemy own BEGIN on SQLite connections.
    The sqlite3 driver defers BEGIN on its own, which breaks SAVEPOINT; the
    store relies on savepoints to turn unique violations into a typed error.
    """

    @event.listens_for(async_engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(async_engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql(begin_statement)


def build_engine(database_url: str) -> AsyncEngine:
    async_engine = create_async_engine(database_url, **_get_engine_kwargs(database_url))
    if async_engine.dialect.name == "sqlite":
        # File databases: take the write lock up front so concurrent
        # transactions wait on the busy timeout instead of failing to upgrade
        begin = "BEGIN" if _is_memory_sqlite(database_url) else "BEGIN IMMEDIATE"
        enable_sqlite_savepoints(async_engine, begin)
    return async_engine


def build_sessionmaker(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


engine = build_engine(settings.database_url)

AsyncSessionLocal = build_sessionmaker(engine)


class Base(DeclarativeBase):
    pass


async def get_db():
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db(async_engine: AsyncEngine = engine):
    # Register tables on Base.metadata before create_all
    import models  # noqa: F401

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
