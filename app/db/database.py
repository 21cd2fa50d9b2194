"""Database engine and session management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from app.configs import pool_kwargs, settings
from app.monitoring.logging import get_logger

logger = get_logger(__name__)


def _configure_engine_events(engine: AsyncEngine) -> None:
    """Configure connection pool events for monitoring."""

    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection: object, connection_record: object) -> None:
        logger.debug("New database connection established")

    @event.listens_for(engine.sync_engine, "checkin")
    def on_checkin(dbapi_connection: object, connection_record: object) -> None:
        logger.debug("Connection returned to pool")


def _enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection."""

    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection: object, connection_record: object) -> None:
        cursor = dbapi_connection.cursor()  # type: ignore[attr-defined]
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(url: str, **kwargs: object) -> AsyncEngine:
    """
    Create an async engine with the application's connection hooks.

    Args:
        url: SQLAlchemy async database URL.
        **kwargs: Extra engine arguments (pool settings, connect args).

    Returns:
        AsyncEngine: Configured engine.
    """
    new_engine = create_async_engine(url, echo=settings.DATABASE_ECHO, **kwargs)
    if url.startswith("sqlite"):
        _enable_sqlite_foreign_keys(new_engine)
    if settings.DEBUG:
        _configure_engine_events(new_engine)
    return new_engine


engine: AsyncEngine = build_engine(settings.DATABASE_URL, **pool_kwargs())

async_session_maker: async_sessionmaker[SQLModelAsyncSession] = async_sessionmaker(
    engine,
    class_=SQLModelAsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_session() -> AsyncGenerator[AsyncSession]:
    """
    Dependency for getting async database sessions.

    This function is used as a FastAPI dependency to provide
    database sessions to route handlers.

    Yields:
        AsyncSession: Database session
    """
    async with transaction() as session:
        yield session


@asynccontextmanager
async def transaction() -> AsyncGenerator[AsyncSession]:
    """
    Context manager for explicit transaction management.

    Commits on successful exit, rolls back on exception.

    Yields:
        AsyncSession: Database session within a transaction
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            logger.warning("Transaction rolled back")
            raise
        finally:
            await session.close()


async def init_db(target: AsyncEngine | None = None) -> None:
    """
    Create all tables defined in SQLModel models.

    Called on application startup. Schema changes for deployed databases
    go through Alembic migrations.
    """
    # Models must be imported so that they register on SQLModel.metadata
    from app.models import PortfolioUserDB, ProjectDB, SkillDB, UserDB  # noqa: F401, PLC0415

    async with (target or engine).begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database initialized successfully!")


async def close_db() -> None:
    """Dispose of the engine's connection pool on shutdown."""
    await engine.dispose()
    logger.info("Database connections closed")
