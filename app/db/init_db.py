"""
Database initialization and verification script.

Creates missing tables and verifies connectivity. Run it directly with
``python -m app.db.init_db``; schema changes for existing databases are
managed by Alembic (``alembic upgrade head``).
"""

from asyncio import run as asyncio_run

from app.db.database import close_db, init_db
from app.errors.database import DatabaseInitializationError
from app.monitoring.logging import configure_logging, get_logger

logger = get_logger(__name__)


async def main() -> None:
    """Verify database connection."""
    try:
        logger.info("Verifying database connection...")
        await init_db()
        logger.info("Database ready!")
    except Exception as e:
        logger.exception("Failed to connect to database")
        raise DatabaseInitializationError from e
    finally:
        await close_db()


if __name__ == "__main__":
    configure_logging()
    asyncio_run(main())
