"""
Database readiness check.

Pings the configured database and creates any missing tables. Run it once
against a fresh development database:

    uv run python -m app.db.init_db

Note:
    Production schema is managed by Alembic (`uv run alembic upgrade head`).
"""

from asyncio import run as asyncio_run
from logging import getLogger

from app.configs import file_logger, settings
from app.db.database import close_db, init_db, ping
from app.errors.database import DatabaseConnectionError, DatabaseInitializationError

logger = file_logger(getLogger(__name__))


async def main() -> None:
    """Verify the database answers, then create posts, taxonomy and user tables."""
    try:
        if not await ping():
            raise DatabaseConnectionError(f"Cannot reach {settings.DATABASE_URL.split('@')[-1]}")
        await init_db()
        logger.info("Database ready!")
    except DatabaseConnectionError:
        logger.exception("Database is unreachable")
        raise
    except Exception as e:
        logger.exception("Failed to initialize database")
        raise DatabaseInitializationError from e
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio_run(main())
