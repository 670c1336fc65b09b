"""Database initialization script using SQLAlchemy create_all().

Creates the Brigadas table and the twelve equipment tables when they do not
exist yet. Existing tables are left untouched; this is not a migration tool.

Usage: ``python -m brigadas.init_db``
"""

import asyncio
import sys

import structlog
from sqlalchemy.exc import SQLAlchemyError

from brigadas.core import Base, DatabaseManager, ServiceException, get_global_settings
from brigadas.core.logging import setup_logging

# Registers the brigade tables on Base.metadata
from brigadas.features.brigades import models  # noqa: F401

logger = structlog.get_logger(__name__)


async def init_db() -> None:
    """Initialize database by creating all tables defined in models.

    Raises:
        DatabaseUnavailableError: If the database cannot be reached
        SQLAlchemyError: If table creation fails
    """
    db_manager = DatabaseManager(get_global_settings())
    await db_manager.initialize()
    try:
        logger.info("Creating database tables...")
        await db_manager.create_tables(Base.metadata)
        logger.info(
            "Database initialization completed successfully",
            tables_created=len(Base.metadata.tables),
            table_names=list(Base.metadata.tables.keys()),
        )
    finally:
        await db_manager.close()


def main() -> None:
    try:
        setup_logging(get_global_settings().log_level)
        asyncio.run(init_db())
    except (ServiceException, SQLAlchemyError) as e:
        logger.error(
            "Database initialization failed",
            error=str(e),
            error_type=type(e).__name__,
        )
        sys.exit(1)


if __name__ == "__main__":
    main()
