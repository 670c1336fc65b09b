"""Database connection and session management using SQLAlchemy with async support.

The :class:`DatabaseManager` owns the process-wide connection pool. It is
constructed once by the application factory, initialized during startup and
closed during shutdown. Request handlers reach it through the :func:`get_db`
dependency, which also acts as the connection-liveness gate.
"""

from contextlib import asynccontextmanager
from typing import Annotated, AsyncGenerator, Optional

import structlog
from fastapi import Depends, Request
from sqlalchemy import MetaData, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from .config import Settings
from .exceptions import DatabaseUnavailableError

logger = structlog.get_logger(__name__)


class DatabaseManager:
    """Database connection pool and session manager."""

    def __init__(self, settings: Settings):
        """Prepare the manager; no connection is opened until :meth:`initialize`."""
        self.settings = settings
        self.engine: Optional[AsyncEngine] = None
        self.async_session_factory: Optional[async_sessionmaker[AsyncSession]] = None
        self._connected = False
        self._closed = False

    @property
    def is_connected(self) -> bool:
        """Whether the pool exists and the last probe succeeded."""
        return self.engine is not None and self._connected and not self._closed

    async def initialize(self) -> AsyncEngine:
        """Create the connection pool and verify it with a probe query.

        :returns: The live async engine
        :raises DatabaseUnavailableError: If the database cannot be reached
        """
        database_url = self.settings.database_url
        logger.info(
            "Connecting to database",
            database_url=database_url.render_as_string(hide_password=True),
        )

        # Connections are opened lazily, so the pool keeps no idle minimum
        engine = create_async_engine(
            database_url,
            pool_size=self.settings.db_pool_max,
            max_overflow=0,
            pool_recycle=self.settings.db_pool_idle_timeout,
            pool_pre_ping=True,
            echo=self.settings.debug,
        )

        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            await engine.dispose()
            logger.error(
                "Database connection failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            raise DatabaseUnavailableError(
                "Database connection failed", original_error=e
            ) from e

        self.engine = engine
        self.async_session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        self._connected = True
        self._closed = False
        logger.info("Connected to database")
        return engine

    def get_engine(self) -> AsyncEngine:
        """Return the active engine.

        :raises DatabaseUnavailableError: If no pool exists or it is disconnected
        """
        if self.engine is None or not self.is_connected:
            raise DatabaseUnavailableError("Pool de conexiones no disponible")
        return self.engine

    async def ping(self) -> bool:
        """Probe the database and record the result as the connection state."""
        if self.engine is None or self._closed:
            return False

        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            logger.warning("Database ping failed", error=str(e))
            self._connected = False
            return False

        self._connected = True
        return True

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Get a database session with proper cleanup."""
        self.get_engine()
        if self.async_session_factory is None:
            raise DatabaseUnavailableError("Pool de conexiones no disponible")

        async with self.async_session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def create_tables(self, metadata: MetaData) -> None:
        """Create all tables in ``metadata`` that do not exist yet."""
        engine = self.get_engine()
        async with engine.begin() as conn:
            await conn.run_sync(metadata.create_all)

    async def close(self) -> None:
        """Close the connection pool. Only the first call has an effect."""
        if self._closed:
            return
        self._closed = True
        self._connected = False

        if self.engine is not None:
            await self.engine.dispose()
            logger.info("Database connection pool closed")


def get_db_manager(request: Request) -> DatabaseManager:
    """Connection-liveness gate.

    Reads the connection state recorded by the last probe: startup or
    ``/api/health``. After a failed health probe every request answers 503
    until a later health probe succeeds.

    :raises DatabaseUnavailableError: If the pool is absent or disconnected
    """
    db_manager: Optional[DatabaseManager] = getattr(
        request.app.state, "db_manager", None
    )
    if db_manager is None or not db_manager.is_connected:
        logger.error(
            "Database connection not established",
            method=request.method,
            path=request.url.path,
        )
        raise DatabaseUnavailableError("Database connection not established")
    return db_manager


# Dependency for FastAPI routes
async def get_db(
    db_manager: Annotated[DatabaseManager, Depends(get_db_manager)],
) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a session from the live pool."""
    async with db_manager.session() as session:
        yield session
