"""Application entry point: ``python -m brigadas``."""

import sys

import structlog
import uvicorn

from brigadas.core import get_global_settings
from brigadas.core.logging import setup_logging

logger = structlog.get_logger(__name__)


def main() -> None:
    """Run the HTTP server until SIGINT/SIGTERM.

    Uvicorn runs the application lifespan, so the database pool is opened
    before the listener accepts requests and closed on shutdown. Any error
    escaping the server terminates the process with status 1.
    """
    try:
        settings = get_global_settings()
        setup_logging(settings.log_level)
        logger.info(
            "Starting server",
            host=settings.host,
            port=settings.port,
            environment=settings.environment,
        )
        uvicorn.run(
            "brigadas.main:app",
            host=settings.host,
            port=settings.port,
            lifespan="on",
            log_level=settings.log_level.lower(),
        )
    except Exception as e:
        logger.critical(
            "Server terminated by an uncaught error",
            error=str(e),
            error_type=type(e).__name__,
            exc_info=True,
        )
        sys.exit(1)


if __name__ == "__main__":
    main()
