"""Request logging middleware: one structured access-log entry per request."""

import time
import uuid

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp
from structlog import contextvars as structlog_contextvars

logger = structlog.get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration of every request."""

    def __init__(self, app: ASGIApp, slow_request_threshold: float = 2.0):
        """
        Initialize request logging middleware.

        Args:
            app: ASGI application
            slow_request_threshold: Seconds after which a request is logged as slow
        """
        super().__init__(app)
        self.slow_request_threshold = slow_request_threshold

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """
        Process incoming request with access logging.

        Args:
            request: Incoming HTTP request
            call_next: Next middleware/endpoint handler

        Returns:
            HTTP response
        """
        start_time = time.perf_counter()
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex

        # Every log line emitted while handling the request carries its id
        structlog_contextvars.clear_contextvars()
        structlog_contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.perf_counter() - start_time
            logger.error(
                "Request failed",
                duration_ms=round(duration * 1000),
                error=str(e),
            )
            raise

        duration = time.perf_counter() - start_time
        client = request.client.host if request.client else None
        logger.info(
            "Request completed",
            status_code=response.status_code,
            duration_ms=round(duration * 1000),
            client=client,
            user_agent=request.headers.get("user-agent"),
        )

        if duration > self.slow_request_threshold:
            logger.warning(
                "Slow request detected",
                duration_seconds=round(duration, 3),
                threshold=self.slow_request_threshold,
            )

        response.headers["X-Response-Time"] = f"{duration:.3f}s"
        response.headers["X-Request-ID"] = request_id
        structlog_contextvars.clear_contextvars()
        return response
