"""
Service layer decorators for common functionality.

This module provides the error handling and logging decorator used by the
service layer.
"""

import functools
import inspect
from typing import Any, Awaitable, Callable, Dict, ParamSpec, TypeVar

import structlog

from .exceptions import DatabaseError, ServiceException

logger = structlog.get_logger(__name__)

P = ParamSpec("P")
R = TypeVar("R")

# Parameters that are never copied into the log context
_SKIPPED_PARAMETERS = ("self", "db", "session", "payload")


def _build_context(
    func: Callable[..., Any],
    service_name: str,
    args: tuple,
    kwargs: dict,
    include_context: bool,
) -> Dict[str, Any]:
    context: Dict[str, Any] = {
        "service": service_name,
        "operation": func.__name__,
    }
    if not include_context:
        return context

    bound_args = inspect.signature(func).bind(*args, **kwargs)
    bound_args.apply_defaults()
    for name, value in bound_args.arguments.items():
        if name in _SKIPPED_PARAMETERS:
            continue
        # Limit values to avoid huge log entries
        context[name] = str(value)[:200] if value is not None else None
    return context


def service_error_handler(
    service_name: str,
    include_context: bool = True,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """
    Decorator for handling service method errors with structured logging.

    Service exceptions (validation, not found, unavailable database) are
    logged and re-raised unchanged. Any other exception, including
    SQLAlchemy errors, is logged with full detail and re-raised as
    :class:`DatabaseError` so the request fails with a 500 response.

    :param service_name: Name of the service (e.g., "BrigadeService")
    :param include_context: Whether to include method parameters in log context
    :returns: Decorated coroutine function

    :example:
        @service_error_handler("BrigadeService")
        async def get_brigade(self, brigade_id: int) -> dict:
            ...
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        operation_name = func.__name__

        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            context = _build_context(
                func, service_name, args, kwargs, include_context
            )

            logger.debug("Service method called", **context)
            try:
                result = await func(*args, **kwargs)
            except ServiceException as e:
                log = logger.error if e.status_code >= 500 else logger.warning
                log(
                    "Service operation failed",
                    error_type=e.__class__.__name__,
                    error_message=e.message,
                    error_context=e.context,
                    **context,
                )
                raise
            except Exception as e:
                logger.error(
                    "Unexpected error in service operation",
                    error_type=e.__class__.__name__,
                    error_message=str(e),
                    exc_info=True,
                    **context,
                )
                raise DatabaseError(
                    message=str(e),
                    service=service_name,
                    operation=operation_name,
                    context=context,
                    original_error=e,
                ) from e

            logger.debug("Service method completed successfully", **context)
            return result

        return wrapper

    return decorator
