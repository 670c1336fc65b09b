"""
Middleware package for request logging.
"""

from .request_logging import RequestLoggingMiddleware

__all__ = [
    "RequestLoggingMiddleware"
]
