"""Core infrastructure module.

This module exports core utilities used across features.
Never imports from features - only from external libraries.
"""

from .config import Settings, get_settings, get_global_settings
from .database import DatabaseManager, get_db, get_db_manager
from .exceptions import (
    ServiceException,
    ConfigurationError,
    DatabaseUnavailableError,
    DatabaseError,
    ValidationError,
    NotFoundError,
)
from .models import Base

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "get_global_settings",
    # Database
    "DatabaseManager",
    "get_db",
    "get_db_manager",
    # Exceptions
    "ServiceException",
    "ConfigurationError",
    "DatabaseUnavailableError",
    "DatabaseError",
    "ValidationError",
    "NotFoundError",
    # Models
    "Base",
]
