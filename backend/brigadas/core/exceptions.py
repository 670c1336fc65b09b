"""
Service layer custom exceptions.

Each exception carries the HTTP status and the public error text used by the
application's exception handlers to build the response envelope.
"""

from typing import Any, Dict, Optional


class ServiceException(Exception):
    """Base exception for all service layer errors."""

    status_code: int = 500
    public_error: str = "Error interno del servidor"

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.service = service
        self.operation = operation
        self.context = context or {}
        self.original_error = original_error

    def __str__(self) -> str:
        if self.service and self.operation:
            return f"[{self.service}.{self.operation}] {self.message}"
        return self.message


class ConfigurationError(ServiceException):
    """Exception raised when required configuration is missing at startup."""

    public_error = "Configuración inválida"


class DatabaseUnavailableError(ServiceException):
    """Exception raised when the connection pool is absent or disconnected."""

    status_code = 503
    public_error = "Servicio no disponible. Conexión a la base de datos fallida."


class DatabaseError(ServiceException):
    """Exception raised for database-related errors in services."""

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message=f"Database error: {message}",
            service=service,
            operation=operation,
            context=context,
            original_error=original_error,
        )


class ValidationError(ServiceException):
    """Exception raised for input validation errors.

    The message is returned to the client as the ``error`` field.
    """

    status_code = 400

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        operation: Optional[str] = None,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        validation_context = context or {}
        if field:
            validation_context["field"] = field
        if value is not None:
            validation_context["value"] = str(value)

        super().__init__(
            message=message,
            service=service,
            operation=operation,
            context=validation_context,
        )
        self.public_error = message


class NotFoundError(ServiceException):
    """Exception raised when an operation targets a missing or inactive record."""

    status_code = 404

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            service=service,
            operation=operation,
            context=context,
        )
        self.public_error = message
