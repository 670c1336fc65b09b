"""Main FastAPI application for the Brigadas API."""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from brigadas import __version__
from brigadas.core import (
    DatabaseManager,
    ServiceException,
    Settings,
    get_global_settings,
)
from brigadas.core.logging import setup_logging
from brigadas.features.brigades.router import AVAILABLE_ROUTES
from brigadas.features.brigades.router import router as brigades_router
from brigadas.features.brigades.schemas import ErrorResponse
from brigadas.middleware import RequestLoggingMiddleware

logger = structlog.get_logger(__name__)

API_PREFIX = "/api"
INTERNAL_ERROR = "Error interno del servidor"
GENERIC_ERROR_MESSAGE = "Ha ocurrido un error inesperado"


def _is_production(request: Request) -> bool:
    settings: Optional[Settings] = getattr(request.app.state, "settings", None)
    return settings is None or settings.is_production


def _error_detail(error: BaseException) -> str:
    """Driver message of a database error, without the SQL and its parameters."""
    return str(getattr(error, "orig", None) or error)


async def service_exception_handler(
    request: Request, exc: ServiceException
) -> JSONResponse:
    """Translate service exceptions into the error envelope."""
    message = None
    if exc.status_code >= 500 and exc.status_code != 503:
        if _is_production(request):
            message = GENERIC_ERROR_MESSAGE
        else:
            message = _error_detail(exc.original_error or exc)

    content = ErrorResponse(error=exc.public_error, message=message).to_content()
    return JSONResponse(status_code=exc.status_code, content=content)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed JSON and body type errors are client errors (400)."""
    errors = exc.errors()
    if any(error.get("type") == "json_invalid" for error in errors):
        logger.error("Malformed JSON body", errors=str(errors)[:200])
        content = ErrorResponse(
            error="JSON inválido en el cuerpo de la petición",
            message="Por favor, verifica que el JSON esté bien formateado",
        ).to_content()
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)

    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'][1:]) or 'body'}: {error['msg']}"
        for error in errors
    )
    logger.warning("Invalid request body", errors=details)
    content = ErrorResponse(
        error="Datos inválidos en el cuerpo de la petición", message=details
    ).to_content()
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Unmatched routes (any method) answer 404 with the list of routes."""
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        path = request.url.path
        if request.url.query:
            path = f"{path}?{request.url.query}"
        content = ErrorResponse(
            error="Ruta no encontrada",
            message=f"La ruta {path} no existe",
            available_routes=AVAILABLE_ROUTES,
        ).to_content()
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=content)

    content = ErrorResponse(error=str(exc.detail)).to_content()
    return JSONResponse(
        status_code=exc.status_code, content=content, headers=exc.headers
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler; the process keeps serving."""
    logger.error(
        "Unhandled error",
        error=str(exc),
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    if _is_production(request):
        message = GENERIC_ERROR_MESSAGE
    else:
        message = _error_detail(exc)
    content = ErrorResponse(error=INTERNAL_ERROR, message=message).to_content()
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content
    )


async def health_check(request: Request) -> Dict[str, Any]:
    """
    Health check endpoint.

    Not gated by the database connection: it reports the database status
    instead of failing when the pool is down.
    """
    db_manager: Optional[DatabaseManager] = getattr(
        request.app.state, "db_manager", None
    )
    if db_manager is None:
        database = "Error de conexión"
    elif await db_manager.ping():
        database = "Conectada"
    else:
        database = "Desconectada"

    return {
        "success": True,
        "status": "OK",
        "message": "API de Brigadas de Bomberos funcionando correctamente",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": database,
        "version": __version__,
    }


def create_app(
    settings: Optional[Settings] = None,
    db_manager: Optional[DatabaseManager] = None,
) -> FastAPI:
    """Build the application.

    :param settings: Settings to use; loaded from the environment when omitted
    :param db_manager: Connection manager to use; built from settings when omitted
    :raises ConfigurationError: If required settings are missing
    """
    settings = settings or get_global_settings()
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Connect to the database before serving; close the pool on shutdown."""
        manager = db_manager or DatabaseManager(settings)
        logger.info("Initializing database connection")
        await manager.initialize()
        app.state.db_manager = manager
        logger.info(
            "Brigadas API started",
            port=settings.port,
            api_prefix=API_PREFIX,
            health_check=f"{API_PREFIX}/health",
            environment=settings.environment,
        )
        try:
            yield
        finally:
            logger.info("Shutting down Brigadas API")
            await manager.close()
            app.state.db_manager = None

    app = FastAPI(
        title="API de Brigadas de Bomberos",
        description="Brigade records and equipment inventories for firefighting brigades.",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.db_manager = None

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.add_exception_handler(ServiceException, service_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.add_api_route(f"{API_PREFIX}/health", health_check, methods=["GET"], tags=["health"])
    app.include_router(brigades_router, prefix=API_PREFIX)

    return app


app = create_app()
