"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import Settings, get_settings
from shared.exceptions import (
    AmcbunqError,
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)
from modules.routing.middleware import LocaleRoutingMiddleware
from modules.routing.router import build_routing_mode
from modules.routing.routes import router as pages_router
from modules.verification.routes import router as verification_router
from .models.errors import ErrorResponse
from .routes import health, users

logger = logging.getLogger(__name__)


def status_for_error(error: AmcbunqError) -> int:
    """HTTP status for an uncaught backend error."""
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, ValidationError):
        return 400
    if isinstance(error, AuthenticationError):
        return 401
    if isinstance(error, AuthorizationError):
        return 403
    if isinstance(error, (ConfigurationError, ExternalServiceError)):
        return 503
    return 500


async def handle_app_error(request: Request, exc: AmcbunqError) -> JSONResponse:
    """Render AmcbunqError subclasses as the standard error body."""
    status_code = status_for_error(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status_code, content=exc.to_dict())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    settings = get_settings()
    logger.info(
        "Starting %s on %s:%s (routing mode: %s)",
        settings.app_name,
        settings.host,
        settings.port,
        settings.routing_mode,
    )
    if not settings.mailgun_configured:
        logger.warning(
            "Mailgun environment variables (MAILGUN_API_KEY, MAILGUN_DOMAIN, "
            "MAILGUN_FROM_EMAIL) are not set. Verification emails cannot be sent."
        )
    yield
    logger.info("Shutting down %s", settings.app_name)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to build the app with (defaults to get_settings())

    Returns:
        Configured FastAPI instance

    Raises:
        ConfigurationError: If the routing configuration is invalid
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Edge routing and email verification for the AmCbunq banking site",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
        openapi_url="/api/openapi.json",
    )

    app.add_exception_handler(AmcbunqError, handle_app_error)

    # Added first so it runs innermost; CORS wraps redirects too
    app.add_middleware(LocaleRoutingMiddleware, mode=build_routing_mode(settings))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])
    app.include_router(
        verification_router,
        prefix="/api/verification",
        tags=["verification"],
        responses={403: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
    )
    app.include_router(pages_router, tags=["pages"])

    return app


# Application instance for uvicorn
app = create_app()
