"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings
from shared.exceptions import ConfigurationError, ExternalServiceError, ProfileSyncError

from .routes import health, users
from modules.profiles.routes import router as profiles_router
from modules.roles.routes import router as roles_router
from modules.webhooks.routes import router as webhooks_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Refuses to start without the webhook signing secret and the
    Supabase credentials.
    """
    # Startup
    settings = get_settings()
    try:
        settings.require_webhook_config()
    except ConfigurationError as e:
        logger.critical(e.message)
        raise
    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")


async def profile_sync_error_handler(request: Request, exc: ProfileSyncError) -> JSONResponse:
    """Render module errors that escaped a route as JSON."""
    status_code = 502 if isinstance(exc, ExternalServiceError) else 500
    logger.error(f"{request.method} {request.url.path} failed: [{exc.code}] {exc.message}")
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.message, "code": exc.code},
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Identity webhook reconciliation and profile administration API",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(ProfileSyncError, profile_sync_error_handler)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])
    app.include_router(profiles_router, prefix="/api/profiles", tags=["profiles"])
    app.include_router(roles_router, prefix="/api/roles", tags=["roles"])
    app.include_router(webhooks_router, prefix="/api/webhooks", tags=["webhooks"])

    return app


# Application instance for uvicorn
app = create_app()
