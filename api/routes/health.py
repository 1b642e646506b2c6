"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter, Response
from pydantic import BaseModel

from modules.roles.exceptions import DefaultRoleNotFoundError
from shared.config import get_settings
from shared.exceptions import ProfileSyncError

from ..dependencies import get_container

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    configuration: str
    database: str
    default_role: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(response: Response) -> ReadinessResponse:
    """
    Readiness check endpoint.

    Ready means webhooks can be processed end to end: configuration is
    complete, the database answers and the default role exists.
    Returns 503 otherwise.
    """
    container = get_container()
    missing = container.settings.missing_webhook_config()

    configuration = "complete" if not missing else f"missing {', '.join(missing)}"
    database = "unchecked"
    default_role = "unchecked"

    if not missing:
        try:
            await container.roles.resolve_default_role()
            database, default_role = "connected", "present"
        except DefaultRoleNotFoundError:
            database, default_role = "connected", "missing"
        except ProfileSyncError:
            database = "unavailable"

    ready = not missing and database == "connected" and default_role == "present"
    if not ready:
        response.status_code = 503

    return ReadinessResponse(
        status="ready" if ready else "not_ready",
        configuration=configuration,
        database=database,
        default_role=default_role,
    )
