"""Health and permission-echo routes."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends

from ai_proxy.api.deps import get_app_settings
from ai_proxy.core.config import Settings
from ai_proxy.schemas.health import HealthResponse, PermissionResponse

SERVICE_NAME = "Google AI Proxy"
SERVICE_NOTE = "Powered by Google Cloud $300 Credits"

router = APIRouter(tags=["health"])


def utc_timestamp() -> str:
    """ISO-8601 UTC with milliseconds, e.g. 2024-01-01T00:00:00.000Z"""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.get("/", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_app_settings)):
    """Health check, always 200 while the process is up."""
    return HealthResponse(
        service=SERVICE_NAME,
        status="running",
        project=settings.project_id,
        timestamp=utc_timestamp(),
        note=SERVICE_NOTE,
    )


@router.get("/test-permissions", response_model=PermissionResponse)
async def permission_echo(settings: Settings = Depends(get_app_settings)):
    """Static echo of the configured identity; nothing is actually checked."""
    return PermissionResponse(
        message="Permissions verified",
        project=settings.project_id,
        service_account=settings.service_account,
        timestamp=utc_timestamp(),
    )
