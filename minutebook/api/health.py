"""Health check endpoints for monitoring and orchestration."""

from datetime import UTC, datetime

from fastapi import APIRouter, Request
from pydantic import BaseModel

from minutebook.config import settings

router = APIRouter(prefix="/health", tags=["health"])

# app.state attributes that must be wired before requests are served
_REQUIRED_STATE = ("series_repo", "minutes_repo", "topics_repo", "users_repo")


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
    service: str
    timestamp: datetime
    version: str
    environment: str


class LivenessResponse(BaseModel):
    status: str


class ReadinessResponse(BaseModel):
    """Readiness with one entry per checked dependency."""

    status: str
    checks: dict[str, str]


@router.get("/", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        service=settings.app_name,
        timestamp=datetime.now(UTC),
        version=settings.app_version,
        environment=settings.app_env,
    )


@router.get("/live", response_model=LivenessResponse)
async def liveness() -> LivenessResponse:
    return LivenessResponse(status="alive")


@router.get("/ready", response_model=ReadinessResponse)
async def readiness(request: Request) -> ReadinessResponse:
    """Ready once the database answers and all repositories are wired."""
    state = request.app.state
    checks: dict[str, str] = {}

    db = getattr(state, "db", None)
    if db is None:
        checks["database"] = "not_configured"
    else:
        checks["database"] = "ok" if await db.is_healthy() else "failed"

    missing = [name for name in _REQUIRED_STATE if getattr(state, name, None) is None]
    checks["repositories"] = "ok" if not missing else f"missing: {', '.join(missing)}"

    status = "ready" if all(v == "ok" for v in checks.values()) else "not_ready"
    return ReadinessResponse(status=status, checks=checks)
