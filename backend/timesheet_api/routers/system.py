"""System-level endpoints."""
from datetime import datetime, timezone

from fastapi import APIRouter

from ..schemas import HealthResponse

router = APIRouter(prefix="/api", tags=["system"])


@router.get("/health", response_model=HealthResponse)
async def healthcheck() -> HealthResponse:
    """Simple readiness probe for uptime checks."""

    timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return HealthResponse(status="OK", timestamp=timestamp.replace("+00:00", "Z"))
