"""Health check and liveness endpoints."""
from fastapi import APIRouter
from pydantic import BaseModel

SERVICE_NAME = "web-collector-backend"

router = APIRouter(tags=["health"])

# Mounted under the versioned API prefix
ping_router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str


class PingResponse(BaseModel):
    """Liveness probe response."""

    message: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Report that the service is up. There are no backing services to probe."""
    return HealthResponse(status="ok", service=SERVICE_NAME)


@ping_router.get("/ping", response_model=PingResponse)
async def ping() -> PingResponse:
    """Liveness probe."""
    return PingResponse(message="pong")
