"""
Health check endpoints.

Provides liveness and readiness probes.
"""

from fastapi import APIRouter, Response, status
from pydantic import BaseModel

from interestmeet.config import settings

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    content_source: str | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running.
    Does not check dependencies.
    """
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(response: Response) -> HealthResponse:
    """
    Readiness probe.

    Returns 503 when no Anthropic API key is configured, since no deck,
    profile or live chat can be generated without one.
    """
    if settings.anthropic_api_key:
        return HealthResponse(status="ready", content_source="configured")
    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return HealthResponse(status="not ready", content_source="missing api key")
