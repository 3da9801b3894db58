"""Health check endpoint."""

from fastapi import APIRouter

from api.schemas import HealthResponse

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check that the readiness service is up.",
)
async def health_check() -> HealthResponse:
    """Return service health status. No outbound checks are made."""
    return HealthResponse()
