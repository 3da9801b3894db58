"""API route exports."""

from api.routes.health import router as health_router
from api.routes.readiness import router as readiness_router

__all__ = ["health_router", "readiness_router"]
