"""Health check endpoints."""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter, Depends

from stockdesk.api.dependencies import get_controller
from stockdesk.core.config import settings
from stockdesk.services.openai import get_client_manager
from stockdesk.services.openai import get_settings as get_openai_settings
from stockdesk.schemas.common import HealthResponse
from stockdesk.simulation import SimulationController


router = APIRouter(prefix="/health")


def assessment_service_check() -> bool:
    """The advisory service is configured and its circuit is closed."""
    if not get_openai_settings().api_key:
        return False
    return not get_client_manager().is_circuit_open()


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check",
    description="Check the simulation session and the assessment service.",
)
async def health_check(
    controller: SimulationController = Depends(get_controller),
) -> HealthResponse:
    """
    Perform health check on the session and its dependencies.

    The simulation is required; a missing or tripped assessment service
    only degrades the status.
    """
    checks = {
        "simulation": bool(controller.tickers),
        "assessment_service": assessment_service_check(),
    }

    if all(checks.values()):
        status = "healthy"
    elif checks["simulation"]:
        status = "degraded"
    else:
        status = "unhealthy"

    return HealthResponse(
        status=status,
        version=settings.app_version,
        timestamp=datetime.now(UTC),
        checks=checks,
    )


@router.get(
    "/live",
    summary="Liveness check",
    description="Check if the API process is alive.",
)
async def liveness_check() -> dict:
    """Kubernetes-style liveness probe."""
    return {"status": "alive"}
