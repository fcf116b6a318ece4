"""AI assessment endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path

from stockdesk.api.dependencies import get_controller
from stockdesk.core.exceptions import ConflictError, NotFoundError
from stockdesk.domain.assessment import Assessment
from stockdesk.schemas.common import ErrorResponse
from stockdesk.simulation import SimulationController


router = APIRouter()


@router.get(
    "/{ticker}/assessment",
    response_model=Assessment,
    response_model_by_alias=False,
    summary="Get assessment",
    description="The stored assessment for a ticker.",
    responses={404: {"model": ErrorResponse, "description": "No assessment yet"}},
)
async def get_assessment(
    ticker: str = Path(..., min_length=1, max_length=10),
    controller: SimulationController = Depends(get_controller),
) -> Assessment:
    assessment = controller.assessment(ticker)
    if assessment is None:
        raise NotFoundError(
            message=f"No assessment for {ticker.upper()}",
            details={"ticker": ticker.upper()},
        )
    return assessment


@router.post(
    "/{ticker}/assessment",
    response_model=Assessment,
    response_model_by_alias=False,
    summary="Activate assessment",
    description=(
        "Request an AI assessment for a ticker and arm its price signals. "
        "Returns the stored assessment if the ticker is already assessed."
    ),
    responses={
        409: {"model": ErrorResponse, "description": "Assessment already in flight"},
        502: {"model": ErrorResponse, "description": "Malformed assessment response"},
        503: {"model": ErrorResponse, "description": "Assessment service unavailable"},
    },
)
async def activate_assessment(
    ticker: str = Path(..., min_length=1, max_length=10),
    controller: SimulationController = Depends(get_controller),
) -> Assessment:
    assessment = await controller.activate(ticker)
    if assessment is None:
        raise ConflictError(
            message=f"Assessment for {ticker.upper()} is already in progress",
            error_code="ASSESSMENT_IN_PROGRESS",
            details={"ticker": ticker.upper()},
        )
    return assessment
