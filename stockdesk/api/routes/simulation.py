"""Simulation control endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from stockdesk.api.dependencies import get_controller
from stockdesk.core.logging import get_logger
from stockdesk.schemas.common import MessageResponse
from stockdesk.schemas.notifications import TickResponse
from stockdesk.simulation import SimulationController


router = APIRouter()

logger = get_logger("api.simulation")


@router.post(
    "/tick",
    response_model=TickResponse,
    summary="Advance one tick",
    description="Nudge every price once and evaluate signals, outside the periodic loop.",
)
async def tick(
    controller: SimulationController = Depends(get_controller),
) -> TickResponse:
    fired = controller.tick()
    return TickResponse(tick=controller.tick_count, at=controller.last_tick_at, fired=fired)


@router.post(
    "/reset",
    response_model=MessageResponse,
    summary="Reset session",
    description="Regenerate every instrument from its seeds and drop assessments and notifications.",
)
async def reset(
    controller: SimulationController = Depends(get_controller),
) -> MessageResponse:
    controller.reset()
    logger.info("Session reset via API")
    return MessageResponse(message="Simulation reset")
