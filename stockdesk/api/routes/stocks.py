"""Stock quote endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path

from stockdesk.api.dependencies import get_controller
from stockdesk.schemas.stocks import StockResponse
from stockdesk.simulation import SimulationController


router = APIRouter()


@router.get(
    "",
    response_model=list[StockResponse],
    summary="List stocks",
    description="Live quotes for every instrument in the universe, in display order.",
)
async def list_stocks(
    controller: SimulationController = Depends(get_controller),
) -> list[StockResponse]:
    return [
        StockResponse.from_tracker(tracker, controller.is_pending(tracker.meta.ticker))
        for tracker in controller.trackers()
    ]


@router.get(
    "/{ticker}",
    response_model=StockResponse,
    summary="Get stock",
    description="Metadata, live quote and signal status for one ticker.",
)
async def get_stock(
    ticker: str = Path(..., min_length=1, max_length=10, description="Stock ticker"),
    controller: SimulationController = Depends(get_controller),
) -> StockResponse:
    tracker = controller.tracker(ticker)
    return StockResponse.from_tracker(tracker, controller.is_pending(ticker))
