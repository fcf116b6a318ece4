"""Portfolio endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from stockdesk.api.dependencies import get_controller
from stockdesk.schemas.stocks import PnLResponse
from stockdesk.simulation import PortfolioSnapshot, SimulationController


router = APIRouter()


@router.get(
    "",
    response_model=PortfolioSnapshot,
    summary="Portfolio summary",
    description="Market value, cost basis and P&L across all positions.",
)
async def get_portfolio(
    controller: SimulationController = Depends(get_controller),
) -> PortfolioSnapshot:
    return controller.portfolio()


@router.get(
    "/pnl",
    response_model=PnLResponse,
    summary="Portfolio P&L history",
    description="Daily P&L over the price history plus per-position P&L at fixed day offsets.",
)
async def get_pnl(
    controller: SimulationController = Depends(get_controller),
) -> PnLResponse:
    return PnLResponse(series=controller.pnl_series(), table=controller.pnl_table())
