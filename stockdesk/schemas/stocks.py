"""Stock quote and portfolio response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from stockdesk.simulation.controller import InstrumentTracker
from stockdesk.simulation.portfolio import PnLTable


class StockResponse(BaseModel):
    """Static metadata plus the live quote for one ticker."""

    ticker: str
    name: str
    sector: str
    color: str
    shares: int
    market_cap: float
    pe: float
    eps: float
    beta: float
    dividend_yield: float
    high_52w: float
    low_52w: float

    price: float
    change: float
    pct_change: float = Field(..., description="Percent change since session open")
    open: float
    high: float
    low: float
    volume: int
    history: list[float] = Field(..., description="Closing prices, oldest first")

    has_assessment: bool = False
    assessment_pending: bool = False
    in_entry_zone: bool = Field(
        default=False, description="Price is inside the active assessment's entry zone"
    )

    @classmethod
    def from_tracker(cls, tracker: InstrumentTracker, pending: bool) -> StockResponse:
        meta, state = tracker.meta, tracker.state
        return cls(
            ticker=meta.ticker,
            name=meta.name,
            sector=meta.sector,
            color=meta.color,
            shares=meta.shares,
            market_cap=meta.market_cap,
            pe=meta.pe,
            eps=meta.eps,
            beta=meta.beta,
            dividend_yield=meta.dividend_yield,
            high_52w=meta.high_52w,
            low_52w=meta.low_52w,
            price=state.price,
            change=state.change,
            pct_change=state.pct_change,
            open=state.open,
            high=state.high,
            low=state.low,
            volume=state.volume,
            history=list(state.history),
            has_assessment=tracker.assessment is not None,
            assessment_pending=pending,
            in_entry_zone=tracker.in_entry_zone,
        )


class PnLResponse(BaseModel):
    """30-day portfolio P&L series and the per-position table."""

    series: list[float] = Field(..., description="Daily portfolio P&L, oldest first")
    table: PnLTable
