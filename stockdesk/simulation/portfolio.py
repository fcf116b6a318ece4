"""Portfolio aggregation.

Pure functions over the universe table and whatever live states exist.
A ticker with no state yet contributes nothing; a zero cost basis gives a
zero return instead of raising.
"""

from __future__ import annotations

from typing import Mapping

from pydantic import BaseModel, Field

from stockdesk.core.formatting import round_price, safe_pct
from stockdesk.domain.instrument import InstrumentMeta, InstrumentState


PNL_DAY_OFFSETS: tuple[int, ...] = (-29, -21, -14, -7, -3, -1, 0)


class PortfolioSnapshot(BaseModel):
    """Portfolio totals derived from current prices."""

    value: float = Field(..., description="Sum of price x shares")
    cost: float = Field(..., description="Sum of cost basis x shares")
    pnl: float
    return_pct: float = Field(..., description="P&L / cost x 100, 0 when cost is 0")
    positions: int = Field(..., description="Instruments included in the totals")


class PositionRow(BaseModel):
    """One row of the P&L table."""

    ticker: str
    sector: str
    shares: int
    entry: float = Field(..., description="Cost basis (oldest price in the window)")
    current: float
    day_pnl: dict[int, float] = Field(
        default_factory=dict, description="P&L keyed by day offset (0 = today)"
    )
    total_pnl: float
    total_return_pct: float


class PnLTable(BaseModel):
    rows: list[PositionRow]
    day_totals: dict[int, float]
    total_pnl: float


def _held(
    universe: Mapping[str, InstrumentMeta],
    states: Mapping[str, InstrumentState],
) -> list[tuple[InstrumentMeta, InstrumentState]]:
    return [
        (meta, states[ticker])
        for ticker, meta in universe.items()
        if states.get(ticker) is not None
    ]


def portfolio_snapshot(
    universe: Mapping[str, InstrumentMeta],
    states: Mapping[str, InstrumentState],
) -> PortfolioSnapshot:
    """Current value, cost basis, P&L and percent return."""
    held = _held(universe, states)
    value = sum(state.price * meta.shares for meta, state in held)
    cost = sum(state.cost_basis * meta.shares for meta, state in held)
    pnl = value - cost
    return PortfolioSnapshot(
        value=value,
        cost=cost,
        pnl=pnl,
        return_pct=safe_pct(pnl, cost),
        positions=len(held),
    )


def pnl_series(
    universe: Mapping[str, InstrumentMeta],
    states: Mapping[str, InstrumentState],
    days: int = 30,
) -> list[float]:
    """
    Daily portfolio P&L across the history window, oldest first.

    Each day's total is sum((history[d] - history[0]) x shares). Short
    histories repeat their last sample.
    """
    held = _held(universe, states)
    series: list[float] = []
    for d in range(days):
        total = 0.0
        for meta, state in held:
            history = state.history
            if not history:
                continue
            price = history[min(d, len(history) - 1)]
            total += (price - history[0]) * meta.shares
        series.append(round_price(total))
    return series


def _price_at_offset(history: list[float], offset: int) -> float:
    last = len(history) - 1
    idx = max(0, last + offset)
    return history[min(idx, last)]


def position_rows(
    universe: Mapping[str, InstrumentMeta],
    states: Mapping[str, InstrumentState],
    offsets: tuple[int, ...] = PNL_DAY_OFFSETS,
) -> PnLTable:
    """Per-position P&L at fixed day offsets plus portfolio totals."""
    rows: list[PositionRow] = []
    day_totals = {offset: 0.0 for offset in offsets}

    for meta, state in _held(universe, states):
        if not state.history:
            continue
        entry = state.history[0]
        day_pnl: dict[int, float] = {}
        for offset in offsets:
            pnl = (_price_at_offset(state.history, offset) - entry) * meta.shares
            day_pnl[offset] = round_price(pnl)
            day_totals[offset] += pnl
        total_pnl = (state.price - entry) * meta.shares
        rows.append(PositionRow(
            ticker=meta.ticker,
            sector=meta.sector,
            shares=meta.shares,
            entry=entry,
            current=state.price,
            day_pnl=day_pnl,
            total_pnl=round_price(total_pnl),
            total_return_pct=safe_pct(state.price - entry, entry),
        ))

    return PnLTable(
        rows=rows,
        day_totals={k: round_price(v) for k, v in day_totals.items()},
        total_pnl=round_price(sum(row.total_pnl for row in rows)),
    )
