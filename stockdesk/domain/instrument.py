"""Instrument domain models.

Static metadata per ticker plus the mutable live price state the
simulation updates on every tick.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, computed_field


class InstrumentMeta(BaseModel):
    """Static, immutable description of a tracked instrument."""

    model_config = ConfigDict(frozen=True)

    ticker: str = Field(..., description="Ticker symbol")
    name: str = Field(..., description="Display name")
    sector: str
    base: float = Field(..., gt=0, description="Reference price the simulation starts from")
    market_cap: float = Field(..., ge=0)
    pe: float
    eps: float
    dividend_yield: float = Field(..., ge=0, description="Dividend yield in percent")
    beta: float
    high_52w: float = Field(..., gt=0)
    low_52w: float = Field(..., gt=0)
    color: str = Field(..., description="Display color (hex)")
    shares: int = Field(..., ge=0, description="Shares held")
    drift_seed: int = Field(..., description="Seed for the current-quote stream")
    history_seed: int = Field(..., description="Seed for the 30-day history stream")


class InstrumentState(BaseModel):
    """Live price state for one instrument.

    Mutated in place by each tick. The last element of ``history`` always
    equals ``price``.
    """

    price: float
    change: float
    pct_change: float = Field(..., description="Percent change relative to session open")
    open: float
    high: float
    low: float
    volume: int = Field(..., ge=0)
    history: list[float] = Field(
        default_factory=list, description="Closing prices, oldest first"
    )

    @computed_field
    @property
    def cost_basis(self) -> float:
        """Reference price for P&L (first value in the history window)."""
        return self.history[0] if self.history else self.price
