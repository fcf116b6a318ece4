"""
Typed request context for the assessment task.

Mirrors the payload the advisory service expects: static instrument facts
plus the live quote at the moment of activation.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from stockdesk.core.formatting import format_market_cap
from stockdesk.domain.instrument import InstrumentMeta, InstrumentState


class AssessmentRequest(BaseModel):
    """Snapshot sent to the advisory service (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    ticker: str
    name: str
    sector: str
    price: float
    pct_change: float
    open: float
    high: float
    low: float
    mkt_cap: str
    pe: float
    eps: float
    beta: float
    div: float
    lo52: float
    hi52: float


def build_assessment_request(
    meta: InstrumentMeta,
    state: InstrumentState,
) -> AssessmentRequest:
    """Combine static metadata with the live quote."""
    return AssessmentRequest(
        ticker=meta.ticker,
        name=meta.name,
        sector=meta.sector,
        price=state.price,
        pct_change=state.pct_change,
        open=state.open,
        high=state.high,
        low=state.low,
        mkt_cap=format_market_cap(meta.market_cap),
        pe=meta.pe,
        eps=meta.eps,
        beta=meta.beta,
        div=meta.dividend_yield,
        lo52=meta.low_52w,
        hi52=meta.high_52w,
    )
