"""
Domain models for the simulated portfolio.

Usage:
    from stockdesk.domain import InstrumentMeta, InstrumentState, Assessment
"""

from stockdesk.domain.assessment import (
    Assessment,
    EntryPoint,
    EntryUrgency,
    HoldStrategy,
    Rating,
    SellSentiment,
    SellSignal,
)
from stockdesk.domain.instrument import InstrumentMeta, InstrumentState
from stockdesk.domain.universe import TICKERS, UNIVERSE, normalize_ticker


__all__ = [
    "Assessment",
    "EntryPoint",
    "EntryUrgency",
    "HoldStrategy",
    "InstrumentMeta",
    "InstrumentState",
    "Rating",
    "SellSentiment",
    "SellSignal",
    "TICKERS",
    "UNIVERSE",
    "normalize_ticker",
]
