"""
Synthetic price-path generation.

Builds each instrument's opening quote and 30-sample closing history from
two independent LCG streams: one seeded for today's quote, one seeded for
the history shape. The history is then pinned so its last sample equals
the quote price.

The numbers are for demonstration only and make no attempt to be
statistically faithful to a real market.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from stockdesk.core.formatting import round_price
from stockdesk.domain.instrument import InstrumentMeta, InstrumentState
from stockdesk.simulation.prng import LcgRandom


HISTORY_LENGTH = 30
MIN_PRICE = 1.0

# Quote stream
DRIFT_CENTER = 0.49
DRIFT_SCALE = 0.01
OPEN_SCALE = 0.006
RANGE_SCALE = 0.012
VOLUME_SPAN = 40_000_000
VOLUME_FLOOR = 5_000_000

# History stream
HISTORY_START_DISCOUNT = 0.12
SHOCK_CENTER = 0.485
SHOCK_SCALE = 0.025


@dataclass(frozen=True)
class Quote:
    """Start-of-session quote for one instrument."""
    price: float
    change: float
    pct_change: float
    open: float
    high: float
    low: float
    volume: int


def synthesize_quote(base: float, seed: int) -> Quote:
    """
    Derive the opening quote from ``base`` and the drift seed.

    Draw order is fixed: drift, open, high, low, volume.
    """
    r = LcgRandom(seed)
    drift = (r.next() - DRIFT_CENTER) * base * DRIFT_SCALE
    price = round_price(base + drift)
    open_ = round_price(base + (r.next() - 0.5) * base * OPEN_SCALE)
    high = round_price(price * (1 + r.next() * RANGE_SCALE))
    low = round_price(price * (1 - r.next() * RANGE_SCALE))
    volume = math.floor(r.next() * VOLUME_SPAN + VOLUME_FLOOR)
    return Quote(
        price=price,
        change=round_price(drift),
        pct_change=round_price(drift / base * 100),
        open=open_,
        high=high,
        low=low,
        volume=volume,
    )


def synthesize_history(
    anchor: float,
    seed: int,
    length: int = HISTORY_LENGTH,
) -> list[float]:
    """
    Build ``length`` closing prices ending exactly at ``anchor``.

    The walk starts up to 12% below the anchor and applies small
    multiplicative shocks, never going below MIN_PRICE. Each step is
    stored rounded; the running value itself is not.
    """
    if length < 1:
        raise ValueError("history length must be at least 1")

    r = LcgRandom(seed)
    p = anchor * (1 - r.next() * HISTORY_START_DISCOUNT)
    history: list[float] = []
    for _ in range(length):
        p = max(p * (1 + (r.next() - SHOCK_CENTER) * SHOCK_SCALE), MIN_PRICE)
        history.append(round_price(p))
    history[-1] = anchor
    return history


def synthesize_instrument(
    meta: InstrumentMeta,
    history_length: int = HISTORY_LENGTH,
) -> InstrumentState:
    """Create the initial live state for one instrument from its seeds."""
    quote = synthesize_quote(meta.base, meta.drift_seed)
    history = synthesize_history(quote.price, meta.history_seed, history_length)
    return InstrumentState(
        price=quote.price,
        change=quote.change,
        pct_change=quote.pct_change,
        open=quote.open,
        high=quote.high,
        low=quote.low,
        volume=quote.volume,
        history=history,
    )
