"""Live tick updates.

A tick nudges an instrument's price by a small random amount and slides
its history window. Unlike session start, ticks are not reproducible: the
nudge comes from an unseeded random source.
"""

from __future__ import annotations

import random
from typing import Protocol

from stockdesk.core.formatting import round_price, safe_pct
from stockdesk.domain.instrument import InstrumentMeta, InstrumentState


NUDGE_CENTER = 0.498
NUDGE_SCALE = 0.0016


class RandomSource(Protocol):
    def random(self) -> float: ...


def draw_nudge(meta: InstrumentMeta, rng: RandomSource | None = None) -> float:
    """Random price nudge scaled to the instrument's base price."""
    source = rng if rng is not None else random
    return (source.random() - NUDGE_CENTER) * meta.base * NUDGE_SCALE


def apply_nudge(state: InstrumentState, nudge: float) -> float:
    """
    Apply one tick to ``state`` in place and return the new price.

    Percent change is always measured against the session open, not the
    previous tick. Open, high, low and volume are left alone.
    """
    price = round_price(state.price + nudge)
    change = round_price(state.change + nudge)
    state.price = price
    state.change = change
    state.pct_change = round_price(safe_pct(change, state.open))
    if state.history:
        state.history = [*state.history[1:], price]
    else:
        state.history = [price]
    return price
