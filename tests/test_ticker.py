"""Tests for live tick updates."""

from __future__ import annotations

import pytest

from stockdesk.domain.instrument import InstrumentState
from stockdesk.domain.universe import UNIVERSE
from stockdesk.simulation.synthesizer import synthesize_instrument
from stockdesk.simulation.ticker import apply_nudge, draw_nudge


def _state(**overrides) -> InstrumentState:
    values = {
        "price": 100.0,
        "change": 0.0,
        "pct_change": 0.0,
        "open": 100.0,
        "high": 101.0,
        "low": 99.0,
        "volume": 1_000_000,
        "history": [98.0, 99.0, 100.0],
    }
    values.update(overrides)
    return InstrumentState(**values)


class TestDrawNudge:
    """Nudge magnitude scales with the base price."""

    def test_center_is_zero(self, make_rng):
        assert draw_nudge(UNIVERSE["MSFT"], make_rng(0.498)) == 0.0

    def test_max_up_move(self, make_rng):
        meta = UNIVERSE["LLY"]
        nudge = draw_nudge(meta, make_rng(0.99))
        assert nudge == pytest.approx(0.492 * meta.base * 0.0016)

    def test_bounded(self):
        meta = UNIVERSE["ASML"]
        for _ in range(200):
            assert abs(draw_nudge(meta)) <= 0.502 * meta.base * 0.0016


class TestApplyNudge:
    """One tick applied to a live state."""

    def test_price_and_change(self):
        state = _state()
        price = apply_nudge(state, 0.126)
        assert price == 100.13
        assert state.price == 100.13
        assert state.change == 0.13

    def test_pct_change_against_open(self):
        state = _state(price=110.0, change=10.0, open=100.0)
        apply_nudge(state, 1.0)
        assert state.pct_change == 11.0

    def test_zero_open_gives_zero_pct(self):
        state = _state(open=0.0)
        apply_nudge(state, 1.0)
        assert state.pct_change == 0.0

    def test_history_slides(self):
        state = _state()
        apply_nudge(state, 1.0)
        assert state.history == [99.0, 100.0, 101.0]

    def test_session_fields_untouched(self):
        state = _state()
        apply_nudge(state, 5.0)
        assert (state.open, state.high, state.low, state.volume) == (100.0, 101.0, 99.0, 1_000_000)

    def test_invariants_after_many_ticks(self):
        meta = UNIVERSE["TSLA"]
        state = synthesize_instrument(meta)
        for _ in range(100):
            apply_nudge(state, draw_nudge(meta))
            assert len(state.history) == 30
            assert state.history[-1] == state.price
