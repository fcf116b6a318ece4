"""Tests for quote and history synthesis."""

from __future__ import annotations

import pytest

from stockdesk.domain.universe import UNIVERSE
from stockdesk.simulation.synthesizer import (
    HISTORY_LENGTH,
    MIN_PRICE,
    synthesize_history,
    synthesize_instrument,
    synthesize_quote,
)


class TestSynthesizeQuote:
    """Opening quote derived from base price and drift seed."""

    def test_seed_one_base_hundred(self):
        """Hand-computed from u1..u5 of the seed 1 stream."""
        quote = synthesize_quote(100.0, 1)

        # u1 = 1015568748 / 2**32 = 0.2364555..., drift = (u1 - 0.49) * 1.0
        assert quote.price == 99.75
        assert quote.change == -0.25
        assert quote.pct_change == -0.25
        assert quote.open == 99.92
        assert quote.high == 100.35
        assert quote.low == 98.91
        assert quote.volume == 7021745

    def test_deterministic(self):
        assert synthesize_quote(187.71, 1) == synthesize_quote(187.71, 1)

    def test_high_low_bracket_price(self):
        for meta in UNIVERSE.values():
            quote = synthesize_quote(meta.base, meta.drift_seed)
            assert quote.low <= quote.price <= quote.high

    def test_volume_range(self):
        for meta in UNIVERSE.values():
            quote = synthesize_quote(meta.base, meta.drift_seed)
            assert 5_000_000 <= quote.volume < 45_000_000


class TestSynthesizeHistory:
    """History walk pinned to the current price."""

    def test_length_and_anchor(self):
        history = synthesize_history(99.75, 11)
        assert len(history) == HISTORY_LENGTH
        assert history[-1] == 99.75

    def test_custom_length(self):
        assert len(synthesize_history(50.0, 3, length=5)) == 5

    def test_floor_applies(self):
        """Tiny anchors clamp to the minimum price."""
        history = synthesize_history(1.01, 22)
        assert all(value >= MIN_PRICE for value in history)

    def test_rejects_empty(self):
        with pytest.raises(ValueError):
            synthesize_history(100.0, 1, length=0)

    def test_deterministic(self):
        assert synthesize_history(403.02, 22) == synthesize_history(403.02, 22)


class TestSynthesizeInstrument:
    """Initial state for every instrument in the universe."""

    @pytest.mark.parametrize("ticker", list(UNIVERSE))
    def test_initial_invariants(self, ticker: str):
        state = synthesize_instrument(UNIVERSE[ticker])
        assert len(state.history) == 30
        assert state.history[-1] == state.price
        assert all(value >= 1.0 for value in state.history)
        assert state.cost_basis == state.history[0]

    def test_rebuild_is_identical(self):
        meta = UNIVERSE["NVDA"]
        assert synthesize_instrument(meta) == synthesize_instrument(meta)
