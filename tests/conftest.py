"""Pytest configuration and fixtures."""

from __future__ import annotations

import copy
from types import MappingProxyType
from typing import Any, Callable, Generator
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from stockdesk.domain.assessment import Assessment
from stockdesk.domain.instrument import InstrumentMeta


# Configure asyncio
pytest_plugins = ["pytest_asyncio"]


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubRandom:
    """Random source that returns fixed values, repeating the last one."""

    def __init__(self, *values: float):
        self._values = list(values) or [0.5]

    def random(self) -> float:
        if len(self._values) > 1:
            return self._values.pop(0)
        return self._values[0]


# Base 100 with seeds 1 / 11: opens at price 99.75, open 99.92
TEST_META = InstrumentMeta(
    ticker="TEST", name="Test Corp", sector="Testing",
    base=100.0, market_cap=50e9, pe=20.0, eps=5.0, dividend_yield=1.0,
    beta=1.0, high_52w=120.0, low_52w=80.0, color="#000000", shares=10,
    drift_seed=1, history_seed=11,
)


@pytest.fixture
def test_universe() -> MappingProxyType:
    """Single-instrument universe with hand-checked start values."""
    return MappingProxyType({TEST_META.ticker: TEST_META})


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_rng() -> Callable[..., StubRandom]:
    """Factory for fixed-value random sources."""
    return StubRandom


@pytest.fixture
def assessment_payload() -> dict[str, Any]:
    """A complete assessment as the advisory service sends it (camelCase)."""
    return {
        "rating": "BUY",
        "targetPrice": 115.0,
        "updownside": 15.3,
        "thesis": "Durable demand and widening margins.",
        "bullCase": "Margins expand faster than expected.",
        "bearCase": "Demand normalizes next year.",
        "keyRisks": ["Competition", "Valuation", "Regulation"],
        "catalysts": ["Earnings", "Product launch"],
        "technicalOutlook": "Consolidating above the 50-day average.",
        "analystConsensus": "Mostly buy ratings.",
        "entryPoint": {
            "idealEntry": 98.5,
            "entryLow": 97.0,
            "entryHigh": 99.0,
            "entryRationale": "Prior support.",
            "entryCondition": "Close above 97 on volume.",
            "urgency": "WAIT",
        },
        "holdStrategy": {
            "minimumHold": "3 months",
            "optimalHold": "12-18 months",
            "holdRationale": "Thesis needs several quarters.",
            "reviewTriggers": ["Guidance cut", "Margin miss"],
            "positionSizing": "3-5% of portfolio",
        },
        "sellSentiment": {
            "sellSignal": "HOLD",
            "sellTriggerPrice": 90.0,
            "stopLoss": 92.0,
            "profitTarget": 115.0,
            "sellRationale": "Trend intact.",
            "redFlags": ["Inventory build"],
            "currentSentiment": "Constructive.",
        },
    }


@pytest.fixture
def make_assessment(assessment_payload) -> Callable[..., Assessment]:
    """Factory for assessments with selected levels overridden."""

    def _make(
        *,
        entry: tuple[float, float] | None = None,
        ideal_entry: float | None = None,
        urgency: str | None = None,
        sell_signal: str | None = None,
        stop_loss: float | None = None,
        profit_target: float | None = None,
    ) -> Assessment:
        payload = copy.deepcopy(assessment_payload)
        ep = payload["entryPoint"]
        ss = payload["sellSentiment"]
        if entry is not None:
            ep["entryLow"], ep["entryHigh"] = entry
        if ideal_entry is not None:
            ep["idealEntry"] = ideal_entry
        if urgency is not None:
            ep["urgency"] = urgency
        if sell_signal is not None:
            ss["sellSignal"] = sell_signal
        if stop_loss is not None:
            ss["stopLoss"] = stop_loss
        if profit_target is not None:
            ss["profitTarget"] = profit_target
        return Assessment.model_validate(payload)

    return _make


@pytest.fixture
def assessor(make_assessment) -> AsyncMock:
    """Advisory service double returning the default assessment."""
    return AsyncMock(return_value=make_assessment())


@pytest.fixture
def controller(test_universe, assessor, fake_clock):
    """Simulation session over the test universe with a mocked assessor."""
    from stockdesk.simulation import SimulationController

    return SimulationController(
        test_universe,
        assessor=assessor,
        rng=StubRandom(0.5),
        clock=fake_clock,
    )


@pytest.fixture
def client(controller, monkeypatch) -> Generator[TestClient, None, None]:
    """Create a test client for the API app with the tick loop disabled."""
    from stockdesk.api.app import create_api_app
    from stockdesk.core.config import settings

    monkeypatch.setattr(settings, "tick_enabled", False)
    app = create_api_app(controller)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
