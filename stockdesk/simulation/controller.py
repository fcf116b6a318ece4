"""
Simulation session controller.

Owns every piece of mutable session state and is the only thing that
mutates it:

- per-ticker trackers: live price state, last observed price, assessment
- the notification store
- the set of tickers with an assessment fetch in flight

All changes go through tick(), activate(), dismiss(), clear_log(),
mark_all_read() and reset(). Everything runs on one event loop, so ticks
and in-flight fetches interleave without locks: ticks only read an
assessment, and a fetch only writes its own ticker's entry.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Awaitable, Callable, Mapping

from stockdesk.core.config import settings
from stockdesk.core.exceptions import (
    AssessmentError,
    AssessmentUnavailableError,
    NotFoundError,
)
from stockdesk.core.logging import get_logger
from stockdesk.domain.assessment import Assessment
from stockdesk.domain.instrument import InstrumentMeta, InstrumentState
from stockdesk.domain.universe import UNIVERSE, normalize_ticker
from stockdesk.services.openai.contexts import AssessmentRequest, build_assessment_request
from stockdesk.simulation.notifications import NotificationEvent, NotificationStore
from stockdesk.simulation.portfolio import (
    PnLTable,
    PortfolioSnapshot,
    pnl_series,
    portfolio_snapshot,
    position_rows,
)
from stockdesk.simulation.signals import (
    SignalAlert,
    activation_alerts,
    evaluate_tick,
    in_entry_zone,
)
from stockdesk.simulation.synthesizer import synthesize_instrument
from stockdesk.simulation.ticker import RandomSource, apply_nudge, draw_nudge


logger = get_logger("simulation.controller")


Assessor = Callable[[AssessmentRequest], Awaitable[Assessment]]


async def _default_assessor(request: AssessmentRequest) -> Assessment:
    from stockdesk.services.openai.generate import request_assessment

    return await request_assessment(request)


@dataclass
class InstrumentTracker:
    """Per-ticker state machine: price state plus what signals compare against."""
    meta: InstrumentMeta
    state: InstrumentState
    last_observed_price: float
    assessment: Assessment | None = None

    @property
    def in_entry_zone(self) -> bool:
        return in_entry_zone(self.state.price, self.assessment)


class SimulationController:
    """Single owner of a simulation session."""

    def __init__(
        self,
        universe: Mapping[str, InstrumentMeta] = UNIVERSE,
        *,
        assessor: Assessor | None = None,
        rng: RandomSource | None = None,
        history_length: int | None = None,
        toast_limit: int | None = None,
        log_limit: int | None = None,
        toast_ttl: float | None = None,
        clock: Callable[[], float] | None = None,
    ):
        self._universe = universe
        self._assessor = assessor or _default_assessor
        self._rng = rng if rng is not None else random.Random()
        self._history_length = (
            history_length if history_length is not None else settings.history_length
        )
        self._store_options = {
            "toast_limit": toast_limit if toast_limit is not None else settings.toast_limit,
            "log_limit": log_limit if log_limit is not None else settings.notification_log_limit,
            "toast_ttl": toast_ttl if toast_ttl is not None else settings.toast_ttl_seconds,
        }
        if clock is not None:
            self._store_options["clock"] = clock

        self._trackers: dict[str, InstrumentTracker] = {}
        self._pending: set[str] = set()
        self._notifications = NotificationStore(**self._store_options)
        self.tick_count = 0
        self.last_tick_at: datetime | None = None
        self.reset()

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Rebuild every instrument from its seeds and drop all session state."""
        self._trackers = {}
        for ticker, meta in self._universe.items():
            state = synthesize_instrument(meta, self._history_length)
            self._trackers[ticker] = InstrumentTracker(
                meta=meta,
                state=state,
                last_observed_price=state.price,
            )
        self._pending = set()
        self._notifications = NotificationStore(**self._store_options)
        self.tick_count = 0
        self.last_tick_at = None
        logger.info(f"Simulation initialized with {len(self._trackers)} instruments")

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def tick(self) -> list[NotificationEvent]:
        """Advance every instrument by one random nudge and evaluate signals."""
        fired: list[NotificationEvent] = []
        for ticker, tracker in self._trackers.items():
            nudge = draw_nudge(tracker.meta, self._rng)
            previous = tracker.last_observed_price
            current = apply_nudge(tracker.state, nudge)
            alerts = evaluate_tick(ticker, previous, current, tracker.assessment)
            fired.extend(self._push_alerts(ticker, alerts))
            tracker.last_observed_price = current

        self.tick_count += 1
        self.last_tick_at = datetime.now(UTC)
        if fired:
            logger.debug(f"Tick {self.tick_count} fired {len(fired)} notification(s)")
        return fired

    async def activate(self, ticker: str) -> Assessment | None:
        """
        Fetch and store an assessment for ``ticker``.

        Returns the stored assessment. Repeat calls for an assessed ticker
        return the existing one and change nothing; a call while a fetch for
        the same ticker is in flight returns None.

        Raises:
            NotFoundError: unknown ticker.
            AssessmentError: the fetch failed. Nothing is stored and the
                ticker can be activated again.
        """
        tracker = self._tracker(ticker)
        ticker = tracker.meta.ticker

        if tracker.assessment is not None:
            return tracker.assessment
        if ticker in self._pending:
            logger.debug(f"Assessment for {ticker} already in flight")
            return None

        pending = self._pending
        pending.add(ticker)
        try:
            request = build_assessment_request(tracker.meta, tracker.state)
            assessment = await self._assessor(request)
        except AssessmentError as e:
            logger.warning(f"Assessment for {ticker} failed: {e.message}")
            raise
        except Exception as e:
            logger.exception(f"Assessment for {ticker} failed unexpectedly")
            raise AssessmentUnavailableError(
                details={"ticker": ticker, "error": str(e)},
            ) from e
        finally:
            pending.discard(ticker)

        if self._trackers.get(ticker) is not tracker:
            logger.info(f"Session reset while assessing {ticker}, result discarded")
            return None

        tracker.assessment = assessment
        # Edge detection starts from the price the assessment was made at
        tracker.last_observed_price = tracker.state.price
        self._push_alerts(ticker, activation_alerts(assessment))
        logger.info(
            f"Stored {assessment.rating.value} assessment for {ticker}",
            extra={"extra_fields": {"ticker": ticker, "target": assessment.target_price}},
        )
        return assessment

    def dismiss(self, notification_id: int) -> bool:
        return self._notifications.dismiss(notification_id)

    def clear_log(self) -> int:
        return self._notifications.clear_log()

    def mark_all_read(self) -> int:
        return self._notifications.mark_all_read()

    def _push_alerts(
        self, ticker: str, alerts: list[SignalAlert]
    ) -> list[NotificationEvent]:
        return [
            self._notifications.push(ticker, alert.category, alert.message)
            for alert in alerts
        ]

    # ------------------------------------------------------------------
    # Read views
    # ------------------------------------------------------------------

    def _tracker(self, ticker: str) -> InstrumentTracker:
        key = normalize_ticker(ticker)
        tracker = self._trackers.get(key)
        if tracker is None:
            raise NotFoundError(
                message=f"Unknown ticker: {ticker}",
                details={"ticker": ticker},
            )
        return tracker

    @property
    def tickers(self) -> list[str]:
        return list(self._trackers)

    def tracker(self, ticker: str) -> InstrumentTracker:
        return self._tracker(ticker)

    def trackers(self) -> list[InstrumentTracker]:
        return list(self._trackers.values())

    def state(self, ticker: str) -> InstrumentState:
        return self._tracker(ticker).state

    def assessment(self, ticker: str) -> Assessment | None:
        return self._tracker(ticker).assessment

    def is_pending(self, ticker: str) -> bool:
        return self._tracker(ticker).meta.ticker in self._pending

    @property
    def notifications(self) -> NotificationStore:
        return self._notifications

    @property
    def states(self) -> dict[str, InstrumentState]:
        return {ticker: t.state for ticker, t in self._trackers.items()}

    def portfolio(self) -> PortfolioSnapshot:
        return portfolio_snapshot(self._universe, self.states)

    def pnl_series(self) -> list[float]:
        return pnl_series(self._universe, self.states, days=self._history_length)

    def pnl_table(self) -> PnLTable:
        return position_rows(self._universe, self.states)
