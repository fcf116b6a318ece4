"""
Signal evaluation against an active assessment.

Tick rules are edge-triggered: each fires on the transition into its
condition, never while the condition simply stays true. Rules run in a
fixed order (entry zone, stop-loss, profit target) and are independent of
each other.

Activation rules fire once, when an assessment is first stored, and may
duplicate later tick-driven alerts.
"""

from __future__ import annotations

from dataclasses import dataclass

from stockdesk.core.formatting import format_usd
from stockdesk.domain.assessment import Assessment, EntryUrgency
from stockdesk.simulation.notifications import NotificationCategory


@dataclass(frozen=True)
class SignalAlert:
    """A notification the caller should push."""
    category: NotificationCategory
    message: str


def _zone(assessment: Assessment) -> str:
    ep = assessment.entry_point
    return f"{format_usd(ep.entry_low)}–{format_usd(ep.entry_high)}"


def in_entry_zone(price: float, assessment: Assessment | None) -> bool:
    """True when ``price`` sits inside the assessment's entry zone."""
    if assessment is None:
        return False
    return assessment.entry_point.contains(price)


def evaluate_tick(
    ticker: str,
    previous: float,
    current: float,
    assessment: Assessment | None,
) -> list[SignalAlert]:
    """Compare one price move against the assessment's thresholds."""
    if assessment is None:
        return []

    alerts: list[SignalAlert] = []
    ep = assessment.entry_point
    ss = assessment.sell_sentiment

    if ep.contains(current) and not ep.contains(previous):
        alerts.append(SignalAlert(
            NotificationCategory.ENTRY,
            f"{ticker} entered entry zone {_zone(assessment)}",
        ))

    # A zero level means the service gave none; the rule is skipped.
    if ss.stop_loss > 0 and current <= ss.stop_loss < previous:
        alerts.append(SignalAlert(
            NotificationCategory.SELL,
            f"{ticker} breached stop-loss {format_usd(ss.stop_loss)}",
        ))

    if ss.profit_target > 0 and previous < ss.profit_target <= current:
        alerts.append(SignalAlert(
            NotificationCategory.SELL,
            f"{ticker} hit profit target {format_usd(ss.profit_target)}",
        ))

    return alerts


def activation_alerts(assessment: Assessment) -> list[SignalAlert]:
    """One-time alerts raised when an assessment is first stored."""
    alerts: list[SignalAlert] = []
    ep = assessment.entry_point
    ss = assessment.sell_sentiment

    if ep.urgency is EntryUrgency.IMMEDIATE:
        alerts.append(SignalAlert(
            NotificationCategory.ENTRY,
            f"IMMEDIATE entry at {format_usd(ep.ideal_entry)}",
        ))
    elif ep.urgency is EntryUrgency.PATIENT:
        alerts.append(SignalAlert(
            NotificationCategory.HOLD,
            f"Patient zone {_zone(assessment)}",
        ))

    if ss.sell_signal.is_exit:
        alerts.append(SignalAlert(
            NotificationCategory.SELL,
            f"{ss.sell_signal.value} — target {format_usd(ss.profit_target)}",
        ))

    return alerts
