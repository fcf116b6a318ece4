"""Tests for edge-triggered signal evaluation."""

from __future__ import annotations

from stockdesk.simulation.notifications import NotificationCategory
from stockdesk.simulation.signals import activation_alerts, evaluate_tick, in_entry_zone


def _run(prices, assessment, ticker="TEST"):
    """Evaluate consecutive price pairs; return alerts per transition."""
    return [
        evaluate_tick(ticker, previous, current, assessment)
        for previous, current in zip(prices, prices[1:])
    ]


class TestEntryZone:
    """Entry zone is inclusive and fires on entering only."""

    def test_fires_once_on_entering(self, make_assessment):
        assessment = make_assessment(entry=(10.0, 12.0), stop_loss=0, profit_target=0)
        fired = _run([9.0, 10.0, 11.0], assessment)

        assert len(fired[0]) == 1
        assert fired[0][0].category is NotificationCategory.ENTRY
        assert fired[0][0].message == "TEST entered entry zone $10.00–$12.00"
        assert fired[1] == []

    def test_refires_after_leaving(self, make_assessment):
        assessment = make_assessment(entry=(10.0, 12.0), stop_loss=0, profit_target=0)
        fired = _run([9.0, 11.0, 13.0, 12.0], assessment)
        assert [len(f) for f in fired] == [1, 0, 1]

    def test_inclusive_bounds(self, make_assessment):
        assessment = make_assessment(entry=(10.0, 12.0))
        assert in_entry_zone(10.0, assessment)
        assert in_entry_zone(12.0, assessment)
        assert not in_entry_zone(12.01, assessment)

    def test_no_assessment(self):
        assert not in_entry_zone(10.0, None)
        assert evaluate_tick("TEST", 9.0, 10.0, None) == []


class TestStopLoss:
    """Stop-loss fires on the downward crossing."""

    def test_fires_once_at_level(self, make_assessment):
        assessment = make_assessment(entry=(50.0, 60.0), stop_loss=100.0, profit_target=200.0)
        fired = _run([105.0, 100.0, 95.0], assessment)

        assert len(fired[0]) == 1
        assert fired[0][0].category is NotificationCategory.SELL
        assert fired[0][0].message == "TEST breached stop-loss $100.00"
        assert fired[1] == []

    def test_disabled_when_zero(self, make_assessment):
        assessment = make_assessment(entry=(50.0, 60.0), stop_loss=0, profit_target=0)
        assert evaluate_tick("TEST", 1.0, 0.0, assessment) == []


class TestProfitTarget:
    """Profit target fires on the upward crossing."""

    def test_fires_once_at_level(self, make_assessment):
        assessment = make_assessment(entry=(50.0, 60.0), stop_loss=40.0, profit_target=110.0)
        fired = _run([105.0, 110.0, 115.0], assessment)

        assert len(fired[0]) == 1
        assert fired[0][0].message == "TEST hit profit target $110.00"
        assert fired[1] == []

    def test_rules_fire_in_order(self, make_assessment):
        """One jump can trigger entry and profit target together."""
        assessment = make_assessment(entry=(100.0, 130.0), stop_loss=50.0, profit_target=110.0)
        alerts = evaluate_tick("TEST", 90.0, 120.0, assessment)
        assert [a.category for a in alerts] == [
            NotificationCategory.ENTRY,
            NotificationCategory.SELL,
        ]


class TestActivationAlerts:
    """One-time alerts when an assessment is stored."""

    def test_immediate_entry(self, make_assessment):
        alerts = activation_alerts(make_assessment(urgency="IMMEDIATE", ideal_entry=98.5))
        assert len(alerts) == 1
        assert alerts[0].category is NotificationCategory.ENTRY
        assert alerts[0].message == "IMMEDIATE entry at $98.50"

    def test_patient_zone(self, make_assessment):
        alerts = activation_alerts(make_assessment(urgency="PATIENT", entry=(97.0, 99.0)))
        assert len(alerts) == 1
        assert alerts[0].category is NotificationCategory.HOLD
        assert alerts[0].message == "Patient zone $97.00–$99.00"

    def test_sell_signals(self, make_assessment):
        for signal in ("SELL", "URGENT SELL"):
            alerts = activation_alerts(make_assessment(sell_signal=signal, profit_target=1250.0))
            assert len(alerts) == 1
            assert alerts[0].category is NotificationCategory.SELL
            assert alerts[0].message == f"{signal} — target $1,250.00"

    def test_wait_and_hold_are_silent(self, make_assessment):
        assert activation_alerts(make_assessment(urgency="WAIT", sell_signal="TRIM")) == []

    def test_entry_and_sell_together(self, make_assessment):
        alerts = activation_alerts(make_assessment(urgency="IMMEDIATE", sell_signal="SELL"))
        assert [a.category for a in alerts] == [
            NotificationCategory.ENTRY,
            NotificationCategory.SELL,
        ]
