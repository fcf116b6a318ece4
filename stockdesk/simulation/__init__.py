"""
Price simulation, signal evaluation, notifications and portfolio math.

Usage:
    from stockdesk.simulation import SimulationController

    controller = SimulationController()
    events = controller.tick()
"""

from stockdesk.simulation.controller import (
    Assessor,
    InstrumentTracker,
    SimulationController,
)
from stockdesk.simulation.notifications import (
    NotificationCategory,
    NotificationEvent,
    NotificationStore,
)
from stockdesk.simulation.portfolio import (
    PnLTable,
    PortfolioSnapshot,
    PositionRow,
    pnl_series,
    portfolio_snapshot,
    position_rows,
)
from stockdesk.simulation.prng import LcgRandom
from stockdesk.simulation.signals import (
    SignalAlert,
    activation_alerts,
    evaluate_tick,
    in_entry_zone,
)
from stockdesk.simulation.synthesizer import (
    Quote,
    synthesize_history,
    synthesize_instrument,
    synthesize_quote,
)
from stockdesk.simulation.ticker import apply_nudge, draw_nudge


__all__ = [
    "Assessor",
    "InstrumentTracker",
    "LcgRandom",
    "NotificationCategory",
    "NotificationEvent",
    "NotificationStore",
    "PnLTable",
    "PortfolioSnapshot",
    "PositionRow",
    "Quote",
    "SignalAlert",
    "SimulationController",
    "activation_alerts",
    "apply_nudge",
    "draw_nudge",
    "evaluate_tick",
    "in_entry_zone",
    "pnl_series",
    "portfolio_snapshot",
    "position_rows",
    "synthesize_history",
    "synthesize_instrument",
    "synthesize_quote",
]
