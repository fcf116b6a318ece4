"""API dependencies."""

from __future__ import annotations

from fastapi import Request

from stockdesk.simulation import SimulationController


def get_controller(request: Request) -> SimulationController:
    """The simulation session owned by this application instance."""
    return request.app.state.controller
