"""Periodic tick loop.

One asyncio task per process drives every price update. A failing tick is
logged and the loop carries on with the next one.
"""

from __future__ import annotations

import asyncio
import contextlib

from stockdesk.core.logging import get_logger
from stockdesk.simulation.controller import SimulationController


logger = get_logger("simulation.loop")


async def run_tick_loop(controller: SimulationController, interval: float) -> None:
    """Tick ``controller`` every ``interval`` seconds until cancelled."""
    logger.info(f"Tick loop started (every {interval:g}s)")
    while True:
        await asyncio.sleep(interval)
        try:
            controller.tick()
        except Exception:  # noqa: BLE001
            logger.exception("Tick failed")


def start_tick_loop(controller: SimulationController, interval: float) -> asyncio.Task:
    """Schedule the tick loop on the running event loop."""
    return asyncio.create_task(run_tick_loop(controller, interval), name="tick-loop")


async def stop_tick_loop(task: asyncio.Task | None) -> None:
    """Cancel the tick loop and wait for it to finish."""
    if task is None:
        return
    task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await task
    logger.info("Tick loop stopped")
