"""
Price rounding and display formatting helpers.

Rounding goes through Decimal so that a float rounds from its exact binary
value with ties going away from zero. Every stored price in the simulation
passes through round_price().

Usage:
    from stockdesk.core.formatting import round_price, format_usd
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


_CENT = Decimal("0.01")


def round_price(value: float) -> float:
    """Round to 2 decimal places, half away from zero on the exact value."""
    return float(Decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP))


def safe_pct(numerator: float, denominator: float) -> float:
    """Return numerator / denominator * 100, or 0.0 when the denominator is 0."""
    if not denominator:
        return 0.0
    return numerator / denominator * 100


def format_usd(value: float | None, decimals: int = 2) -> str:
    """
    Format an absolute dollar amount, e.g. 1021.45 -> "$1,021.45".

    The sign is dropped; callers that need it add it themselves.
    None renders as an em dash placeholder.
    """
    if value is None:
        return "—"
    return f"${abs(value):,.{decimals}f}"


def format_market_cap(value: float) -> str:
    """Format a market cap as $X.XXT / $X.XXB / $XM."""
    if value >= 1e12:
        return f"${value / 1e12:.2f}T"
    if value >= 1e9:
        return f"${value / 1e9:.2f}B"
    return f"${value / 1e6:.0f}M"


def format_pct(value: float) -> str:
    """Format a signed percentage, e.g. 1.5 -> "+1.50%"."""
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:.2f}%"
