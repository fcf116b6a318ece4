"""Stockdesk: simulated portfolio dashboard with AI assessments and price signals."""

__version__ = "1.0.0"
