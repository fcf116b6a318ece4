"""Notification and simulation control schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from stockdesk.simulation.notifications import NotificationEvent


class NotificationLogResponse(BaseModel):
    """The signal log, newest first."""

    items: list[NotificationEvent]
    total: int
    unread: int


class ToastListResponse(BaseModel):
    """Toasts that have not expired yet, newest first."""

    items: list[NotificationEvent]


class CountResponse(BaseModel):
    """Number of records affected by a bulk action."""

    count: int = Field(..., ge=0)


class TickResponse(BaseModel):
    """Result of a manual tick."""

    tick: int
    at: datetime | None
    fired: list[NotificationEvent]
