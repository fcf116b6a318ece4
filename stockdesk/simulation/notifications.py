"""In-memory notification store.

One event stream, two views:

- toasts: the 4 most recent events, each dropped ``ttl`` seconds after it
  was pushed (expiry is checked against a monotonic clock on every access)
- log: the 80 most recent events, oldest evicted first

Both views are newest-first. Clearing the log leaves toasts alone, and the
id counter keeps counting across clears.
"""

from __future__ import annotations

import itertools
import time
from collections import deque
from datetime import datetime, timezone
from enum import Enum
from typing import Callable

from pydantic import BaseModel, Field

from stockdesk.core.logging import get_logger


logger = get_logger("simulation.notifications")


class NotificationCategory(str, Enum):
    """Kind of signal a notification reports."""
    ENTRY = "entry"
    SELL = "sell"
    HOLD = "hold"


class NotificationEvent(BaseModel):
    """A single signal shown as a toast and kept in the log."""

    id: int = Field(..., ge=1, description="Monotonic, never reused within a session")
    ticker: str
    category: NotificationCategory
    message: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    read: bool = False


class NotificationStore:
    """Toast queue and signal log over the same notification events."""

    def __init__(
        self,
        toast_limit: int = 4,
        log_limit: int = 80,
        toast_ttl: float = 8.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._toast_limit = toast_limit
        self._toast_ttl = toast_ttl
        self._clock = clock
        self._ids = itertools.count(1)
        # (event, expires_at) pairs, newest first
        self._toasts: deque[tuple[NotificationEvent, float]] = deque()
        self._log: deque[NotificationEvent] = deque(maxlen=log_limit)

    def push(
        self,
        ticker: str,
        category: NotificationCategory | str,
        message: str,
    ) -> NotificationEvent:
        """Record a new event in both views and return it."""
        event = NotificationEvent(
            id=next(self._ids),
            ticker=ticker,
            category=NotificationCategory(category),
            message=message,
        )
        self._prune()
        self._toasts.appendleft((event, self._clock() + self._toast_ttl))
        while len(self._toasts) > self._toast_limit:
            self._toasts.pop()
        self._log.appendleft(event)

        logger.info(
            f"[{event.category.value.upper()}] {ticker}: {message}",
            extra={"extra_fields": {"notification_id": event.id, "ticker": ticker}},
        )
        return event

    def _prune(self) -> None:
        now = self._clock()
        if any(expires_at <= now for _, expires_at in self._toasts):
            self._toasts = deque(
                (event, expires_at)
                for event, expires_at in self._toasts
                if expires_at > now
            )

    @property
    def toasts(self) -> list[NotificationEvent]:
        """Unexpired toasts, newest first."""
        self._prune()
        return [event for event, _ in self._toasts]

    @property
    def log(self) -> list[NotificationEvent]:
        """Logged events, newest first."""
        return list(self._log)

    @property
    def unread_count(self) -> int:
        return sum(1 for event in self._log if not event.read)

    def dismiss(self, notification_id: int) -> bool:
        """Remove a toast early. Returns False if it was not showing."""
        self._prune()
        before = len(self._toasts)
        self._toasts = deque(
            (event, expires_at)
            for event, expires_at in self._toasts
            if event.id != notification_id
        )
        return len(self._toasts) != before

    def clear_log(self) -> int:
        """Empty the log. Returns how many events were removed."""
        removed = len(self._log)
        self._log.clear()
        return removed

    def mark_all_read(self) -> int:
        """Flag every logged event as read. Returns how many changed."""
        changed = 0
        for event in self._log:
            if not event.read:
                event.read = True
                changed += 1
        return changed
