"""API request and response schemas."""

from .common import ErrorResponse, HealthResponse, MessageResponse
from .notifications import (
    CountResponse,
    NotificationLogResponse,
    TickResponse,
    ToastListResponse,
)
from .stocks import PnLResponse, StockResponse


__all__ = [
    "CountResponse",
    "ErrorResponse",
    "HealthResponse",
    "MessageResponse",
    "NotificationLogResponse",
    "PnLResponse",
    "StockResponse",
    "TickResponse",
    "ToastListResponse",
]
