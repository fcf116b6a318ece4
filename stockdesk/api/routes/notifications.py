"""Notification endpoints: toasts and the signal log."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path

from stockdesk.api.dependencies import get_controller
from stockdesk.core.exceptions import NotFoundError
from stockdesk.schemas.common import ErrorResponse
from stockdesk.schemas.notifications import (
    CountResponse,
    NotificationLogResponse,
    ToastListResponse,
)
from stockdesk.simulation import SimulationController


router = APIRouter()


@router.get(
    "",
    response_model=NotificationLogResponse,
    summary="Signal log",
    description="Logged signal events, newest first, with the unread count.",
)
async def get_log(
    controller: SimulationController = Depends(get_controller),
) -> NotificationLogResponse:
    store = controller.notifications
    items = store.log
    return NotificationLogResponse(items=items, total=len(items), unread=store.unread_count)


@router.delete(
    "",
    response_model=CountResponse,
    summary="Clear signal log",
)
async def clear_log(
    controller: SimulationController = Depends(get_controller),
) -> CountResponse:
    return CountResponse(count=controller.clear_log())


@router.post(
    "/read",
    response_model=CountResponse,
    summary="Mark all read",
)
async def mark_all_read(
    controller: SimulationController = Depends(get_controller),
) -> CountResponse:
    return CountResponse(count=controller.mark_all_read())


@router.get(
    "/toasts",
    response_model=ToastListResponse,
    summary="Active toasts",
    description="Toasts that have not expired or been dismissed, newest first.",
)
async def get_toasts(
    controller: SimulationController = Depends(get_controller),
) -> ToastListResponse:
    return ToastListResponse(items=controller.notifications.toasts)


@router.post(
    "/toasts/{notification_id}/dismiss",
    response_model=CountResponse,
    summary="Dismiss toast",
    responses={404: {"model": ErrorResponse, "description": "Toast not showing"}},
)
async def dismiss_toast(
    notification_id: int = Path(..., ge=1),
    controller: SimulationController = Depends(get_controller),
) -> CountResponse:
    if not controller.dismiss(notification_id):
        raise NotFoundError(
            message=f"Toast {notification_id} is not showing",
            details={"id": notification_id},
        )
    return CountResponse(count=1)
