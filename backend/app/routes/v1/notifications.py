# backend/app/routes/v1/notifications.py
"""Notification inbox routes - API v1."""

import asyncio
import logging

from fastapi import APIRouter, Depends, Query

from ...api.dependencies import get_current_active_user, get_notification_inbox_service
from ...core.exceptions import DomainException
from ...errors import handle_domain_exception
from ...models.user import User
from ...schemas.notification import (
    NotificationListResponse,
    NotificationResponse,
    NotificationStatusResponse,
)
from ...services.notification_inbox_service import NotificationInboxService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["notifications-v1"])


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    unread_only: bool = Query(False, alias="unreadOnly"),
    current_user: User = Depends(get_current_active_user),
    inbox: NotificationInboxService = Depends(get_notification_inbox_service),
) -> NotificationListResponse:
    """List notifications for the current user."""
    page = await asyncio.to_thread(inbox.list_notifications, current_user, unread_only)
    return NotificationListResponse(
        notifications=[NotificationResponse.model_validate(item) for item in page.items],
        total=len(page.items),
        unread_count=page.unread_count,
    )


@router.post("/read-all", response_model=NotificationStatusResponse)
async def mark_all_notifications_read(
    current_user: User = Depends(get_current_active_user),
    inbox: NotificationInboxService = Depends(get_notification_inbox_service),
) -> NotificationStatusResponse:
    """Mark all notifications as read."""
    count = await asyncio.to_thread(inbox.mark_all_read, current_user)
    return NotificationStatusResponse(
        success=True, message=f"Marked {count} notifications as read"
    )


@router.patch("/{notification_id}", response_model=NotificationResponse)
async def mark_notification_read(
    notification_id: str,
    current_user: User = Depends(get_current_active_user),
    inbox: NotificationInboxService = Depends(get_notification_inbox_service),
) -> NotificationResponse:
    """Mark a notification as read."""
    try:
        notification = await asyncio.to_thread(inbox.mark_read, notification_id, current_user)
        return NotificationResponse.model_validate(notification)
    except DomainException as e:
        handle_domain_exception(e)
