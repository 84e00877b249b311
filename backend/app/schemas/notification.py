# backend/app/schemas/notification.py
"""Schemas for notification inbox endpoints."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .base import StandardizedModel


class NotificationResponse(StandardizedModel):
    """Notification inbox entry."""

    id: str
    type: str
    title: str
    message: Optional[str] = None
    event_id: Optional[str] = None
    action_url: Optional[str] = None
    is_read: bool
    read_at: Optional[datetime] = None
    created_at: datetime


class NotificationListResponse(StandardizedModel):
    notifications: List[NotificationResponse]
    total: int
    unread_count: int = Field(..., ge=0)


class NotificationStatusResponse(StandardizedModel):
    """Simple status response for notification actions."""

    success: bool
    message: Optional[str] = None
