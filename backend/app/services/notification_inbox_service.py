# backend/app/services/notification_inbox_service.py
"""
Notification Inbox Service for the Enescena platform

In-app notifications for the event request handshake. Entries are written
inside the caller's transaction so the notification and the state change
it describes commit together; listing and read-marking are per user.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.enums import NotificationType
from ..core.exceptions import NotFoundException
from ..models.artist import Artist
from ..models.event import Event
from ..models.notification import Notification
from ..models.user import User
from ..models.venue import Venue
from ..repositories import RepositoryFactory
from .base import BaseService
from .template_service import format_local_datetime

logger = logging.getLogger(__name__)


@dataclass
class InboxPage:
    """A user's notifications plus their unread total."""

    items: List[Notification]
    unread_count: int


class NotificationInboxService(BaseService):
    """Writes and serves in-app notifications."""

    def __init__(self, db: Session):
        super().__init__(db)
        self.repository = RepositoryFactory.create_notification_repository(db)

    # Writing (no commit; runs in the caller's transaction)

    def record(
        self,
        user_id: str,
        kind: NotificationType,
        title: str,
        message: Optional[str] = None,
        event_id: Optional[str] = None,
        action_url: Optional[str] = None,
    ) -> Notification:
        return self.repository.create(
            user_id=user_id,
            type=kind.value,
            title=title,
            message=message,
            event_id=event_id,
            action_url=action_url,
        )

    def record_event_request(self, event: Event, artist: Artist, venue: Venue) -> Notification:
        return self.record(
            venue.user_id,
            NotificationType.EVENT_REQUEST,
            "New Event Request",
            f'{artist.name} wants to host "{event.title}" at your venue on '
            f"{format_local_datetime(event.event_date)}",
            event_id=event.id,
            action_url=f"/dashboard/venue/events/{event.id}",
        )

    def record_event_request_answer(
        self, event: Event, user_id: str, approved: bool, reason: Optional[str] = None
    ) -> Notification:
        venue_name = event.venue.name if event.venue else "The venue"
        if approved:
            return self.record(
                user_id,
                NotificationType.EVENT_REQUEST_APPROVED,
                "Event Request Approved",
                f'{venue_name} approved "{event.title}"',
                event_id=event.id,
                action_url=f"/dashboard/artist/events/{event.id}",
            )
        message = f'{venue_name} declined "{event.title}"'
        return self.record(
            user_id,
            NotificationType.EVENT_REQUEST_DECLINED,
            "Event Request Declined",
            f"{message}: {reason}" if reason else message,
            event_id=event.id,
        )

    # Inbox

    def list_notifications(self, user: User, unread_only: bool = False) -> InboxPage:
        """Most recent notifications first."""
        items = self.repository.get_user_notifications(user.id, unread_only=unread_only)
        return InboxPage(items=items, unread_count=self.repository.get_unread_count(user.id))

    @BaseService.measure_operation("mark_notification_read")
    def mark_read(self, notification_id: str, user: User) -> Notification:
        """
        Mark one of the caller's notifications as read. Idempotent.

        Raises:
            NotFoundException: no such notification for this user
        """
        notification = self.repository.get_for_user(user.id, notification_id)
        if notification is None:
            raise NotFoundException("Notification not found", code="not_found")
        if not notification.is_read:
            with self.transaction():
                notification.is_read = True
                notification.read_at = datetime.now(timezone.utc)
        return notification

    @BaseService.measure_operation("mark_all_notifications_read")
    def mark_all_read(self, user: User) -> int:
        with self.transaction():
            count = self.repository.mark_all_as_read(user.id)
        self.log_operation("notifications_read", user_id=user.id, count=count)
        return count
