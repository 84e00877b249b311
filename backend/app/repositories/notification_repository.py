# backend/app/repositories/notification_repository.py
"""Repository for the in-app notification inbox."""

from datetime import datetime, timezone
import logging
from typing import List, Optional, cast

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.constants import DEFAULT_QUERY_LIMIT
from ..core.exceptions import RepositoryException
from ..models.notification import Notification
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class NotificationRepository(BaseRepository[Notification]):
    """Data access for notification inbox entries."""

    def __init__(self, db: Session) -> None:
        super().__init__(db, Notification)
        self.logger = logging.getLogger(__name__)

    def get_user_notifications(
        self, user_id: str, unread_only: bool = False, limit: int = DEFAULT_QUERY_LIMIT
    ) -> List[Notification]:
        try:
            query = self.db.query(Notification).filter(Notification.user_id == user_id)
            if unread_only:
                query = query.filter(Notification.is_read.is_(False))
            query = query.order_by(Notification.created_at.desc(), Notification.id.desc())
            return cast(List[Notification], query.limit(limit).all())
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing notifications for user {user_id}: {str(e)}")
            raise RepositoryException(f"Failed to list notifications: {str(e)}")

    def get_unread_count(self, user_id: str) -> int:
        count = (
            self.db.query(func.count(Notification.id))
            .filter(Notification.user_id == user_id, Notification.is_read.is_(False))
            .scalar()
        )
        return int(count or 0)

    def get_for_user(self, user_id: str, notification_id: str) -> Optional[Notification]:
        return cast(
            Optional[Notification], self.find_one_by(id=notification_id, user_id=user_id)
        )

    def mark_all_as_read(self, user_id: str) -> int:
        now = datetime.now(timezone.utc)
        updated = (
            self.db.query(Notification)
            .filter(Notification.user_id == user_id, Notification.is_read.is_(False))
            .update({"is_read": True, "read_at": now}, synchronize_session="fetch")
        )
        return int(updated or 0)


__all__ = ["NotificationRepository"]
