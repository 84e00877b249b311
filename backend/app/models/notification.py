# backend/app/models/notification.py
"""
In-app notification model.

Notifications are written alongside the e-mails of the event request
handshake so users see them in their inbox even when mail is disabled.
"""

from sqlalchemy import Boolean, CheckConstraint, Column, ForeignKey, Index, String, Text
from sqlalchemy.orm import relationship
import ulid

from ..database import Base
from .types import UTCDateTime, utcnow


class Notification(Base):
    """In-app notification inbox entry."""

    __tablename__ = "notifications"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    user_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    event_id = Column(String(26), ForeignKey("events.id", ondelete="SET NULL"), nullable=True)
    type = Column(String(40), nullable=False)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=True)
    action_url = Column(String(1024), nullable=True)
    is_read = Column(Boolean, nullable=False, default=False)
    read_at = Column(UTCDateTime, nullable=True)
    created_at = Column(UTCDateTime, nullable=False, default=utcnow)

    user = relationship("User", foreign_keys=[user_id])

    __table_args__ = (
        CheckConstraint(
            "type IN ('EVENT_REQUEST', 'EVENT_REQUEST_APPROVED', 'EVENT_REQUEST_DECLINED')",
            name="ck_notifications_type",
        ),
        Index("ix_notifications_user_read", "user_id", "is_read"),
        Index("ix_notifications_user_created_at", "user_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Notification {self.type} user={self.user_id} read={self.is_read}>"
