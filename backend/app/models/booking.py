# backend/app/models/booking.py
"""
Booking model for the Enescena platform.

A booking is a venue's request for an artist to perform at a given time.
It moves PENDING -> ACCEPTED | DECLINED, and ACCEPTED -> CANCELLED.
Accepting a standalone booking materializes a published Event.
"""

from datetime import datetime, timedelta
import logging
from typing import Optional, Tuple

from sqlalchemy import CheckConstraint, Column, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship
import ulid

from ..core.enums import BookingStatus
from ..database import Base
from .types import UTCDateTime, utcnow

logger = logging.getLogger(__name__)


class Booking(Base):
    """
    Booking request between a venue and an artist.

    The booking occupies [event_date, event_date + hours). When hours is
    unset, the configured default duration applies for conflict checks.
    """

    __tablename__ = "bookings"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))

    artist_id = Column(String(26), ForeignKey("artists.id"), nullable=False)
    venue_id = Column(String(26), ForeignKey("venues.id"), nullable=False)
    event_id = Column(String(26), ForeignKey("events.id"), nullable=True)

    event_date = Column(UTCDateTime, nullable=False, index=True)
    hours = Column(Integer, nullable=True)
    note = Column(Text, nullable=True)

    status = Column(String(20), nullable=False, default=BookingStatus.PENDING.value, index=True)

    created_at = Column(UTCDateTime, nullable=False, default=utcnow)
    updated_at = Column(UTCDateTime, nullable=True, onupdate=utcnow)
    responded_at = Column(UTCDateTime, nullable=True)
    cancelled_at = Column(UTCDateTime, nullable=True)
    cancellation_reason = Column(Text, nullable=True)

    # Relationships
    artist = relationship("Artist", back_populates="bookings")
    venue = relationship("Venue", back_populates="bookings")
    event = relationship("Event", back_populates="bookings")

    __table_args__ = (
        CheckConstraint(
            "status IN ('PENDING', 'ACCEPTED', 'DECLINED', 'CANCELLED')",
            name="ck_bookings_status",
        ),
        CheckConstraint("hours IS NULL OR hours > 0", name="check_hours_positive"),
        Index("idx_bookings_artist_status_date", "artist_id", "status", "event_date"),
    )

    def __repr__(self) -> str:
        return (
            f"<Booking {self.id}: artist={self.artist_id}, venue={self.venue_id}, "
            f"date={self.event_date}, hours={self.hours}, status={self.status}>"
        )

    def interval(self, default_hours: int) -> Tuple[datetime, datetime]:
        """Return the half-open window this booking occupies."""
        start: datetime = self.event_date
        return start, start + timedelta(hours=self.hours or default_hours)

    def accept(self) -> None:
        """Mark booking as accepted by the artist."""
        self.status = BookingStatus.ACCEPTED.value
        self.responded_at = utcnow()
        logger.info(f"Booking {self.id} accepted")

    def decline(self) -> None:
        """Mark booking as declined by the artist."""
        self.status = BookingStatus.DECLINED.value
        self.responded_at = utcnow()
        logger.info(f"Booking {self.id} declined")

    def cancel(self, reason: Optional[str] = None) -> None:
        """Cancel an accepted booking."""
        self.status = BookingStatus.CANCELLED.value
        self.cancelled_at = utcnow()
        self.cancellation_reason = reason
        logger.info(f"Booking {self.id} cancelled")

    @property
    def is_pending(self) -> bool:
        return self.status == BookingStatus.PENDING.value

    @property
    def is_accepted(self) -> bool:
        return self.status == BookingStatus.ACCEPTED.value
