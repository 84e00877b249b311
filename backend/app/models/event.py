# backend/app/models/event.py
"""
Event models for the Enescena platform.

Events are created three ways: materialized from an accepted booking,
requested by an artist for venue approval, or created by a venue with a
line-up of artists.

Classes:
    Event: A show at a venue
    EventArtist: Line-up entry linking an artist to an event
"""

import logging

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
import ulid

from ..core.enums import EventStatus
from ..database import Base
from .types import UTCDateTime, utcnow

logger = logging.getLogger(__name__)


class Event(Base):
    """A show held at a venue."""

    __tablename__ = "events"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    venue_id = Column(String(26), ForeignKey("venues.id"), nullable=False, index=True)
    created_by_id = Column(String(26), ForeignKey("users.id"), nullable=True)

    title = Column(String(200), nullable=False)
    slug = Column(String(240), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    event_date = Column(UTCDateTime, nullable=False, index=True)
    end_date = Column(UTCDateTime, nullable=True)
    hours = Column(Integer, nullable=True)
    total_hours = Column(Integer, nullable=True)
    total_budget = Column(Numeric(10, 2), nullable=True)

    status = Column(String(32), nullable=False, default=EventStatus.DRAFT.value, index=True)

    created_at = Column(UTCDateTime, nullable=False, default=utcnow)
    updated_at = Column(UTCDateTime, nullable=True, onupdate=utcnow)

    # Relationships
    venue = relationship("Venue", back_populates="events")
    created_by = relationship("User")
    artists = relationship(
        "EventArtist",
        back_populates="event",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    bookings = relationship("Booking", back_populates="event")

    __table_args__ = (
        CheckConstraint(
            "status IN ('DRAFT', 'PENDING_VENUE_APPROVAL', 'SEEKING_ARTISTS', "
            "'PUBLISHED', 'CANCELLED', 'COMPLETED')",
            name="ck_events_status",
        ),
    )

    def __repr__(self) -> str:
        return f"<Event {self.slug} ({self.status})>"


class EventArtist(Base):
    """Line-up entry for an event"""

    __tablename__ = "event_artists"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    event_id = Column(String(26), ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    artist_id = Column(String(26), ForeignKey("artists.id"), nullable=False)
    fee = Column(Numeric(10, 2), nullable=True)
    hours = Column(Integer, nullable=True)
    confirmed = Column(Boolean, nullable=False, default=False)
    created_at = Column(UTCDateTime, nullable=False, default=utcnow)

    # Relationships
    event = relationship("Event", back_populates="artists")
    artist = relationship("Artist", back_populates="event_slots")

    __table_args__ = (UniqueConstraint("event_id", "artist_id", name="unique_event_artist"),)

    def __repr__(self) -> str:
        return f"<EventArtist event={self.event_id} artist={self.artist_id} confirmed={self.confirmed}>"
