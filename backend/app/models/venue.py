# backend/app/models/venue.py
"""Venue profile model."""

from sqlalchemy import Column, ForeignKey, String, Text
from sqlalchemy.orm import relationship
import ulid

from ..database import Base
from .types import UTCDateTime, utcnow


class Venue(Base):
    """Venue profile owned by exactly one user. Same slug rule as artists."""

    __tablename__ = "venues"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    user_id = Column(
        String(26), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    name = Column(String(120), nullable=False)
    slug = Column(String(160), unique=True, index=True, nullable=False)
    city = Column(String(120), nullable=True, index=True)
    address = Column(String(255), nullable=True)
    about = Column(Text, nullable=True)
    image_url = Column(String(1024), nullable=True)
    created_at = Column(UTCDateTime, nullable=False, default=utcnow)
    updated_at = Column(UTCDateTime, nullable=True, onupdate=utcnow)

    # Relationships
    user = relationship("User", back_populates="venue")
    bookings = relationship("Booking", back_populates="venue")
    events = relationship("Event", back_populates="venue")

    def __repr__(self) -> str:
        return f"<Venue {self.slug}>"
