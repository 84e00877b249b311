# backend/app/models/artist.py
"""
Artist profile model.

The slug is generated from the name when the profile is first created and
is never regenerated on edit, so public links stay stable.
"""

from sqlalchemy import JSON, Column, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import relationship
import ulid

from ..database import Base
from .types import UTCDateTime, utcnow


class Artist(Base):
    """Performer profile owned by exactly one user."""

    __tablename__ = "artists"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    user_id = Column(
        String(26), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    name = Column(String(120), nullable=False)
    slug = Column(String(160), unique=True, index=True, nullable=False)
    city = Column(String(120), nullable=True, index=True)
    # Use generic JSON for cross-dialect compatibility (SQLite in tests)
    genres = Column(JSON, nullable=False, default=list)
    rate = Column(Numeric(10, 2), nullable=True)
    bio = Column(Text, nullable=True)
    image_url = Column(String(1024), nullable=True)
    created_at = Column(UTCDateTime, nullable=False, default=utcnow)
    updated_at = Column(UTCDateTime, nullable=True, onupdate=utcnow)

    # Relationships
    user = relationship("User", back_populates="artist")
    unavailability = relationship(
        "ArtistUnavailability",
        back_populates="artist",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ArtistUnavailability.start",
    )
    bookings = relationship("Booking", back_populates="artist")
    event_slots = relationship("EventArtist", back_populates="artist")

    def __repr__(self) -> str:
        return f"<Artist {self.slug}>"
