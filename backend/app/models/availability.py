# backend/app/models/availability.py
"""
Availability models for the Enescena platform.

Artists declare blackout windows during which they cannot be booked.
Windows are half-open intervals [start, end) and may overlap each other.

Classes:
    ArtistUnavailability: A blackout window owned by one artist
"""

import logging

from sqlalchemy import CheckConstraint, Column, ForeignKey, Index, String
from sqlalchemy.orm import relationship
import ulid

from ..database import Base
from .types import UTCDateTime, utcnow

logger = logging.getLogger(__name__)


class ArtistUnavailability(Base):
    """Artist blackout window"""

    __tablename__ = "artist_unavailability"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    artist_id = Column(String(26), ForeignKey("artists.id", ondelete="CASCADE"), nullable=False)
    start = Column(UTCDateTime, nullable=False)
    end = Column(UTCDateTime, nullable=False)
    reason = Column(String(255), nullable=True)
    created_at = Column(UTCDateTime, nullable=False, default=utcnow)

    # Relationships
    artist = relationship("Artist", back_populates="unavailability")

    # Constraints
    __table_args__ = (
        CheckConstraint('"end" > "start"', name="check_unavailability_end_after_start"),
        Index("idx_unavailability_artist_start", "artist_id", "start"),
    )

    def __repr__(self) -> str:
        return f"<ArtistUnavailability {self.start} - {self.end} {self.reason or 'No reason'}>"
