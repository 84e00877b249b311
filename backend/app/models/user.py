# backend/app/models/user.py
"""
User model for the Enescena platform.

A user is created the first time a verified identity reaches the API
(upsert keyed by email). Display name and role are refreshed from the
identity claims on later requests when the claims carry them.

Classes:
    User: Account record owning at most one artist and one venue profile
"""

import logging

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
import ulid

from ..core.enums import UserRole
from ..database import Base
from .types import UTCDateTime, utcnow

logger = logging.getLogger(__name__)


class User(Base):
    """
    Account record resolved from identity claims.

    Attributes:
        id: ULID primary key
        email: Unique email address taken from the ID token
        name: Display name (optional)
        role: ARTIST, VENUE or ADMIN
        created_at: Account creation timestamp
        updated_at: Last update timestamp

    Relationships:
        artist: One-to-one with Artist (artists only)
        venue: One-to-one with Venue (venues only)
    """

    __tablename__ = "users"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    email = Column(String(320), unique=True, index=True, nullable=False)
    name = Column(String(120), nullable=True)
    role = Column(String(20), nullable=False, default=UserRole.ARTIST.value)
    created_at = Column(UTCDateTime, nullable=False, default=utcnow)
    updated_at = Column(UTCDateTime, nullable=True, onupdate=utcnow)

    # Relationships
    artist = relationship("Artist", back_populates="user", uselist=False)
    venue = relationship("Venue", back_populates="user", uselist=False)

    @property
    def is_artist(self) -> bool:
        return self.role == UserRole.ARTIST.value

    @property
    def is_venue(self) -> bool:
        return self.role == UserRole.VENUE.value

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def __repr__(self) -> str:
        return f"<User {self.email} ({self.role})>"
