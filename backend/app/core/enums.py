# backend/app/core/enums.py
"""
Core enums for the Enescena platform.

Status and role values are stored as plain strings in the database; these
enums give the rest of the code a single source for the allowed values.
"""

from enum import Enum


class UserRole(str, Enum):
    """Role carried by a user record and refreshed from identity claims."""

    ARTIST = "ARTIST"
    VENUE = "VENUE"
    ADMIN = "ADMIN"


class BookingStatus(str, Enum):
    """Booking lifecycle statuses."""

    PENDING = "PENDING"  # Requested, awaiting the artist
    ACCEPTED = "ACCEPTED"  # Artist accepted
    DECLINED = "DECLINED"  # Artist declined (terminal)
    CANCELLED = "CANCELLED"  # Venue cancelled an accepted booking (terminal)


class BookingAction(str, Enum):
    """Actions an artist can take on a pending booking."""

    ACCEPT = "ACCEPT"
    DECLINE = "DECLINE"


class EventStatus(str, Enum):
    """Event lifecycle statuses."""

    DRAFT = "DRAFT"
    PENDING_VENUE_APPROVAL = "PENDING_VENUE_APPROVAL"
    SEEKING_ARTISTS = "SEEKING_ARTISTS"
    PUBLISHED = "PUBLISHED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"


# Booking statuses that hold an artist's time for conflict detection
COMMITTED_BOOKING_STATUSES = (BookingStatus.PENDING, BookingStatus.ACCEPTED)


class NotificationType(str, Enum):
    """In-app notification kinds."""

    EVENT_REQUEST = "EVENT_REQUEST"
    EVENT_REQUEST_APPROVED = "EVENT_REQUEST_APPROVED"
    EVENT_REQUEST_DECLINED = "EVENT_REQUEST_DECLINED"
