"""
Database models for the Enescena platform.

This module exports all SQLAlchemy models used in the application.
The models are organized by functionality:
- Users resolved from identity claims
- Artist and venue profiles
- Artist availability (blackout windows)
- Bookings and events
- In-app notifications
"""

from .artist import Artist
from .availability import ArtistUnavailability
from .booking import Booking
from .event import Event, EventArtist
from .notification import Notification
from .user import User
from .venue import Venue

__all__ = [
    # User models
    "User",
    # Profile models
    "Artist",
    "Venue",
    # Availability models
    "ArtistUnavailability",
    # Booking and event models
    "Booking",
    "Event",
    "EventArtist",
    # Notification models
    "Notification",
]
