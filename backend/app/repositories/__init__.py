# backend/app/repositories/__init__.py
"""
Repository Pattern Implementation for the Enescena platform

This package provides the repository layer for data access,
separating business logic from database queries.

Key Components:
- BaseRepository: Foundation for all repositories with generic CRUD operations
- IRepository: Interface defining required methods for all repositories
- RepositoryFactory: Factory for creating repository instances
- ConflictCheckerRepository: Candidate commitments for conflict detection

Usage:
    from app.repositories import RepositoryFactory

    # In a service:
    repository = RepositoryFactory.create_booking_repository(db)
    bookings = repository.list_for_artist(artist_id)
"""

from .artist_repository import ArtistRepository
from .availability_repository import AvailabilityRepository
from .base_repository import BaseRepository, IRepository
from .booking_repository import BookingRepository
from .conflict_checker_repository import ConflictCheckerRepository
from .event_repository import EventArtistRepository, EventRepository
from .factory import RepositoryFactory
from .notification_repository import NotificationRepository
from .user_repository import UserRepository
from .venue_repository import VenueRepository

__all__ = [
    "IRepository",
    "BaseRepository",
    "RepositoryFactory",
    "UserRepository",
    "ArtistRepository",
    "VenueRepository",
    "AvailabilityRepository",
    "ConflictCheckerRepository",
    "BookingRepository",
    "EventRepository",
    "EventArtistRepository",
    "NotificationRepository",
]
