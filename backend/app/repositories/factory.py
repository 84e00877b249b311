# backend/app/repositories/factory.py
"""
Repository Factory for the Enescena platform

Provides centralized creation of repository instances,
ensuring consistent initialization and dependency injection.
"""

from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from .base_repository import BaseRepository

# Avoid circular imports
if TYPE_CHECKING:
    from .artist_repository import ArtistRepository
    from .availability_repository import AvailabilityRepository
    from .booking_repository import BookingRepository
    from .conflict_checker_repository import ConflictCheckerRepository
    from .event_repository import EventArtistRepository, EventRepository
    from .notification_repository import NotificationRepository
    from .user_repository import UserRepository
    from .venue_repository import VenueRepository


class RepositoryFactory:
    """
    Factory class for creating repository instances.

    Centralizes repository creation to ensure consistent initialization
    and makes it easy to swap implementations if needed.
    """

    @staticmethod
    def create_base_repository(db: Session, model) -> BaseRepository:
        """Create a generic base repository for any model."""
        return BaseRepository(db, model)

    @staticmethod
    def create_user_repository(db: Session) -> "UserRepository":
        """Create repository for user operations."""
        from .user_repository import UserRepository

        return UserRepository(db)

    @staticmethod
    def create_artist_repository(db: Session) -> "ArtistRepository":
        """Create repository for artist profiles."""
        from .artist_repository import ArtistRepository

        return ArtistRepository(db)

    @staticmethod
    def create_venue_repository(db: Session) -> "VenueRepository":
        """Create repository for venue profiles."""
        from .venue_repository import VenueRepository

        return VenueRepository(db)

    @staticmethod
    def create_availability_repository(db: Session) -> "AvailabilityRepository":
        """Create repository for availability operations."""
        from .availability_repository import AvailabilityRepository

        return AvailabilityRepository(db)

    @staticmethod
    def create_conflict_checker_repository(db: Session) -> "ConflictCheckerRepository":
        """Create repository for conflict checking queries."""
        from .conflict_checker_repository import ConflictCheckerRepository

        return ConflictCheckerRepository(db)

    @staticmethod
    def create_booking_repository(db: Session) -> "BookingRepository":
        """Create repository for booking operations."""
        from .booking_repository import BookingRepository

        return BookingRepository(db)

    @staticmethod
    def create_event_repository(db: Session) -> "EventRepository":
        """Create repository for event operations."""
        from .event_repository import EventRepository

        return EventRepository(db)

    @staticmethod
    def create_event_artist_repository(db: Session) -> "EventArtistRepository":
        """Create repository for event line-up entries."""
        from .event_repository import EventArtistRepository

        return EventArtistRepository(db)

    @staticmethod
    def create_notification_repository(db: Session) -> "NotificationRepository":
        """Create repository for the in-app notification inbox."""
        from .notification_repository import NotificationRepository

        return NotificationRepository(db)
