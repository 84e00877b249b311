# backend/app/repositories/booking_repository.py
"""
Booking Repository for the Enescena platform

Implements data access operations for booking management:
- Booking CRUD operations
- Role-scoped listing (artist, venue, admin)
- Bookings linked to an event
- Eager loading of artist and venue for notifications and responses
"""

import logging
from typing import List, Optional, cast

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, joinedload

from ..core.constants import DEFAULT_QUERY_LIMIT
from ..core.exceptions import RepositoryException
from ..models.artist import Artist
from ..models.booking import Booking
from ..models.venue import Venue
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class BookingRepository(BaseRepository[Booking]):
    """Repository for booking data access."""

    def __init__(self, db: Session):
        """Initialize with Booking model."""
        super().__init__(db, Booking)
        self.logger = logging.getLogger(__name__)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(
            joinedload(Booking.artist).joinedload(Artist.user),
            joinedload(Booking.venue).joinedload(Venue.user),
        )

    def get_with_details(self, booking_id: str) -> Optional[Booking]:
        """Get a booking with artist, venue and their owners loaded."""
        return self.get_by_id(booking_id, load_relationships=True)

    def get_for_update(self, id: str) -> Optional[Booking]:
        """Lock the booking row and load its relationships."""
        booking = super().get_for_update(id)
        if booking is not None:
            # Touch relationships inside the transaction for later notifications
            _ = booking.artist, booking.venue
        return booking

    def list_for_artist(self, artist_id: str, status: Optional[str] = None) -> List[Booking]:
        return self._list(Booking.artist_id == artist_id, status)

    def list_for_venue(self, venue_id: str, status: Optional[str] = None) -> List[Booking]:
        return self._list(Booking.venue_id == venue_id, status)

    def list_all(self, status: Optional[str] = None) -> List[Booking]:
        return self._list(None, status)

    def list_for_event(self, event_id: str) -> List[Booking]:
        return self._list(Booking.event_id == event_id, None, limit=None)

    def count_for_event(self, event_id: str) -> int:
        try:
            count = (
                self.db.query(func.count(Booking.id)).filter(Booking.event_id == event_id).scalar()
            )
            return int(count or 0)
        except SQLAlchemyError as e:
            self.logger.error(f"Error counting bookings for event {event_id}: {str(e)}")
            raise RepositoryException(f"Failed to count bookings: {str(e)}")

    def find_for_event_artist(self, event_id: str, artist_id: str) -> Optional[Booking]:
        """Most recent booking linking an artist to an event, if any."""
        try:
            return cast(
                Optional[Booking],
                self.db.query(Booking)
                .filter(Booking.event_id == event_id, Booking.artist_id == artist_id)
                .order_by(Booking.created_at.desc())
                .first(),
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error finding booking for event {event_id}: {str(e)}")
            raise RepositoryException(f"Failed to find booking: {str(e)}")

    def _list(
        self,
        criterion,
        status: Optional[str],
        limit: Optional[int] = DEFAULT_QUERY_LIMIT,
    ) -> List[Booking]:
        try:
            query = self._apply_eager_loading(self.db.query(Booking))
            if criterion is not None:
                query = query.filter(criterion)
            if status:
                query = query.filter(Booking.status == status)
            query = query.order_by(Booking.event_date.desc())
            if limit is not None:
                query = query.limit(limit)
            return cast(List[Booking], query.all())
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing bookings: {str(e)}")
            raise RepositoryException(f"Failed to list bookings: {str(e)}")
