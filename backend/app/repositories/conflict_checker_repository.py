# backend/app/repositories/conflict_checker_repository.py
"""
ConflictChecker Repository for the Enescena platform

Fetches the commitments that could intersect a proposed window: blackout
windows and committed bookings of one artist. The database narrows the
candidates; exact half-open overlap is decided by the conflict checker.
"""

from datetime import datetime, timedelta
import logging
from typing import List, Optional, Sequence, cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.constants import MAX_BOOKING_HOURS
from ..core.enums import COMMITTED_BOOKING_STATUSES
from ..core.exceptions import RepositoryException
from ..models.availability import ArtistUnavailability
from ..models.booking import Booking
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ConflictCheckerRepository(BaseRepository[Booking]):
    """
    Repository for conflict checking data access.

    Read-only: nothing here mutates state.
    """

    def __init__(self, db: Session):
        """Initialize with Booking model as primary."""
        super().__init__(db, Booking)
        self.logger = logging.getLogger(__name__)

    def get_blackouts_overlapping(
        self, artist_id: str, start: datetime, end: datetime
    ) -> List[ArtistUnavailability]:
        """Blackout windows of the artist intersecting [start, end)."""
        try:
            return cast(
                List[ArtistUnavailability],
                self.db.query(ArtistUnavailability)
                .filter(
                    ArtistUnavailability.artist_id == artist_id,
                    ArtistUnavailability.start < end,
                    ArtistUnavailability.end > start,
                )
                .all(),
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting blackouts for conflict check: {str(e)}")
            raise RepositoryException(f"Failed to get conflict blackouts: {str(e)}")

    def get_bookings_for_conflict_check(
        self,
        artist_id: str,
        start: datetime,
        end: datetime,
        statuses: Sequence[str] = tuple(s.value for s in COMMITTED_BOOKING_STATUSES),
        exclude_booking_id: Optional[str] = None,
    ) -> List[Booking]:
        """
        Committed bookings of the artist that could intersect [start, end).

        A booking lasts at most MAX_BOOKING_HOURS, so only bookings starting
        within that horizon before ``end`` are candidates.
        """
        try:
            query = self.db.query(Booking).filter(
                Booking.artist_id == artist_id,
                Booking.status.in_(list(statuses)),
                Booking.event_date < end,
                Booking.event_date > start - timedelta(hours=MAX_BOOKING_HOURS),
            )

            if exclude_booking_id:
                query = query.filter(Booking.id != exclude_booking_id)

            return cast(List[Booking], query.all())
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting bookings for conflict check: {str(e)}")
            raise RepositoryException(f"Failed to get conflict bookings: {str(e)}")
