# backend/app/services/conflict_checker.py
"""
Conflict Checker Service for the Enescena platform

Decides whether a proposed window collides with an artist's commitments:
- blackout windows the artist declared
- committed bookings (PENDING or ACCEPTED) occupying
  [event_date, event_date + hours), default duration when hours is unset

All intervals are half-open, so back-to-back windows do not conflict.
"""

from datetime import datetime
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..core.config import settings
from ..repositories import RepositoryFactory
from ..repositories.conflict_checker_repository import ConflictCheckerRepository
from .base import BaseService

logger = logging.getLogger(__name__)


def intervals_overlap(
    a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime
) -> bool:
    """True when half-open intervals [a_start, a_end) and [b_start, b_end) intersect."""
    return a_start < b_end and b_start < a_end


class ConflictChecker(BaseService):
    """
    Service for checking artist availability conflicts.

    Read-only: never mutates state, so callers decide the transaction.
    """

    def __init__(
        self,
        db: Session,
        repository: Optional[ConflictCheckerRepository] = None,
        default_hours: Optional[int] = None,
    ):
        """
        Initialize conflict checker service.

        Args:
            db: Database session
            repository: Optional ConflictCheckerRepository instance
            default_hours: Duration assumed for bookings without hours
        """
        super().__init__(db)
        self.logger = logging.getLogger(__name__)
        self.repository = repository or RepositoryFactory.create_conflict_checker_repository(db)
        self.default_hours = default_hours or settings.default_booking_hours

    @BaseService.measure_operation("find_conflicts")
    def find_conflicts(
        self,
        artist_id: str,
        proposed_start: datetime,
        proposed_end: datetime,
        exclude_booking_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        List every commitment intersecting the proposed window.

        Returns:
            Dicts with ``kind`` ("blackout" or "booking"), ``id``, ``start``, ``end``
        """
        conflicts: List[Dict[str, Any]] = []

        for blackout in self.repository.get_blackouts_overlapping(
            artist_id, proposed_start, proposed_end
        ):
            if intervals_overlap(proposed_start, proposed_end, blackout.start, blackout.end):
                conflicts.append(
                    {
                        "kind": "blackout",
                        "id": blackout.id,
                        "start": blackout.start,
                        "end": blackout.end,
                    }
                )

        bookings = self.repository.get_bookings_for_conflict_check(
            artist_id,
            proposed_start,
            proposed_end,
            exclude_booking_id=exclude_booking_id,
        )
        for booking in bookings:
            booking_start, booking_end = booking.interval(self.default_hours)
            if intervals_overlap(proposed_start, proposed_end, booking_start, booking_end):
                conflicts.append(
                    {
                        "kind": "booking",
                        "id": booking.id,
                        "start": booking_start,
                        "end": booking_end,
                    }
                )

        if conflicts:
            self.logger.info(
                f"Artist {artist_id} has {len(conflicts)} conflict(s) "
                f"for {proposed_start.isoformat()} - {proposed_end.isoformat()}"
            )
        return conflicts

    def has_conflict(
        self,
        artist_id: str,
        proposed_start: datetime,
        proposed_end: datetime,
        exclude_booking_id: Optional[str] = None,
    ) -> bool:
        """
        Check whether the artist is unavailable for [proposed_start, proposed_end).

        The caller validates proposed_end > proposed_start.
        """
        return bool(
            self.find_conflicts(
                artist_id, proposed_start, proposed_end, exclude_booking_id=exclude_booking_id
            )
        )
