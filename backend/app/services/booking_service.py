# backend/app/services/booking_service.py
"""
Booking Service for the Enescena platform

Handles the booking request state machine:

    PENDING -> ACCEPTED | DECLINED
    ACCEPTED -> CANCELLED

Creating and accepting a booking both run "read conflicts, then write" in
one transaction that first locks the artist row, so two overlapping
requests for the same artist cannot both succeed. Accepting a standalone
booking materializes its Event in the same transaction. Notifications are
sent after commit and never undo a transition.
"""

from datetime import datetime, timedelta
import logging
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from ..core.enums import BookingAction, BookingStatus
from ..core.exceptions import (
    BookingConflictException,
    ForbiddenException,
    InvalidStateException,
    NotFoundException,
    ServiceException,
    ValidationException,
)
from ..models.booking import Booking
from ..models.user import User
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories import RepositoryFactory
from .base import BaseService
from .conflict_checker import ConflictChecker
from .event_service import EventService, validate_hours
from .notification_service import NotificationService

logger = logging.getLogger(__name__)


class BookingService(BaseService):
    """
    Service layer for booking operations.

    Owns every booking status transition; the event service only calls
    into the model-level transition helpers when cancelling a whole event.
    """

    def __init__(
        self,
        db: Session,
        notification_service: Optional[NotificationService] = None,
        conflict_checker: Optional[ConflictChecker] = None,
        event_service: Optional[EventService] = None,
    ):
        """
        Initialize booking service.

        Args:
            db: Database session
            notification_service: Optional notification service instance
            conflict_checker: Optional conflict checker instance
            event_service: Optional event service used for materialization
        """
        super().__init__(db)
        self.notification_service = notification_service or NotificationService()
        self.conflict_checker = conflict_checker or ConflictChecker(db)
        self.event_service = event_service or EventService(
            db,
            notification_service=self.notification_service,
            conflict_checker=self.conflict_checker,
        )
        self.repository = RepositoryFactory.create_booking_repository(db)
        self.artist_repository = RepositoryFactory.create_artist_repository(db)
        self.venue_repository = RepositoryFactory.create_venue_repository(db)

    @BaseService.measure_operation("request_booking")
    def request_booking(
        self,
        user: User,
        artist_id: Optional[str],
        event_date: Optional[datetime],
        hours: Optional[int] = None,
        note: Optional[str] = None,
    ) -> Booking:
        """
        Create a PENDING booking request from the calling venue.

        Raises:
            ForbiddenException: caller is not a venue with a profile
            ValidationException: missing artist, missing date or bad hours
            NotFoundException: artist does not exist
            BookingConflictException: the artist is unavailable
        """
        venue = self.venue_repository.get_by_user_id(user.id) if user.is_venue else None
        if venue is None:
            raise ForbiddenException("Only venues with a profile can request bookings")
        if not artist_id:
            raise ValidationException("artistId is required", code="artistId_required")
        if event_date is None:
            raise ValidationException("A valid eventDate is required", code="invalid_eventDate")
        validate_hours(hours)

        start = event_date
        end = start + timedelta(hours=hours or self.conflict_checker.default_hours)
        cleaned_note = (note or "").strip() or None

        with self.transaction():
            artist = self.artist_repository.get_for_update(artist_id)
            if artist is None:
                raise NotFoundException("Artist not found", code="artist_not_found")

            conflicts = self.conflict_checker.find_conflicts(artist.id, start, end)
            if conflicts:
                prometheus_metrics.inc_booking_conflict()
                raise BookingConflictException(details={"conflicts": _describe(conflicts)})

            booking = self.repository.create(
                artist_id=artist.id,
                venue_id=venue.id,
                event_date=start,
                hours=hours,
                note=cleaned_note,
                status=BookingStatus.PENDING.value,
            )

        prometheus_metrics.inc_booking_transition(BookingStatus.PENDING.value)
        self.log_operation(
            "booking_requested", booking_id=booking.id, artist_id=artist.id, venue_id=venue.id
        )
        booking = self.repository.get_with_details(booking.id)
        self._notify(self.notification_service.send_booking_requested, booking)
        return booking

    @BaseService.measure_operation("respond_to_booking")
    def respond(self, booking_id: str, action: BookingAction | str, user: User) -> Booking:
        """
        Accept or decline a PENDING booking as the targeted artist.

        ACCEPT re-checks availability (ignoring this booking) and
        materializes the Event in the same transaction; any failure rolls
        the whole step back and the booking stays PENDING.

        Raises:
            ValidationException: unknown action
            NotFoundException: booking does not exist
            ForbiddenException: caller does not own the targeted artist
            InvalidStateException: booking is not PENDING
            BookingConflictException: artist became unavailable
            ServiceException: materialization failed
        """
        try:
            if not isinstance(action, BookingAction):
                action = BookingAction(str(action).strip().upper())
        except ValueError:
            raise ValidationException("Action must be ACCEPT or DECLINE", code="invalid_action")

        with self.transaction():
            booking = self._load_for_transition(booking_id)
            if not (user.is_artist and booking.artist and booking.artist.user_id == user.id):
                raise ForbiddenException("Only the booked artist can respond to this booking")
            if not booking.is_pending:
                raise InvalidStateException(
                    "Booking is not pending", current_status=booking.status
                )

            if action == BookingAction.ACCEPT:
                self.artist_repository.get_for_update(booking.artist_id)
                start, end = booking.interval(self.conflict_checker.default_hours)
                conflicts = self.conflict_checker.find_conflicts(
                    booking.artist_id, start, end, exclude_booking_id=booking.id
                )
                if conflicts:
                    prometheus_metrics.inc_booking_conflict()
                    raise BookingConflictException(details={"conflicts": _describe(conflicts)})

                booking.accept()
                try:
                    self.event_service.materialize_booking(booking)
                except Exception as e:
                    self.logger.error(f"Event materialization failed for booking {booking.id}: {e}")
                    raise ServiceException(
                        "Could not create the event for this booking; it is still pending",
                        code="materialization_failed",
                    ) from e
            else:
                booking.decline()

        prometheus_metrics.inc_booking_transition(booking.status)
        self.log_operation("booking_responded", booking_id=booking.id, action=action.value)

        booking = self.repository.get_with_details(booking.id)
        if action == BookingAction.ACCEPT:
            self._notify(self.notification_service.send_booking_accepted, booking)
        else:
            self._notify(self.notification_service.send_booking_declined, booking)
        return booking

    @BaseService.measure_operation("cancel_booking")
    def cancel(self, booking_id: str, user: User, reason: Optional[str] = None) -> Booking:
        """
        Cancel an ACCEPTED booking as the venue that made it.

        Raises:
            NotFoundException: booking does not exist
            ForbiddenException: caller does not own the booking's venue
            InvalidStateException: booking is not ACCEPTED
        """
        with self.transaction():
            booking = self._load_for_transition(booking_id)
            if not (user.is_venue and booking.venue and booking.venue.user_id == user.id):
                raise ForbiddenException("Only the booking venue can cancel this booking")
            if not booking.is_accepted:
                raise InvalidStateException(
                    "Only accepted bookings can be cancelled", current_status=booking.status
                )
            booking.cancel((reason or "").strip() or None)

        prometheus_metrics.inc_booking_transition(BookingStatus.CANCELLED.value)
        self.log_operation("booking_cancelled", booking_id=booking.id)

        booking = self.repository.get_with_details(booking.id)
        self._notify(self.notification_service.send_booking_cancelled, booking)
        return booking

    def get_booking_for_user(self, booking_id: str, user: User) -> Booking:
        """Fetch a booking the caller is party to (artist, venue or admin)."""
        booking = self.repository.get_with_details(booking_id)
        if booking is None:
            raise NotFoundException("Booking not found", code="not_found")
        if not self._is_party(booking, user):
            raise ForbiddenException("You do not have access to this booking")
        return booking

    def list_bookings_for_user(self, user: User, status: Optional[str] = None) -> List[Booking]:
        """
        Bookings visible to the caller.

        Artists see bookings targeting them, venues see bookings they made,
        admins see all.
        """
        if status:
            try:
                status = BookingStatus(status.upper()).value
            except ValueError:
                raise ValidationException(f"Unknown booking status: {status}", code="invalid_status")

        if user.is_admin:
            return self.repository.list_all(status)
        if user.is_venue:
            venue = self.venue_repository.get_by_user_id(user.id)
            return self.repository.list_for_venue(venue.id, status) if venue else []
        artist = self.artist_repository.get_by_user_id(user.id)
        return self.repository.list_for_artist(artist.id, status) if artist else []

    # Helpers

    def _load_for_transition(self, booking_id: str) -> Booking:
        booking = self.repository.get_for_update(booking_id)
        if booking is None:
            raise NotFoundException("Booking not found", code="not_found")
        return booking

    @staticmethod
    def _is_party(booking: Booking, user: User) -> bool:
        if user.is_admin:
            return True
        if booking.artist is not None and booking.artist.user_id == user.id:
            return True
        return booking.venue is not None and booking.venue.user_id == user.id

    def _notify(self, send: Callable[[Booking], bool], booking: Booking) -> None:
        try:
            send(booking)
        except Exception as e:
            self.logger.error(f"Notification for booking {booking.id} failed: {e}")


def _describe(conflicts: List[dict]) -> List[dict]:
    return [
        {
            "kind": c["kind"],
            "start": c["start"].isoformat(),
            "end": c["end"].isoformat(),
        }
        for c in conflicts
    ]
