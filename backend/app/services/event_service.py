# backend/app/services/event_service.py
"""
Event Service for the Enescena platform

Handles everything about events except the artist request / venue approval
handshake (see approval_workflow_service):
- Materializing a published Event from an accepted standalone booking
- Venue-created events and their artist line-up
- Publishing, which sends booking requests to unconfirmed line-up artists
- Cancelling, which winds down every booking linked to the event
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal
import logging
from typing import Any, List, Mapping, Optional

from sqlalchemy.orm import Session

from ..core.constants import MAX_BOOKING_HOURS
from ..core.enums import BookingStatus, EventStatus
from ..core.exceptions import (
    ForbiddenException,
    InvalidStateException,
    NotFoundException,
    ValidationException,
)
from ..models.booking import Booking
from ..models.event import Event, EventArtist
from ..models.user import User
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories import RepositoryFactory
from ..utils.slug import slugify
from .base import BaseService
from .conflict_checker import ConflictChecker
from .notification_service import NotificationService

logger = logging.getLogger(__name__)

# Line-up changes are only allowed while the event is being assembled
EDITABLE_EVENT_STATUSES = {EventStatus.DRAFT.value, EventStatus.SEEKING_ARTISTS.value}
PUBLISHABLE_EVENT_STATUSES = EDITABLE_EVENT_STATUSES
TERMINAL_EVENT_STATUSES = {EventStatus.CANCELLED.value, EventStatus.COMPLETED.value}
# Date and length are fixed once bookings may exist
SCHEDULE_EDITABLE_STATUSES = EDITABLE_EVENT_STATUSES | {EventStatus.PENDING_VENUE_APPROVAL.value}
SCHEDULE_FIELDS = {"event_date", "end_date", "hours"}
UPDATABLE_EVENT_FIELDS = (
    "title",
    "description",
    "notes",
    "event_date",
    "end_date",
    "hours",
    "total_budget",
)
# Status changes accepted by update_event, keyed by target status
STATUS_CHANGE_SOURCES = {
    EventStatus.DRAFT.value: {EventStatus.DRAFT.value, EventStatus.SEEKING_ARTISTS.value},
    EventStatus.PUBLISHED.value: PUBLISHABLE_EVENT_STATUSES | {EventStatus.PUBLISHED.value},
    EventStatus.CANCELLED.value: {
        EventStatus.DRAFT.value,
        EventStatus.PENDING_VENUE_APPROVAL.value,
        EventStatus.SEEKING_ARTISTS.value,
        EventStatus.PUBLISHED.value,
    },
    EventStatus.COMPLETED.value: {EventStatus.PUBLISHED.value},
}


@dataclass
class PublishResult:
    """Outcome of publishing an event."""

    event: Event
    invited_artist_ids: List[str] = field(default_factory=list)
    skipped_artist_ids: List[str] = field(default_factory=list)


@dataclass
class CancelResult:
    """Outcome of cancelling an event."""

    event: Event
    declined_booking_ids: List[str] = field(default_factory=list)
    cancelled_booking_ids: List[str] = field(default_factory=list)


class EventService(BaseService):
    """
    Service layer for events.

    Methods that take an explicit booking or event run inside the caller's
    transaction when the caller owns one (materialize_booking); public
    entry points manage their own transaction.
    """

    def __init__(
        self,
        db: Session,
        notification_service: Optional[NotificationService] = None,
        conflict_checker: Optional[ConflictChecker] = None,
    ):
        super().__init__(db)
        self.notification_service = notification_service or NotificationService()
        self.conflict_checker = conflict_checker or ConflictChecker(db)
        self.repository = RepositoryFactory.create_event_repository(db)
        self.event_artist_repository = RepositoryFactory.create_event_artist_repository(db)
        self.booking_repository = RepositoryFactory.create_booking_repository(db)
        self.artist_repository = RepositoryFactory.create_artist_repository(db)
        self.venue_repository = RepositoryFactory.create_venue_repository(db)

    # ------------------------------------------------------------------
    # Materialization
    # ------------------------------------------------------------------

    def materialize_booking(self, booking: Booking) -> str:
        """
        Ensure an accepted booking is represented by an Event.

        Does not commit. When the booking already references an event, the
        artist's line-up entry on that event is confirmed and the existing
        id is returned.
        """
        if booking.event_id:
            entry = self.event_artist_repository.get_entry(booking.event_id, booking.artist_id)
            if entry is None:
                self.event_artist_repository.create(
                    event_id=booking.event_id,
                    artist_id=booking.artist_id,
                    hours=booking.hours,
                    confirmed=True,
                )
            elif not entry.confirmed:
                entry.confirmed = True
                self.event_artist_repository.flush()
            return booking.event_id

        artist_name = booking.artist.name if booking.artist and booking.artist.name else "Artist"
        venue_name = booking.venue.name if booking.venue and booking.venue.name else "Venue"
        title = f"{artist_name} at {venue_name}"

        event = self.repository.create_with_unique_slug(
            slugify(title) or "event",
            venue_id=booking.venue_id,
            title=title,
            description=booking.note or f"Performance by {artist_name}",
            event_date=booking.event_date,
            end_date=(
                booking.event_date + timedelta(hours=booking.hours) if booking.hours else None
            ),
            hours=booking.hours,
            total_hours=booking.hours,
            status=EventStatus.PUBLISHED.value,
        )
        self.event_artist_repository.create(
            event_id=event.id,
            artist_id=booking.artist_id,
            fee=None,
            hours=booking.hours,
            confirmed=True,
        )
        booking.event_id = event.id
        self.booking_repository.flush()

        self.logger.info(f"Materialized event {event.id} ({event.slug}) from booking {booking.id}")
        return event.id

    @BaseService.measure_operation("create_event_for_booking")
    def create_event_for_booking(self, booking_id: str) -> str:
        """
        Materialize the Event for an accepted booking. Idempotent.

        Raises:
            NotFoundException: booking does not exist
            InvalidStateException: booking is not ACCEPTED
        """
        with self.transaction():
            booking = self.booking_repository.get_for_update(booking_id)
            if booking is None:
                raise NotFoundException("Booking not found", code="not_found")
            if booking.event_id:
                return booking.event_id
            if booking.status != BookingStatus.ACCEPTED.value:
                raise InvalidStateException(
                    "Only accepted bookings can be materialized", current_status=booking.status
                )
            return self.materialize_booking(booking)

    # ------------------------------------------------------------------
    # Venue-created events
    # ------------------------------------------------------------------

    @BaseService.measure_operation("create_event")
    def create_event(
        self,
        user: User,
        title: str,
        event_date: datetime,
        description: Optional[str] = None,
        end_date: Optional[datetime] = None,
        hours: Optional[int] = None,
        total_budget: Optional[Decimal] = None,
        notes: Optional[str] = None,
    ) -> Event:
        """Create a DRAFT event at the calling user's venue."""
        venue = self._require_venue(user)
        title = (title or "").strip()
        if not title:
            raise ValidationException("Title is required", code="title_required")
        _validate_window(event_date, end_date, hours)

        with self.transaction():
            event = self.repository.create_with_unique_slug(
                slugify(title) or "event",
                venue_id=venue.id,
                created_by_id=user.id,
                title=title,
                description=description,
                notes=notes,
                event_date=event_date,
                end_date=end_date or (event_date + timedelta(hours=hours) if hours else None),
                hours=hours,
                total_hours=hours,
                total_budget=total_budget,
                status=EventStatus.DRAFT.value,
            )

        self.log_operation("event_created", event_id=event.id, venue_id=venue.id)
        return self._reload(event.id)

    def get_event(self, event_id: str, user: Optional[User] = None) -> Event:
        """
        Fetch an event visible to the caller.

        Published events are public; anything else is visible only to the
        venue owner, line-up artists, the creator and admins.
        """
        event = self.repository.get_by_id(event_id)
        if event is None or not self._can_view(event, user):
            raise NotFoundException("Event not found", code="not_found")
        return event

    def list_events(self, user: Optional[User], public: bool = False) -> List[Event]:
        """Public listing (published) or the caller's own events by role."""
        if public or user is None:
            return self.repository.list_published()
        if user.is_admin:
            return self.repository.list_all()
        if user.is_venue:
            venue = self.venue_repository.get_by_user_id(user.id)
            return self.repository.list_for_venue(venue.id) if venue else []
        artist = self.artist_repository.get_by_user_id(user.id)
        return self.repository.list_for_artist(artist.id) if artist else []

    @BaseService.measure_operation("add_event_artist")
    def add_artist(
        self,
        event_id: str,
        user: User,
        artist_id: str,
        fee: Optional[Decimal] = None,
        hours: Optional[int] = None,
    ) -> EventArtist:
        """Add an unconfirmed line-up entry."""
        event = self._require_owned_event(event_id, user)
        if event.status not in EDITABLE_EVENT_STATUSES:
            raise InvalidStateException(
                "Line-up can only change while the event is a draft or seeking artists",
                current_status=event.status,
            )
        validate_hours(hours)
        artist = self.artist_repository.get_by_id(artist_id, load_relationships=False)
        if artist is None:
            raise NotFoundException("Artist not found", code="artist_not_found")
        if self.event_artist_repository.get_entry(event.id, artist.id) is not None:
            raise InvalidStateException("Artist is already in the line-up")

        with self.transaction():
            entry = self.event_artist_repository.create(
                event_id=event.id, artist_id=artist.id, fee=fee, hours=hours, confirmed=False
            )
        self.db.expire(event, ["artists"])

        self.log_operation("event_artist_added", event_id=event.id, artist_id=artist.id)
        return entry

    @BaseService.measure_operation("remove_event_artist")
    def remove_artist(self, event_id: str, user: User, artist_id: str) -> None:
        """Remove a line-up entry that has not been confirmed."""
        event = self._require_owned_event(event_id, user)
        entry = self.event_artist_repository.get_entry(event.id, artist_id)
        if entry is None:
            raise NotFoundException("Artist is not in the line-up", code="not_found")
        if entry.confirmed:
            raise InvalidStateException(
                "Confirmed artists are released by cancelling their booking"
            )

        with self.transaction():
            self.event_artist_repository.delete(entry.id)
        self.db.expire(event, ["artists"])

        self.log_operation("event_artist_removed", event_id=event.id, artist_id=artist_id)

    @BaseService.measure_operation("update_event")
    def update_event(self, event_id: str, user: User, changes: Mapping[str, Any]) -> Event:
        """
        Apply a partial update from the hosting venue.

        ``changes`` holds only the fields the caller sent. A new title moves
        the event to a fresh unique slug. Status changes follow the event
        lifecycle: PUBLISHED and CANCELLED run publish_event and
        cancel_event after the field changes commit, COMPLETED closes a
        published event and DRAFT takes an event seeking artists back to
        draft.

        Raises:
            NotFoundException: event does not exist
            ForbiddenException: caller is not the hosting venue
            InvalidStateException: event is closed, or the change does not
                fit its current status
            ValidationException: invalid field values
        """
        event = self._require_owned_event(event_id, user)
        if event.status in TERMINAL_EVENT_STATUSES:
            raise InvalidStateException("Closed events cannot be edited", current_status=event.status)

        unknown = set(changes) - set(UPDATABLE_EVENT_FIELDS) - {"status"}
        if unknown:
            raise ValidationException(
                "Unknown event fields", code="unknown_field", details={"fields": sorted(unknown)}
            )
        fields = {key: value for key, value in changes.items() if key in UPDATABLE_EVENT_FIELDS}
        target_status = changes.get("status")
        if target_status is not None:
            _check_status_change(event.status, target_status)

        if "title" in fields:
            fields["title"] = (fields["title"] or "").strip()
            if not fields["title"]:
                raise ValidationException("Title is required", code="title_required")
        if fields.get("total_budget") is not None and fields["total_budget"] < 0:
            raise ValidationException("Budget cannot be negative", code="invalid_budget")
        if SCHEDULE_FIELDS & fields.keys():
            if event.status not in SCHEDULE_EDITABLE_STATUSES:
                raise InvalidStateException(
                    "Date and length can only change before the event is published",
                    current_status=event.status,
                )
            _validate_window(
                fields.get("event_date", event.event_date),
                fields.get("end_date", event.end_date),
                fields.get("hours", event.hours),
            )

        with self.transaction():
            if "title" in fields and fields["title"] != event.title:
                self.repository.reassign_slug(event, slugify(fields["title"]) or "event")
            for key, value in fields.items():
                setattr(event, key, value)
            if "hours" in fields:
                event.total_hours = fields["hours"]
            if target_status in (EventStatus.DRAFT.value, EventStatus.COMPLETED.value):
                event.status = target_status

        self.log_operation("event_updated", event_id=event.id, changed=sorted(changes))

        if target_status == EventStatus.PUBLISHED.value and event.status != target_status:
            return self.publish_event(event.id, user).event
        if target_status == EventStatus.CANCELLED.value:
            return self.cancel_event(event.id, user).event
        return self._reload(event.id)

    @BaseService.measure_operation("delete_event")
    def delete_event(self, event_id: str, user: User) -> None:
        """
        Delete an event that never produced a booking.

        Raises:
            ValidationException: the event has bookings (cancel it instead)
        """
        event = self._require_owned_event(event_id, user)
        if self.booking_repository.count_for_event(event.id):
            raise ValidationException(
                "Cannot delete event with existing bookings", code="event_has_bookings"
            )

        with self.transaction():
            self.repository.delete(event.id)

        self.log_operation("event_deleted", event_id=event_id)

    # ------------------------------------------------------------------
    # Publishing and cancellation
    # ------------------------------------------------------------------

    @BaseService.measure_operation("publish_event")
    def publish_event(self, event_id: str, user: User) -> PublishResult:
        """
        Publish an event and invite its unconfirmed line-up.

        Each unconfirmed artist without a live booking for this event gets a
        PENDING booking request. Artists with a conflict are skipped.
        """
        event = self._require_owned_event(event_id, user)
        if event.status not in PUBLISHABLE_EVENT_STATUSES:
            raise InvalidStateException(
                "Only draft events or events seeking artists can be published",
                current_status=event.status,
            )

        result = PublishResult(event=event)
        created: List[Booking] = []
        with self.transaction():
            event.status = EventStatus.PUBLISHED.value
            for entry in self.event_artist_repository.list_unconfirmed(event.id):
                existing = self.booking_repository.find_for_event_artist(event.id, entry.artist_id)
                if existing is not None and existing.status in (
                    BookingStatus.PENDING.value,
                    BookingStatus.ACCEPTED.value,
                ):
                    continue

                # Serialize with concurrent requests for the same artist
                self.artist_repository.get_for_update(entry.artist_id)
                hours = entry.hours or event.hours
                start = event.event_date
                end = start + timedelta(hours=hours or self.conflict_checker.default_hours)
                if self.conflict_checker.has_conflict(entry.artist_id, start, end):
                    prometheus_metrics.inc_booking_conflict()
                    result.skipped_artist_ids.append(entry.artist_id)
                    continue

                booking = self.booking_repository.create(
                    artist_id=entry.artist_id,
                    venue_id=event.venue_id,
                    event_id=event.id,
                    event_date=start,
                    hours=hours,
                    note=event.description,
                    status=BookingStatus.PENDING.value,
                )
                created.append(booking)
                result.invited_artist_ids.append(entry.artist_id)

        for booking in created:
            prometheus_metrics.inc_booking_transition(BookingStatus.PENDING.value)
            self._notify(self.notification_service.send_booking_requested, booking)

        self.log_operation(
            "event_published",
            event_id=event.id,
            invited=len(result.invited_artist_ids),
            skipped=len(result.skipped_artist_ids),
        )
        result.event = self._reload(event.id)
        return result

    @BaseService.measure_operation("cancel_event")
    def cancel_event(self, event_id: str, user: User, reason: Optional[str] = None) -> CancelResult:
        """
        Cancel an event.

        PENDING bookings linked to it are declined and ACCEPTED ones are
        cancelled; terminal bookings are left alone.
        """
        event = self._require_owned_event(event_id, user)
        if event.status in TERMINAL_EVENT_STATUSES:
            raise InvalidStateException(
                "Event is already closed", current_status=event.status
            )

        result = CancelResult(event=event)
        affected: List[Booking] = []
        with self.transaction():
            event.status = EventStatus.CANCELLED.value
            for booking in self.booking_repository.list_for_event(event.id):
                if booking.is_pending:
                    booking.decline()
                    result.declined_booking_ids.append(booking.id)
                    affected.append(booking)
                elif booking.is_accepted:
                    booking.cancel(reason)
                    result.cancelled_booking_ids.append(booking.id)
                    affected.append(booking)

        for booking in affected:
            prometheus_metrics.inc_booking_transition(booking.status)
            self._notify(self.notification_service.send_booking_cancelled, booking)

        self.log_operation(
            "event_cancelled",
            event_id=event.id,
            declined=len(result.declined_booking_ids),
            cancelled=len(result.cancelled_booking_ids),
        )
        result.event = self._reload(event.id)
        return result

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_venue(self, user: User):
        venue = self.venue_repository.get_by_user_id(user.id) if user.is_venue else None
        if venue is None:
            raise ForbiddenException("Only venues with a profile can manage events")
        return venue

    def _require_owned_event(self, event_id: str, user: User) -> Event:
        event = self.repository.get_by_id(event_id)
        if event is None:
            raise NotFoundException("Event not found", code="not_found")
        if user.is_admin:
            return event
        if event.venue is None or event.venue.user_id != user.id:
            raise ForbiddenException("Only the hosting venue can manage this event")
        return event

    def _can_view(self, event: Event, user: Optional[User]) -> bool:
        if event.status == EventStatus.PUBLISHED.value:
            return True
        if user is None:
            return False
        if user.is_admin or event.created_by_id == user.id:
            return True
        if event.venue is not None and event.venue.user_id == user.id:
            return True
        return any(entry.artist and entry.artist.user_id == user.id for entry in event.artists)

    def _reload(self, event_id: str) -> Event:
        self.db.expire_all()
        return self.repository.get_by_id(event_id)

    def _notify(self, send, *args) -> None:
        try:
            send(*args)
        except Exception as e:
            self.logger.error(f"Notification {getattr(send, '__name__', send)} failed: {e}")


def _validate_window(
    event_date: Optional[datetime], end_date: Optional[datetime], hours: Optional[int]
) -> None:
    if event_date is None:
        raise ValidationException("Event date is required", code="invalid_eventDate")
    if end_date is not None and end_date <= event_date:
        raise ValidationException("End must be after start", code="end_before_start")
    validate_hours(hours)


def validate_hours(hours: Optional[int]) -> None:
    """Hours are optional; when given they must be in 1..MAX_BOOKING_HOURS."""
    if hours is not None and not 0 < hours <= MAX_BOOKING_HOURS:
        raise ValidationException(
            f"Hours must be between 1 and {MAX_BOOKING_HOURS}", code="invalid_hours"
        )


def _check_status_change(current: str, target: str) -> None:
    sources = STATUS_CHANGE_SOURCES.get(target)
    if sources is None:
        raise ValidationException(f"Status {target} cannot be set directly", code="invalid_status")
    if current not in sources:
        raise InvalidStateException(
            f"Cannot move a {current} event to {target}", current_status=current
        )
