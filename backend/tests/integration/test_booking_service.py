"""Booking request, response and cancellation state machine."""

from unittest.mock import Mock, patch

import pytest

from app.core.enums import BookingAction, BookingStatus, EventStatus, UserRole
from app.core.exceptions import (
    BookingConflictException,
    ForbiddenException,
    InvalidStateException,
    NotFoundException,
    ServiceException,
    ValidationException,
)
from app.models.event import Event, EventArtist
from app.services.booking_service import BookingService
from app.services.notification_service import NotificationService
from tests.utils.time import utc


@pytest.fixture
def notifier():
    return Mock(spec=NotificationService)


@pytest.fixture
def service(db, notifier):
    return BookingService(db, notification_service=notifier)


def test_request_booking_creates_pending(service, notifier, artist, venue):
    booking = service.request_booking(venue.user, artist.id, utc(2025, 9, 12, 20), hours=2, note=" Two sets ")

    assert booking.status == BookingStatus.PENDING.value
    assert booking.artist_id == artist.id
    assert booking.venue_id == venue.id
    assert booking.note == "Two sets"
    assert booking.event_id is None
    notifier.send_booking_requested.assert_called_once()


def test_request_rejected_by_blackout(service, notifier, artist, venue, blackout_factory):
    blackout_factory(artist, utc(2025, 9, 12, 20), utc(2025, 9, 12, 23))

    with pytest.raises(BookingConflictException) as exc_info:
        service.request_booking(venue.user, artist.id, utc(2025, 9, 12, 21), hours=1)

    assert exc_info.value.code == "artist_unavailable"
    assert exc_info.value.details["conflicts"][0]["kind"] == "blackout"
    notifier.send_booking_requested.assert_not_called()


def test_request_right_after_blackout_succeeds(service, artist, venue, blackout_factory):
    blackout_factory(artist, utc(2025, 9, 12, 20), utc(2025, 9, 12, 23))

    booking = service.request_booking(venue.user, artist.id, utc(2025, 9, 12, 23), hours=1)

    assert booking.status == BookingStatus.PENDING.value


def test_pending_booking_blocks_second_request(service, artist, venue, venue_factory):
    service.request_booking(venue.user, artist.id, utc(2025, 9, 12, 20), hours=2)
    other_venue = venue_factory(name="Bar Sur")

    with pytest.raises(BookingConflictException):
        service.request_booking(other_venue.user, artist.id, utc(2025, 9, 12, 21), hours=2)


def test_only_venues_can_request(service, artist):
    with pytest.raises(ForbiddenException):
        service.request_booking(artist.user, artist.id, utc(2025, 9, 12, 20))


def test_venue_without_profile_cannot_request(service, artist, user_factory):
    bare_venue_user = user_factory(UserRole.VENUE)
    with pytest.raises(ForbiddenException):
        service.request_booking(bare_venue_user, artist.id, utc(2025, 9, 12, 20))


@pytest.mark.parametrize(
    "artist_id, event_date, hours, code",
    [
        (None, utc(2025, 9, 12, 20), 2, "artistId_required"),
        ("x", None, 2, "invalid_eventDate"),
        ("x", utc(2025, 9, 12, 20), 0, "invalid_hours"),
        ("x", utc(2025, 9, 12, 20), 25, "invalid_hours"),
    ],
)
def test_request_validation(service, venue, artist_id, event_date, hours, code):
    with pytest.raises(ValidationException) as exc_info:
        service.request_booking(venue.user, artist_id, event_date, hours=hours)
    assert exc_info.value.code == code


def test_request_for_unknown_artist(service, venue):
    with pytest.raises(NotFoundException):
        service.request_booking(venue.user, "01J8ZB2Q4K6M8N0P2R4T6V8X9Y", utc(2025, 9, 12, 20))


def test_accept_materializes_event(db, service, notifier, artist, venue):
    booking = service.request_booking(venue.user, artist.id, utc(2025, 9, 12, 20), hours=2)

    accepted = service.respond(booking.id, BookingAction.ACCEPT, artist.user)

    assert accepted.status == BookingStatus.ACCEPTED.value
    assert accepted.responded_at is not None
    event = db.get(Event, accepted.event_id)
    assert event.title == "Luna Duo at Teatro Azul"
    assert event.slug == "luna-duo-at-teatro-azul"
    assert event.status == EventStatus.PUBLISHED.value
    assert event.end_date == utc(2025, 9, 12, 22)
    assert event.description == "Performance by Luna Duo"
    entries = db.query(EventArtist).filter_by(event_id=event.id).all()
    assert [(e.artist_id, e.confirmed, e.hours) for e in entries] == [(artist.id, True, 2)]
    notifier.send_booking_accepted.assert_called_once()


def test_accept_accepts_string_action(service, artist, venue):
    booking = service.request_booking(venue.user, artist.id, utc(2025, 9, 12, 20), hours=2)

    accepted = service.respond(booking.id, "accept", artist.user)

    assert accepted.status == BookingStatus.ACCEPTED.value


def test_decline(service, notifier, artist, venue):
    booking = service.request_booking(venue.user, artist.id, utc(2025, 9, 12, 20), hours=2)

    declined = service.respond(booking.id, BookingAction.DECLINE, artist.user)

    assert declined.status == BookingStatus.DECLINED.value
    assert declined.event_id is None
    notifier.send_booking_declined.assert_called_once()


def test_declined_booking_frees_the_slot(service, artist, venue):
    booking = service.request_booking(venue.user, artist.id, utc(2025, 9, 12, 20), hours=2)
    service.respond(booking.id, BookingAction.DECLINE, artist.user)

    again = service.request_booking(venue.user, artist.id, utc(2025, 9, 12, 20), hours=2)

    assert again.status == BookingStatus.PENDING.value


def test_accept_declined_booking_is_invalid_state(service, artist, venue):
    booking = service.request_booking(venue.user, artist.id, utc(2025, 9, 12, 20), hours=2)
    service.respond(booking.id, BookingAction.DECLINE, artist.user)

    with pytest.raises(InvalidStateException) as exc_info:
        service.respond(booking.id, BookingAction.ACCEPT, artist.user)
    assert exc_info.value.details["current_status"] == BookingStatus.DECLINED.value


def test_unknown_action(service, artist, venue):
    booking = service.request_booking(venue.user, artist.id, utc(2025, 9, 12, 20), hours=2)
    with pytest.raises(ValidationException) as exc_info:
        service.respond(booking.id, "maybe", artist.user)
    assert exc_info.value.code == "invalid_action"


def test_only_booked_artist_can_respond(service, artist, artist_factory, venue):
    booking = service.request_booking(venue.user, artist.id, utc(2025, 9, 12, 20), hours=2)
    other = artist_factory(name="Someone Else")

    with pytest.raises(ForbiddenException):
        service.respond(booking.id, BookingAction.ACCEPT, other.user)
    with pytest.raises(ForbiddenException):
        service.respond(booking.id, BookingAction.ACCEPT, venue.user)


def test_accept_rechecks_availability(db, service, artist, venue, booking_factory):
    booking = service.request_booking(venue.user, artist.id, utc(2025, 9, 12, 20), hours=2)
    # Overlapping commitment that slipped in after the request
    booking_factory(artist, venue, utc(2025, 9, 12, 21), hours=1, status=BookingStatus.ACCEPTED)

    with pytest.raises(BookingConflictException):
        service.respond(booking.id, BookingAction.ACCEPT, artist.user)

    db.refresh(booking)
    assert booking.status == BookingStatus.PENDING.value


def test_failed_materialization_keeps_booking_pending(db, service, notifier, artist, venue):
    booking = service.request_booking(venue.user, artist.id, utc(2025, 9, 12, 20), hours=2)

    with patch.object(
        service.event_service, "materialize_booking", side_effect=RuntimeError("boom")
    ):
        with pytest.raises(ServiceException) as exc_info:
            service.respond(booking.id, BookingAction.ACCEPT, artist.user)

    assert exc_info.value.code == "materialization_failed"
    db.expire_all()
    reloaded = service.repository.get_by_id(booking.id)
    assert reloaded.status == BookingStatus.PENDING.value
    assert reloaded.event_id is None
    assert db.query(Event).count() == 0
    notifier.send_booking_accepted.assert_not_called()


def test_notification_failure_does_not_undo_transition(db, service, notifier, artist, venue):
    notifier.send_booking_requested.side_effect = RuntimeError("smtp down")

    booking = service.request_booking(venue.user, artist.id, utc(2025, 9, 12, 20), hours=2)

    db.expire_all()
    assert service.repository.get_by_id(booking.id).status == BookingStatus.PENDING.value


def test_cancel_accepted_booking(service, notifier, artist, venue):
    booking = service.request_booking(venue.user, artist.id, utc(2025, 9, 12, 20), hours=2)
    service.respond(booking.id, BookingAction.ACCEPT, artist.user)

    cancelled = service.cancel(booking.id, venue.user, reason="Venue flooded")

    assert cancelled.status == BookingStatus.CANCELLED.value
    assert cancelled.cancellation_reason == "Venue flooded"
    assert cancelled.cancelled_at is not None
    notifier.send_booking_cancelled.assert_called_once()


def test_cancel_pending_booking_is_invalid_state(service, artist, venue):
    booking = service.request_booking(venue.user, artist.id, utc(2025, 9, 12, 20), hours=2)

    with pytest.raises(InvalidStateException):
        service.cancel(booking.id, venue.user)


def test_only_booking_venue_can_cancel(service, artist, venue):
    booking = service.request_booking(venue.user, artist.id, utc(2025, 9, 12, 20), hours=2)
    service.respond(booking.id, BookingAction.ACCEPT, artist.user)

    with pytest.raises(ForbiddenException):
        service.cancel(booking.id, artist.user)


def test_list_bookings_scoped_by_role(service, artist, artist_factory, venue, user_factory):
    other = artist_factory(name="Other Act")
    service.request_booking(venue.user, artist.id, utc(2025, 9, 12, 20), hours=2)
    service.request_booking(venue.user, other.id, utc(2025, 9, 12, 20), hours=2)
    admin = user_factory(UserRole.ADMIN)

    assert len(service.list_bookings_for_user(artist.user)) == 1
    assert len(service.list_bookings_for_user(venue.user)) == 2
    assert len(service.list_bookings_for_user(admin)) == 2
    assert service.list_bookings_for_user(venue.user, status="accepted") == []


def test_list_bookings_rejects_unknown_status(service, venue):
    with pytest.raises(ValidationException):
        service.list_bookings_for_user(venue.user, status="lost")


def test_get_booking_requires_party(service, artist, venue, venue_factory):
    booking = service.request_booking(venue.user, artist.id, utc(2025, 9, 12, 20), hours=2)
    stranger = venue_factory(name="Stranger Hall")

    assert service.get_booking_for_user(booking.id, artist.user).id == booking.id
    with pytest.raises(ForbiddenException):
        service.get_booking_for_user(booking.id, stranger.user)
    with pytest.raises(NotFoundException):
        service.get_booking_for_user("01J8ZB2Q4K6M8N0P2R4T6V8X9Y", venue.user)
