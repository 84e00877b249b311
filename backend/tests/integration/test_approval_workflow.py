"""Artist-initiated event requests and venue approval."""

from decimal import Decimal
from unittest.mock import Mock

import pytest

from app.core.enums import EventStatus, NotificationType
from app.core.exceptions import BookingConflictException
from app.models.booking import Booking
from app.models.event import Event, EventArtist
from app.models.notification import Notification
from app.services.approval_workflow_service import ApprovalWorkflowService
from app.services.booking_service import BookingService
from app.services.event_service import EventService
from app.services.notification_service import NotificationService
from tests.utils.time import utc


@pytest.fixture
def notifier():
    return Mock(spec=NotificationService)


@pytest.fixture
def workflow(db, notifier):
    return ApprovalWorkflowService(db, notification_service=notifier)


@pytest.fixture
def event_data():
    return {
        "title": "Bossa Sunset",
        "description": "Acoustic evening",
        "event_date": utc(2025, 11, 1, 23),
        "total_hours": 3,
        "total_budget": Decimal("750"),
    }


@pytest.fixture
def requested(workflow, artist, venue, event_data):
    result = workflow.request_event_at_venue(venue.id, artist.user, event_data)
    assert result.success
    return result


def test_request_creates_pending_event(db, notifier, requested, artist, venue):
    assert requested.message == "Event request sent successfully"
    event = db.get(Event, requested.event_id)
    assert event.status == EventStatus.PENDING_VENUE_APPROVAL.value
    assert event.slug == "bossa-sunset"
    assert event.venue_id == venue.id
    assert event.created_by_id == artist.user_id
    entry = db.query(EventArtist).filter_by(event_id=event.id).one()
    assert entry.artist_id == artist.id
    assert entry.confirmed is False
    notifier.send_event_request.assert_called_once()


def test_request_for_unknown_venue(workflow, artist, event_data):
    result = workflow.request_event_at_venue("01J8ZB2Q4K6M8N0P2R4T6V8X9Y", artist.user, event_data)

    assert not result.success
    assert result.message == "Venue not found"


def test_request_requires_artist_profile(workflow, venue, event_data):
    result = workflow.request_event_at_venue(venue.id, venue.user, event_data)

    assert not result.success
    assert result.message == "Artist profile required"


def test_request_requires_event_date(workflow, artist, venue, event_data):
    event_data["event_date"] = None

    result = workflow.request_event_at_venue(venue.id, artist.user, event_data)

    assert result.message == "Event date is required"


def test_approve(db, workflow, notifier, requested, venue):
    result = workflow.approve_event_request(requested.event_id, venue.user)

    assert result.success
    assert result.message == "Event request approved successfully"
    assert db.get(Event, requested.event_id).status == EventStatus.SEEKING_ARTISTS.value
    notifier.send_event_request_approved.assert_called_once()


def test_decline_records_reason(db, workflow, notifier, requested, venue):
    result = workflow.decline_event_request(requested.event_id, venue.user, "Closed for renovation")

    assert result.success
    assert result.message == "Event request declined"
    event = db.get(Event, requested.event_id)
    assert event.status == EventStatus.CANCELLED.value
    assert "Closed for renovation" in event.notes
    args = notifier.send_event_request_declined.call_args.args
    assert args[-1] == "Closed for renovation"


def test_other_venue_cannot_respond(workflow, requested, venue_factory):
    rival = venue_factory(name="Rival Club")

    result = workflow.approve_event_request(requested.event_id, rival.user)

    assert not result.success
    assert result.message == "Unauthorized or event not found"


def test_second_response_is_rejected(workflow, requested, venue):
    workflow.approve_event_request(requested.event_id, venue.user)

    result = workflow.decline_event_request(requested.event_id, venue.user)

    assert not result.success
    assert result.message == "Event is not pending venue approval"


def test_notification_failure_still_succeeds(workflow, notifier, artist, venue, event_data):
    notifier.send_event_request.side_effect = RuntimeError("smtp down")

    result = workflow.request_event_at_venue(venue.id, artist.user, event_data)

    assert result.success


@pytest.mark.parametrize("hours", [0, 25, 48])
def test_request_hours_must_fit_one_day(db, workflow, artist, venue, event_data, hours):
    event_data["total_hours"] = hours

    result = workflow.request_event_at_venue(venue.id, artist.user, event_data)

    assert not result.success
    assert result.message == "Hours must be between 1 and 24"
    assert db.query(Event).count() == 0


def test_requested_event_blocks_overlapping_bookings(db, workflow, notifier, artist, venue, event_data):
    event_data["total_hours"] = 24
    event_id = workflow.request_event_at_venue(venue.id, artist.user, event_data).event_id
    workflow.approve_event_request(event_id, venue.user)
    events = EventService(db, notification_service=notifier)
    published = events.publish_event(event_id, venue.user)
    assert published.invited_artist_ids == [artist.id]
    assert db.query(Booking).filter_by(event_id=event_id).one().hours == 24
    bookings = BookingService(db, notification_service=notifier, event_service=events)

    # 21 hours into the 24 hour commitment
    with pytest.raises(BookingConflictException):
        bookings.request_booking(venue.user, artist.id, utc(2025, 11, 2, 20), 1)


def test_request_workflow_leaves_inbox_entries(db, workflow, requested, artist, venue):
    to_venue = db.query(Notification).filter_by(user_id=venue.user_id).one()
    assert to_venue.type == NotificationType.EVENT_REQUEST.value
    assert to_venue.event_id == requested.event_id
    assert 'wants to host "Bossa Sunset"' in to_venue.message
    assert to_venue.is_read is False

    workflow.decline_event_request(requested.event_id, venue.user, "Fully booked")

    to_artist = db.query(Notification).filter_by(user_id=artist.user_id).one()
    assert to_artist.type == NotificationType.EVENT_REQUEST_DECLINED.value
    assert to_artist.message == 'Teatro Azul declined "Bossa Sunset": Fully booked'


def test_approval_notifies_requesting_artist(db, workflow, requested, artist, venue):
    workflow.approve_event_request(requested.event_id, venue.user)

    to_artist = db.query(Notification).filter_by(user_id=artist.user_id).one()
    assert to_artist.type == NotificationType.EVENT_REQUEST_APPROVED.value
    assert to_artist.action_url == f"/dashboard/artist/events/{requested.event_id}"


def test_pending_approvals_list(workflow, requested, artist, venue, venue_factory, event_data):
    second = workflow.request_event_at_venue(venue.id, artist.user, event_data)

    pending = workflow.list_pending_approvals(venue.user)

    assert {e.id for e in pending} == {second.event_id, requested.event_id}
    assert workflow.list_pending_approvals(artist.user) == []
    assert workflow.list_pending_approvals(venue_factory(name="Rival Club").user) == []

    workflow.approve_event_request(requested.event_id, venue.user)
    assert [e.id for e in workflow.list_pending_approvals(venue.user)] == [second.event_id]
