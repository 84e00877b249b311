"""HTTP tests for /api/v1/bookings."""

from app.core.enums import BookingStatus
from app.models.booking import Booking
from tests.utils.time import utc

BOOKINGS_URL = "/api/v1/bookings"


def _payload(artist, **overrides):
    payload = {
        "artistId": artist.id,
        "eventDate": "2025-09-12T20:00:00Z",
        "hours": 2,
        "note": "Two sets",
    }
    payload.update(overrides)
    return payload


class TestCreateBooking:
    def test_venue_creates_pending_booking(self, client, auth_headers, notification_service, artist, venue):
        response = client.post(BOOKINGS_URL, json=_payload(artist), headers=auth_headers(venue.user))

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "PENDING"
        assert body["artistId"] == artist.id
        assert body["venueId"] == venue.id
        assert body["eventId"] is None
        assert body["artist"]["name"] == "Luna Duo"
        assert body["venue"]["name"] == "Teatro Azul"
        notification_service.send_booking_requested.assert_called_once()

    def test_conflict_returns_problem_details(self, client, auth_headers, artist, venue, blackout_factory):
        blackout_factory(artist, utc(2025, 9, 12, 19), utc(2025, 9, 12, 21), "Rehearsal")

        response = client.post(BOOKINGS_URL, json=_payload(artist), headers=auth_headers(venue.user))

        assert response.status_code == 409
        assert response.headers["content-type"].startswith("application/problem+json")
        body = response.json()
        assert body["code"] == "artist_unavailable"
        assert body["instance"] == BOOKINGS_URL
        assert body["errors"]["conflicts"][0]["kind"] == "blackout"

    def test_adjacent_window_is_accepted(self, client, auth_headers, artist, venue, blackout_factory):
        blackout_factory(artist, utc(2025, 9, 12, 18), utc(2025, 9, 12, 20))

        response = client.post(BOOKINGS_URL, json=_payload(artist), headers=auth_headers(venue.user))

        assert response.status_code == 201

    def test_invalid_hours(self, client, auth_headers, artist, venue):
        response = client.post(
            BOOKINGS_URL, json=_payload(artist, hours=0), headers=auth_headers(venue.user)
        )

        assert response.status_code == 400
        assert response.json()["code"] == "invalid_hours"

    def test_missing_artist(self, client, auth_headers, artist, venue):
        payload = _payload(artist)
        del payload["artistId"]

        response = client.post(BOOKINGS_URL, json=payload, headers=auth_headers(venue.user))

        assert response.status_code == 400
        assert response.json()["code"] == "artistId_required"

    def test_malformed_body_is_bad_request(self, client, auth_headers, artist, venue):
        response = client.post(
            BOOKINGS_URL,
            json=_payload(artist, eventDate="next friday", extra="nope"),
            headers=auth_headers(venue.user),
        )

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "validation_error"
        assert body["errors"]

    def test_requires_authentication(self, client, artist):
        response = client.post(BOOKINGS_URL, json=_payload(artist))

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_invalid_token(self, client, artist):
        response = client.post(
            BOOKINGS_URL, json=_payload(artist), headers={"Authorization": "Bearer not-a-jwt"}
        )

        assert response.status_code == 401

    def test_artist_cannot_create(self, client, auth_headers, artist):
        response = client.post(BOOKINGS_URL, json=_payload(artist), headers=auth_headers(artist.user))

        assert response.status_code == 403

    def test_unknown_artist(self, client, auth_headers, artist, venue):
        response = client.post(
            BOOKINGS_URL,
            json=_payload(artist, artistId="01J8ZB2Q4K6M8N0P2R4T6V8X9Y"),
            headers=auth_headers(venue.user),
        )

        assert response.status_code == 404


class TestRespondAndCancel:
    def _create(self, client, auth_headers, artist, venue):
        response = client.post(BOOKINGS_URL, json=_payload(artist), headers=auth_headers(venue.user))
        assert response.status_code == 201
        return response.json()["id"]

    def test_accept_creates_event(self, client, db, auth_headers, notification_service, artist, venue):
        booking_id = self._create(client, auth_headers, artist, venue)

        response = client.patch(
            f"{BOOKINGS_URL}/{booking_id}", json={"action": "accept"}, headers=auth_headers(artist.user)
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ACCEPTED"
        assert body["eventId"]
        assert body["respondedAt"]
        notification_service.send_booking_accepted.assert_called_once()

        event = client.get(f"/api/v1/events/{body['eventId']}")
        assert event.status_code == 200
        assert event.json()["slug"] == "luna-duo-at-teatro-azul"
        assert event.json()["artists"][0]["confirmed"] is True

    def test_decline(self, client, auth_headers, artist, venue):
        booking_id = self._create(client, auth_headers, artist, venue)

        response = client.patch(
            f"{BOOKINGS_URL}/{booking_id}", json={"action": "DECLINE"}, headers=auth_headers(artist.user)
        )

        assert response.status_code == 200
        assert response.json()["status"] == "DECLINED"
        assert response.json()["eventId"] is None

    def test_responding_twice_is_conflict(self, client, auth_headers, artist, venue):
        booking_id = self._create(client, auth_headers, artist, venue)
        url = f"{BOOKINGS_URL}/{booking_id}"
        client.patch(url, json={"action": "decline"}, headers=auth_headers(artist.user))

        response = client.patch(url, json={"action": "accept"}, headers=auth_headers(artist.user))

        assert response.status_code == 409
        body = response.json()
        assert body["code"] == "invalid_state"
        assert body["errors"]["current_status"] == "DECLINED"

    def test_unknown_action_is_bad_request(self, client, auth_headers, artist, venue):
        booking_id = self._create(client, auth_headers, artist, venue)

        response = client.patch(
            f"{BOOKINGS_URL}/{booking_id}", json={"action": "maybe"}, headers=auth_headers(artist.user)
        )

        assert response.status_code == 400

    def test_venue_cannot_respond(self, client, auth_headers, artist, venue):
        booking_id = self._create(client, auth_headers, artist, venue)

        response = client.patch(
            f"{BOOKINGS_URL}/{booking_id}", json={"action": "accept"}, headers=auth_headers(venue.user)
        )

        assert response.status_code == 403

    def test_cancel_accepted(self, client, db, auth_headers, artist, venue):
        booking_id = self._create(client, auth_headers, artist, venue)
        client.patch(
            f"{BOOKINGS_URL}/{booking_id}", json={"action": "accept"}, headers=auth_headers(artist.user)
        )

        response = client.post(
            f"{BOOKINGS_URL}/{booking_id}/cancel",
            json={"reason": "Venue flooded"},
            headers=auth_headers(venue.user),
        )

        assert response.status_code == 200
        assert response.json()["status"] == "CANCELLED"
        db.expire_all()
        assert db.get(Booking, booking_id).status == BookingStatus.CANCELLED.value

    def test_cancel_pending_is_conflict(self, client, auth_headers, artist, venue):
        booking_id = self._create(client, auth_headers, artist, venue)

        response = client.post(f"{BOOKINGS_URL}/{booking_id}/cancel", headers=auth_headers(venue.user))

        assert response.status_code == 409


class TestReadBookings:
    def test_list_is_scoped_to_caller(self, client, auth_headers, artist, artist_factory, venue, booking_factory):
        other = artist_factory(name="Other Act")
        booking_factory(artist, venue, utc(2025, 9, 12, 20), hours=2)
        booking_factory(other, venue, utc(2025, 9, 13, 20), hours=2)

        venue_view = client.get(BOOKINGS_URL, headers=auth_headers(venue.user)).json()
        artist_view = client.get(BOOKINGS_URL, headers=auth_headers(artist.user)).json()

        assert venue_view["total"] == 2
        assert artist_view["total"] == 1
        assert artist_view["items"][0]["artistId"] == artist.id

    def test_status_filter(self, client, auth_headers, artist, venue, booking_factory):
        booking_factory(artist, venue, utc(2025, 9, 12, 20), hours=2, status=BookingStatus.DECLINED)

        response = client.get(BOOKINGS_URL, params={"status": "pending"}, headers=auth_headers(venue.user))

        assert response.json()["total"] == 0

    def test_stranger_cannot_read(self, client, auth_headers, artist, venue, venue_factory, booking_factory):
        booking = booking_factory(artist, venue, utc(2025, 9, 12, 20), hours=2)
        stranger = venue_factory(name="Stranger Hall")

        response = client.get(f"{BOOKINGS_URL}/{booking.id}", headers=auth_headers(stranger.user))

        assert response.status_code == 403
