"""HTTP tests for /api/v1/approvals and /api/v1/notifications."""

import pytest

APPROVALS_URL = "/api/v1/approvals"
NOTIFICATIONS_URL = "/api/v1/notifications"


@pytest.fixture
def request_event(client, auth_headers, artist, venue):
    def _request(title="Bossa Sunset"):
        response = client.post(
            "/api/v1/events/request",
            json={"venueId": venue.id, "title": title, "eventDate": "2025-11-01T23:00:00Z"},
            headers=auth_headers(artist.user),
        )
        assert response.status_code == 200
        return response.json()["event"]["id"]

    return _request


class TestApprovals:
    def test_venue_sees_pending_requests(self, client, auth_headers, request_event, venue):
        event_id = request_event()

        response = client.get(APPROVALS_URL, headers=auth_headers(venue.user))

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["eventApprovals"][0]["id"] == event_id
        assert body["eventApprovals"][0]["status"] == "PENDING_VENUE_APPROVAL"

    def test_answered_requests_leave_the_list(self, client, auth_headers, request_event, venue):
        event_id = request_event()
        client.post(
            f"/api/v1/events/{event_id}/respond",
            json={"action": "approve"},
            headers=auth_headers(venue.user),
        )

        response = client.get(APPROVALS_URL, headers=auth_headers(venue.user))

        assert response.json() == {"eventApprovals": [], "total": 0}

    def test_artist_has_no_approvals(self, client, auth_headers, request_event, artist):
        request_event()

        response = client.get(APPROVALS_URL, headers=auth_headers(artist.user))

        assert response.json()["total"] == 0

    def test_requires_identity(self, client):
        assert client.get(APPROVALS_URL).status_code == 401


class TestNotifications:
    def test_inbox_lists_unread(self, client, auth_headers, request_event, venue):
        event_id = request_event()

        response = client.get(NOTIFICATIONS_URL, headers=auth_headers(venue.user))

        assert response.status_code == 200
        body = response.json()
        assert body["unreadCount"] == 1
        assert body["total"] == 1
        entry = body["notifications"][0]
        assert entry["type"] == "EVENT_REQUEST"
        assert entry["title"] == "New Event Request"
        assert entry["eventId"] == event_id
        assert entry["isRead"] is False

    def test_mark_read(self, client, auth_headers, request_event, venue):
        request_event()
        headers = auth_headers(venue.user)
        inbox = client.get(NOTIFICATIONS_URL, headers=headers).json()
        notification_id = inbox["notifications"][0]["id"]

        response = client.patch(f"{NOTIFICATIONS_URL}/{notification_id}", headers=headers)

        assert response.status_code == 200
        assert response.json()["isRead"] is True
        assert response.json()["readAt"] is not None
        inbox = client.get(NOTIFICATIONS_URL, headers=headers).json()
        assert inbox["unreadCount"] == 0
        unread = client.get(NOTIFICATIONS_URL, params={"unreadOnly": "true"}, headers=headers)
        assert unread.json()["notifications"] == []

    def test_cannot_mark_someone_elses_notification(
        self, client, auth_headers, request_event, artist, venue
    ):
        request_event()
        notification_id = client.get(
            NOTIFICATIONS_URL, headers=auth_headers(venue.user)
        ).json()["notifications"][0]["id"]

        response = client.patch(
            f"{NOTIFICATIONS_URL}/{notification_id}", headers=auth_headers(artist.user)
        )

        assert response.status_code == 404

    def test_mark_all_read(self, client, auth_headers, request_event, venue):
        request_event()
        request_event("Samba Sunrise")
        headers = auth_headers(venue.user)

        response = client.post(f"{NOTIFICATIONS_URL}/read-all", headers=headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Marked 2 notifications as read"
        assert client.get(NOTIFICATIONS_URL, headers=headers).json()["unreadCount"] == 0
