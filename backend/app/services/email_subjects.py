"""
Centralized email subject builders.

Keep subjects in code (not templates) for versioning and logging.
Bodies remain in Jinja templates.
"""


class EmailSubject:
    """Utility class with static builders for email subjects."""

    @staticmethod
    def booking_requested(venue_name: str) -> str:
        return f"New booking request from {venue_name}"

    @staticmethod
    def booking_accepted(artist_name: str) -> str:
        return f"{artist_name} accepted your booking request"

    @staticmethod
    def booking_declined(artist_name: str) -> str:
        return f"{artist_name} declined your booking request"

    @staticmethod
    def booking_cancelled(venue_name: str) -> str:
        return f"Performance cancelled - {venue_name}"

    @staticmethod
    def event_request(artist_name: str) -> str:
        return f"Event request from {artist_name}"

    @staticmethod
    def event_request_approved(venue_name: str) -> str:
        return f"Event request approved by {venue_name}"

    @staticmethod
    def event_request_declined(venue_name: str) -> str:
        return f"Event request declined by {venue_name}"
