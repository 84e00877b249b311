# backend/app/services/notification_service.py
"""
Notification Service for the Enescena platform

Sends the transactional e-mails that follow booking and event transitions.
Delivery is best effort: every public method returns False on failure and
never raises, so a committed transition is never undone by a mail problem.
"""

import logging
from typing import Any, Dict, Optional

from jinja2.exceptions import TemplateNotFound

from ..core.config import settings
from ..models.artist import Artist
from ..models.booking import Booking
from ..models.event import Event
from ..models.venue import Venue
from ..monitoring.prometheus_metrics import prometheus_metrics
from .email import EmailService
from .email_subjects import EmailSubject
from .template_registry import TemplateRegistry
from .template_service import TemplateService, format_local_datetime

logger = logging.getLogger(__name__)


class NotificationService:
    """
    Renders and sends booking and event notifications.

    Collaborators are injected so tests can substitute a mock gateway.
    """

    def __init__(
        self,
        email_service: Optional[EmailService] = None,
        template_service: Optional[TemplateService] = None,
    ) -> None:
        self.email_service = email_service or EmailService()
        self.template_service = template_service or TemplateService()
        self.logger = logging.getLogger(self.__class__.__name__)

    # Booking workflow

    def send_booking_requested(self, booking: Booking) -> bool:
        """Tell the artist a venue wants to book them."""
        artist, venue = booking.artist, booking.venue
        return self._deliver(
            TemplateRegistry.BOOKING_REQUESTED,
            to_email=_owner_email(artist),
            subject=EmailSubject.booking_requested(venue.name),
            context={
                "heading": "New booking request",
                "recipient_name": artist.name,
                "venue_name": venue.name,
                "when": format_local_datetime(booking.event_date),
                "hours": booking.hours,
                "note": booking.note,
                "link": self._link(f"/dashboard/artist/bookings/{booking.id}"),
                "link_label": "View & respond",
            },
        )

    def send_booking_accepted(self, booking: Booking) -> bool:
        """Tell the venue the artist accepted."""
        artist, venue = booking.artist, booking.venue
        return self._deliver(
            TemplateRegistry.BOOKING_ACCEPTED,
            to_email=_owner_email(venue),
            subject=EmailSubject.booking_accepted(artist.name),
            context={
                "heading": "Booking accepted",
                "recipient_name": venue.name,
                "artist_name": artist.name,
                "when": format_local_datetime(booking.event_date),
                "hours": booking.hours,
                "link": self._link(f"/dashboard/venue/bookings/{booking.id}"),
                "link_label": "View booking",
            },
        )

    def send_booking_declined(self, booking: Booking) -> bool:
        """Tell the venue the artist declined."""
        artist, venue = booking.artist, booking.venue
        return self._deliver(
            TemplateRegistry.BOOKING_DECLINED,
            to_email=_owner_email(venue),
            subject=EmailSubject.booking_declined(artist.name),
            context={
                "heading": "Booking declined",
                "recipient_name": venue.name,
                "artist_name": artist.name,
                "when": format_local_datetime(booking.event_date),
                "link": self._link("/artists"),
                "link_label": "Find another artist",
            },
        )

    def send_booking_cancelled(self, booking: Booking) -> bool:
        """Tell the artist the venue cancelled an accepted booking."""
        artist, venue = booking.artist, booking.venue
        return self._deliver(
            TemplateRegistry.BOOKING_CANCELLED,
            to_email=_owner_email(artist),
            subject=EmailSubject.booking_cancelled(venue.name),
            context={
                "heading": "Performance cancelled",
                "recipient_name": artist.name,
                "venue_name": venue.name,
                "when": format_local_datetime(booking.event_date),
                "reason": booking.cancellation_reason,
                "link": self._link("/dashboard/artist/bookings"),
                "link_label": "View your other bookings",
            },
        )

    # Event approval workflow

    def send_event_request(self, event: Event, artist: Artist, venue: Venue) -> bool:
        """Tell the venue an artist requested an event."""
        return self._deliver(
            TemplateRegistry.EVENT_REQUEST,
            to_email=_owner_email(venue),
            subject=EmailSubject.event_request(artist.name),
            context={
                "heading": "Event request",
                "recipient_name": venue.name,
                "artist_name": artist.name,
                "event_title": event.title,
                "when": format_local_datetime(event.event_date),
                "budget": event.total_budget,
                "link": self._link(f"/dashboard/venue/events/{event.id}"),
                "link_label": "View & respond",
            },
        )

    def send_event_request_approved(self, event: Event, artist: Artist, venue: Venue) -> bool:
        """Tell the requesting artist the venue approved."""
        return self._deliver(
            TemplateRegistry.EVENT_REQUEST_APPROVED,
            to_email=_owner_email(artist),
            subject=EmailSubject.event_request_approved(venue.name),
            context={
                "heading": "Event request approved",
                "recipient_name": artist.name,
                "venue_name": venue.name,
                "event_title": event.title,
                "when": format_local_datetime(event.event_date),
                "link": self._link(f"/dashboard/artist/events/{event.id}"),
                "link_label": "View event details",
            },
        )

    def send_event_request_declined(
        self, event: Event, artist: Artist, venue: Venue, reason: Optional[str] = None
    ) -> bool:
        """Tell the requesting artist the venue declined."""
        return self._deliver(
            TemplateRegistry.EVENT_REQUEST_DECLINED,
            to_email=_owner_email(artist),
            subject=EmailSubject.event_request_declined(venue.name),
            context={
                "heading": "Event request declined",
                "recipient_name": artist.name,
                "venue_name": venue.name,
                "event_title": event.title,
                "reason": reason,
                "link": self._link(f"/dashboard/artist/events/{event.id}"),
                "link_label": "View details",
            },
        )

    # Helpers

    def _link(self, path: str) -> str:
        return f"{settings.frontend_url.rstrip('/')}{path}"

    def _deliver(
        self,
        template: TemplateRegistry,
        to_email: Optional[str],
        subject: str,
        context: Dict[str, Any],
    ) -> bool:
        name = template.name.lower()
        if not to_email:
            self.logger.warning(f"Skipping {name} notification: recipient has no e-mail")
            return False

        try:
            html = self.template_service.render_template(template.value, context)
            self.email_service.send_email(to_email=to_email, subject=subject, html_content=html)
        except TemplateNotFound as e:
            self.logger.error(f"Template error in {name} notification: {str(e)}")
            prometheus_metrics.record_notification(name, "failed")
            return False
        except Exception as e:
            self.logger.error(f"Failed to send {name} notification to {to_email}: {str(e)}")
            prometheus_metrics.record_notification(name, "failed")
            return False

        prometheus_metrics.record_notification(name, "sent")
        return True


def _owner_email(profile: Any) -> Optional[str]:
    user = getattr(profile, "user", None)
    return getattr(user, "email", None)
