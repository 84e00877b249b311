"""
Template registry for strongly-typed access to Jinja templates.

Use with TemplateService to avoid stringly-typed paths.
"""

from enum import Enum


class TemplateRegistry(str, Enum):
    # Booking notifications
    BOOKING_REQUESTED = "email/booking_requested.html"
    BOOKING_ACCEPTED = "email/booking_accepted.html"
    BOOKING_DECLINED = "email/booking_declined.html"
    BOOKING_CANCELLED = "email/booking_cancelled.html"

    # Event approval workflow
    EVENT_REQUEST = "email/event_request.html"
    EVENT_REQUEST_APPROVED = "email/event_request_approved.html"
    EVENT_REQUEST_DECLINED = "email/event_request_declined.html"
