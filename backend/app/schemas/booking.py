# backend/app/schemas/booking.py
"""
Booking schemas for the Enescena platform.

A booking is a venue's request to hire an artist for
[event_date, event_date + hours). ``hours`` may be omitted, in which case
conflict checks use the configured default duration.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from ..core.constants import MAX_BOOKING_HOURS, MAX_NOTE_LENGTH, MAX_REASON_LENGTH
from ..core.enums import BookingAction
from .base import StandardizedModel, StrictRequestModel, UTCDatetime
from .profile import ArtistSummary, VenueSummary


class BookingCreate(StrictRequestModel):
    """
    Request a booking as the calling venue.

    ``artist_id`` and ``event_date`` are optional at the schema level so the
    service can report them with specific error codes.
    """

    artist_id: Optional[str] = Field(None, description="Artist to book")
    event_date: Optional[UTCDatetime] = Field(None, description="Performance start (UTC)")
    hours: Optional[int] = Field(None, description=f"Duration, 1-{MAX_BOOKING_HOURS} hours")
    note: Optional[str] = Field(None, max_length=MAX_NOTE_LENGTH)


class BookingRespond(StrictRequestModel):
    """Artist response to a pending booking."""

    action: BookingAction

    @field_validator("action", mode="before")
    @classmethod
    def _upper(cls, value: object) -> object:
        return value.strip().upper() if isinstance(value, str) else value


class BookingCancel(StrictRequestModel):
    reason: Optional[str] = Field(None, max_length=MAX_REASON_LENGTH)


class BookingResponse(StandardizedModel):
    id: str
    artist_id: str
    venue_id: str
    event_id: Optional[str] = None
    event_date: datetime
    hours: Optional[int] = None
    note: Optional[str] = None
    status: str
    created_at: datetime
    responded_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    cancellation_reason: Optional[str] = None
    artist: Optional[ArtistSummary] = None
    venue: Optional[VenueSummary] = None


class BookingListResponse(StandardizedModel):
    items: List[BookingResponse]
    total: int
