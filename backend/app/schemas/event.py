# backend/app/schemas/event.py
"""
Event schemas for the Enescena platform.

Covers venue-created events, their line-up, publishing and cancellation,
and the artist-initiated event request / venue approval handshake.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import Field, field_validator

from ..core.constants import MAX_BOOKING_HOURS, MAX_NAME_LENGTH, MAX_NOTE_LENGTH, MAX_REASON_LENGTH
from .base import Money, StandardizedModel, StrictRequestModel, UTCDatetime
from .profile import ArtistSummary, VenueSummary


class EventCreate(StrictRequestModel):
    """Create a DRAFT event at the caller's venue."""

    title: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    event_date: UTCDatetime
    end_date: Optional[UTCDatetime] = None
    hours: Optional[int] = None
    description: Optional[str] = Field(None, max_length=MAX_NOTE_LENGTH)
    notes: Optional[str] = Field(None, max_length=MAX_NOTE_LENGTH)
    total_budget: Optional[Decimal] = Field(None, ge=0)


class EventUpdate(StrictRequestModel):
    """
    Partial update of an event by its hosting venue.

    Only fields present in the body are applied; an explicit null clears
    optional fields. Setting ``status`` to PUBLISHED or CANCELLED runs the
    publish or cancel flow.
    """

    title: Optional[str] = Field(None, min_length=1, max_length=MAX_NAME_LENGTH)
    description: Optional[str] = Field(None, max_length=MAX_NOTE_LENGTH)
    notes: Optional[str] = Field(None, max_length=MAX_NOTE_LENGTH)
    event_date: Optional[UTCDatetime] = None
    end_date: Optional[UTCDatetime] = None
    hours: Optional[int] = None
    total_budget: Optional[Decimal] = Field(None, ge=0)
    status: Optional[Literal["DRAFT", "PUBLISHED", "CANCELLED", "COMPLETED"]] = None

    @field_validator("status", mode="before")
    @classmethod
    def _upper(cls, value: object) -> object:
        return value.strip().upper() if isinstance(value, str) else value


class EventArtistAdd(StrictRequestModel):
    artist_id: str
    fee: Optional[Decimal] = Field(None, ge=0)
    hours: Optional[int] = None


class EventCancel(StrictRequestModel):
    reason: Optional[str] = Field(None, max_length=MAX_REASON_LENGTH)


class EventRequestCreate(StrictRequestModel):
    """Artist asks a venue to host an event."""

    venue_id: str
    title: str = Field(..., max_length=MAX_NAME_LENGTH)
    description: Optional[str] = Field(None, max_length=MAX_NOTE_LENGTH)
    event_date: Optional[UTCDatetime] = None
    end_date: Optional[UTCDatetime] = None
    total_hours: Optional[int] = Field(None, ge=1, le=MAX_BOOKING_HOURS)
    total_budget: Optional[Decimal] = None
    notes: Optional[str] = Field(None, max_length=MAX_NOTE_LENGTH)


class EventRequestRespond(StrictRequestModel):
    """Venue answer to an event request."""

    action: Literal["approve", "decline"]
    reason: Optional[str] = Field(None, max_length=MAX_REASON_LENGTH)

    @field_validator("action", mode="before")
    @classmethod
    def _lower(cls, value: object) -> object:
        return value.strip().lower() if isinstance(value, str) else value


class EventArtistResponse(StandardizedModel):
    id: str
    artist_id: str
    fee: Optional[Money] = None
    hours: Optional[int] = None
    confirmed: bool
    artist: Optional[ArtistSummary] = None


class EventResponse(StandardizedModel):
    id: str
    venue_id: str
    created_by_id: Optional[str] = None
    title: str
    slug: str
    description: Optional[str] = None
    notes: Optional[str] = None
    event_date: datetime
    end_date: Optional[datetime] = None
    hours: Optional[int] = None
    total_hours: Optional[int] = None
    total_budget: Optional[Money] = None
    status: str
    created_at: datetime
    venue: Optional[VenueSummary] = None
    artists: List[EventArtistResponse] = Field(default_factory=list)


class EventListResponse(StandardizedModel):
    items: List[EventResponse]
    total: int


class PublishResponse(StandardizedModel):
    event: EventResponse
    invited_artist_ids: List[str]
    skipped_artist_ids: List[str]


class CancelResponse(StandardizedModel):
    event: EventResponse
    declined_booking_ids: List[str]
    cancelled_booking_ids: List[str]


class WorkflowResponse(StandardizedModel):
    """Result of an approval workflow step."""

    success: bool
    message: str
    event: Optional[EventResponse] = None
    error: Optional[str] = None


class ApprovalsResponse(StandardizedModel):
    """Event requests waiting for the caller's venue to answer."""

    event_approvals: List[EventResponse]
    total: int
