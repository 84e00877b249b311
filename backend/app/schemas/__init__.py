# backend/app/schemas/__init__.py
"""
Pydantic schemas for the Enescena platform.

Request models forbid unknown fields; response models are read straight
from ORM objects and serialize with camelCase keys.
"""

from .availability import BlackoutCreate, BlackoutListResponse, BlackoutResponse
from .base import Money, StandardizedModel, StrictRequestModel, UTCDatetime, ensure_utc
from .booking import (
    BookingCancel,
    BookingCreate,
    BookingListResponse,
    BookingRespond,
    BookingResponse,
)
from .event import (
    ApprovalsResponse,
    CancelResponse,
    EventArtistAdd,
    EventArtistResponse,
    EventCancel,
    EventCreate,
    EventListResponse,
    EventRequestCreate,
    EventRequestRespond,
    EventResponse,
    EventUpdate,
    PublishResponse,
    WorkflowResponse,
)
from .notification import (
    NotificationListResponse,
    NotificationResponse,
    NotificationStatusResponse,
)
from .profile import (
    ArtistListResponse,
    ArtistProfileResult,
    ArtistProfileUpsert,
    ArtistResponse,
    ArtistSummary,
    VenueListResponse,
    VenueProfileResult,
    VenueProfileUpsert,
    VenueResponse,
    VenueSummary,
)
from .user import UserResponse

__all__ = [
    # Base
    "Money",
    "StandardizedModel",
    "StrictRequestModel",
    "UTCDatetime",
    "ensure_utc",
    # Availability
    "BlackoutCreate",
    "BlackoutListResponse",
    "BlackoutResponse",
    # Bookings
    "BookingCancel",
    "BookingCreate",
    "BookingListResponse",
    "BookingRespond",
    "BookingResponse",
    # Events
    "ApprovalsResponse",
    "CancelResponse",
    "EventArtistAdd",
    "EventArtistResponse",
    "EventCancel",
    "EventCreate",
    "EventListResponse",
    "EventRequestCreate",
    "EventRequestRespond",
    "EventResponse",
    "EventUpdate",
    "PublishResponse",
    "WorkflowResponse",
    # Notifications
    "NotificationListResponse",
    "NotificationResponse",
    "NotificationStatusResponse",
    # Profiles
    "ArtistListResponse",
    "ArtistProfileResult",
    "ArtistProfileUpsert",
    "ArtistResponse",
    "ArtistSummary",
    "VenueListResponse",
    "VenueProfileResult",
    "VenueProfileUpsert",
    "VenueResponse",
    "VenueSummary",
    # Users
    "UserResponse",
]
