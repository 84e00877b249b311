# backend/app/schemas/profile.py
"""
Artist and venue profile schemas.

Requests carry genres as a comma-separated string or a list; responses
always return a list.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Union

from pydantic import Field

from ..core.constants import MAX_BIO_LENGTH, MAX_NAME_LENGTH
from .base import Money, StandardizedModel, StrictRequestModel


class ArtistProfileUpsert(StrictRequestModel):
    """Create or update the caller's artist profile."""

    name: str = Field(..., max_length=MAX_NAME_LENGTH)
    city: Optional[str] = Field(None, max_length=MAX_NAME_LENGTH)
    genres: Union[str, List[str], None] = Field(
        None, description="Comma-separated string or list of genres"
    )
    rate: Optional[Decimal] = Field(None, description="Hourly rate; non-positive values clear it")
    bio: Optional[str] = Field(None, max_length=MAX_BIO_LENGTH)
    image_url: Optional[str] = Field(None, max_length=1024)


class VenueProfileUpsert(StrictRequestModel):
    """Create or update the caller's venue profile."""

    name: str = Field(..., max_length=MAX_NAME_LENGTH)
    city: Optional[str] = Field(None, max_length=MAX_NAME_LENGTH)
    address: Optional[str] = Field(None, max_length=255)
    about: Optional[str] = Field(None, max_length=MAX_BIO_LENGTH)
    image_url: Optional[str] = Field(None, max_length=1024)


class ArtistSummary(StandardizedModel):
    id: str
    name: str
    slug: str
    city: Optional[str] = None
    genres: List[str] = Field(default_factory=list)
    rate: Optional[Money] = None
    image_url: Optional[str] = None


class ArtistResponse(ArtistSummary):
    bio: Optional[str] = None
    created_at: datetime


class VenueSummary(StandardizedModel):
    id: str
    name: str
    slug: str
    city: Optional[str] = None
    image_url: Optional[str] = None


class VenueResponse(VenueSummary):
    address: Optional[str] = None
    about: Optional[str] = None
    created_at: datetime


class ArtistProfileResult(StandardizedModel):
    ok: bool = True
    artist: ArtistResponse


class VenueProfileResult(StandardizedModel):
    ok: bool = True
    venue: VenueResponse


class ArtistListResponse(StandardizedModel):
    artists: List[ArtistSummary]


class VenueListResponse(StandardizedModel):
    venues: List[VenueSummary]
