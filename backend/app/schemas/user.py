# backend/app/schemas/user.py
"""User schemas for the authenticated caller."""

from datetime import datetime
from typing import Optional

from .base import StandardizedModel
from .profile import ArtistSummary, VenueSummary


class UserResponse(StandardizedModel):
    """The resolved caller with any linked profiles."""

    id: str
    email: str
    name: Optional[str] = None
    role: str
    created_at: datetime
    artist: Optional[ArtistSummary] = None
    venue: Optional[VenueSummary] = None
