# backend/app/schemas/availability.py
"""
Availability schemas for the Enescena platform.

Artists publish blackout ranges: half-open intervals [start, end) during
which they cannot be booked.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from ..core.constants import MAX_REASON_LENGTH
from .base import StandardizedModel, StrictRequestModel, UTCDatetime


class BlackoutCreate(StrictRequestModel):
    """Declare a blackout range. ``end`` must be after ``start``."""

    start: UTCDatetime
    end: UTCDatetime
    reason: Optional[str] = Field(None, max_length=MAX_REASON_LENGTH)


class BlackoutResponse(StandardizedModel):
    id: str
    start: datetime
    end: datetime
    reason: Optional[str] = None


class BlackoutListResponse(StandardizedModel):
    items: List[BlackoutResponse]
