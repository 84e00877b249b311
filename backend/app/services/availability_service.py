# backend/app/services/availability_service.py
"""
Availability Service for the Enescena platform

Artists declare blackout windows [start, end) during which venues cannot
book them. Windows may overlap each other and are not merged.
"""

from datetime import datetime
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.exceptions import ForbiddenException, NotFoundException, ValidationException
from ..models.availability import ArtistUnavailability
from ..models.user import User
from ..repositories import RepositoryFactory
from .base import BaseService

logger = logging.getLogger(__name__)


class AvailabilityService(BaseService):
    """Manage an artist's blackout windows."""

    def __init__(self, db: Session):
        super().__init__(db)
        self.repository = RepositoryFactory.create_availability_repository(db)
        self.artist_repository = RepositoryFactory.create_artist_repository(db)

    def _require_artist(self, user: User):
        artist = self.artist_repository.get_by_user_id(user.id) if user.is_artist else None
        if artist is None:
            raise ForbiddenException("Only artists with a profile can manage availability")
        return artist

    @BaseService.measure_operation("list_blackouts")
    def list_blackouts(self, user: User) -> List[ArtistUnavailability]:
        artist = self._require_artist(user)
        return self.repository.list_for_artist(artist.id)

    @BaseService.measure_operation("add_blackout")
    def add_blackout(
        self, user: User, start: datetime, end: datetime, reason: Optional[str] = None
    ) -> ArtistUnavailability:
        """
        Record a blackout window for the calling artist.

        Raises:
            ForbiddenException: caller is not an artist with a profile
            ValidationException: end is not after start
        """
        artist = self._require_artist(user)
        if end <= start:
            raise ValidationException(
                "End must be after start", code="end_before_start"
            )

        cleaned_reason = (reason or "").strip() or None
        with self.transaction():
            blackout = self.repository.create(
                artist_id=artist.id, start=start, end=end, reason=cleaned_reason
            )

        self.log_operation("blackout_added", artist_id=artist.id, blackout_id=blackout.id)
        return blackout

    @BaseService.measure_operation("remove_blackout")
    def remove_blackout(self, user: User, blackout_id: str) -> None:
        """Delete a blackout window owned by the calling artist."""
        artist = self._require_artist(user)
        blackout = self.repository.get_by_id(blackout_id, load_relationships=False)
        if blackout is None:
            raise NotFoundException("Blackout not found", code="not_found")
        if blackout.artist_id != artist.id:
            raise ForbiddenException("Blackout belongs to another artist")

        with self.transaction():
            self.repository.delete(blackout_id)

        self.log_operation("blackout_removed", artist_id=artist.id, blackout_id=blackout_id)
