# backend/app/repositories/availability_repository.py
"""
Availability Repository for the Enescena platform

Data access for artist blackout windows.
"""

import logging
from typing import List, cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.availability import ArtistUnavailability
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class AvailabilityRepository(BaseRepository[ArtistUnavailability]):
    """Repository for artist blackout windows."""

    def __init__(self, db: Session):
        super().__init__(db, ArtistUnavailability)
        self.logger = logging.getLogger(__name__)

    def list_for_artist(self, artist_id: str) -> List[ArtistUnavailability]:
        """All blackout windows of an artist ordered by start."""
        try:
            return cast(
                List[ArtistUnavailability],
                self.db.query(ArtistUnavailability)
                .filter(ArtistUnavailability.artist_id == artist_id)
                .order_by(ArtistUnavailability.start)
                .all(),
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing unavailability for artist {artist_id}: {str(e)}")
            raise RepositoryException(f"Failed to list unavailability: {str(e)}")
