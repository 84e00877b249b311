# backend/app/repositories/venue_repository.py
"""
Venue Repository for the Enescena platform
"""

import logging
from typing import List, Optional, cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.constants import DEFAULT_QUERY_LIMIT
from ..core.exceptions import RepositoryException
from ..models.venue import Venue
from .base_repository import BaseRepository
from .slug_repository_mixin import SlugRepositoryMixin

logger = logging.getLogger(__name__)


class VenueRepository(BaseRepository[Venue], SlugRepositoryMixin):
    """Repository for venue profiles."""

    def __init__(self, db: Session):
        super().__init__(db, Venue)
        self.logger = logging.getLogger(__name__)

    def get_by_user_id(self, user_id: str) -> Optional[Venue]:
        return self.find_one_by(user_id=user_id)

    def get_by_slug(self, slug: str) -> Optional[Venue]:
        return self.find_one_by(slug=slug)

    def list_public(
        self, city: Optional[str] = None, limit: int = DEFAULT_QUERY_LIMIT
    ) -> List[Venue]:
        try:
            query = self.db.query(Venue)
            if city:
                query = query.filter(Venue.city.ilike(city.strip()))
            return cast(List[Venue], query.order_by(Venue.name).limit(limit).all())
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing venues: {str(e)}")
            raise RepositoryException(f"Failed to list venues: {str(e)}")
