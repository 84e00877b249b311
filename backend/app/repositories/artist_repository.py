# backend/app/repositories/artist_repository.py
"""
Artist Repository for the Enescena platform

Profile lookups and public catalog filtering.
"""

import logging
from typing import List, Optional, cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.constants import DEFAULT_QUERY_LIMIT
from ..core.exceptions import RepositoryException
from ..models.artist import Artist
from .base_repository import BaseRepository
from .slug_repository_mixin import SlugRepositoryMixin

logger = logging.getLogger(__name__)


class ArtistRepository(BaseRepository[Artist], SlugRepositoryMixin):
    """Repository for artist profiles."""

    def __init__(self, db: Session):
        super().__init__(db, Artist)
        self.logger = logging.getLogger(__name__)

    def get_by_user_id(self, user_id: str) -> Optional[Artist]:
        return self.find_one_by(user_id=user_id)

    def get_by_slug(self, slug: str) -> Optional[Artist]:
        return self.find_one_by(slug=slug)

    def list_public(
        self,
        city: Optional[str] = None,
        genre: Optional[str] = None,
        limit: int = DEFAULT_QUERY_LIMIT,
    ) -> List[Artist]:
        """
        List artists for the public catalog.

        City matches case-insensitively; genre filtering happens in Python
        because genres are stored as a JSON list for dialect portability.
        """
        try:
            query = self.db.query(Artist)
            if city:
                query = query.filter(Artist.city.ilike(city.strip()))
            artists = cast(List[Artist], query.order_by(Artist.name).all())
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing artists: {str(e)}")
            raise RepositoryException(f"Failed to list artists: {str(e)}")

        if genre:
            wanted = genre.strip().lower()
            artists = [a for a in artists if wanted in {g.lower() for g in (a.genres or [])}]
        return artists[:limit]
