# backend/app/services/profile_service.py
"""
Profile Service for the Enescena platform

Artist and venue profile upserts for the dashboard, plus the public
catalog reads. A profile's slug is fixed when the profile is first
created so public links stay stable across renames.
"""

from decimal import Decimal
import logging
from typing import Iterable, List, Optional, Union

from sqlalchemy.orm import Session

from ..core.exceptions import ForbiddenException, NotFoundException, ValidationException
from ..models.artist import Artist
from ..models.user import User
from ..models.venue import Venue
from ..repositories import RepositoryFactory
from ..utils.slug import parse_genres, slugify
from .base import BaseService

logger = logging.getLogger(__name__)


def _clean(value: Optional[str]) -> Optional[str]:
    return (value or "").strip() or None


class ProfileService(BaseService):
    """Dashboard profile management and public catalog."""

    def __init__(self, db: Session):
        super().__init__(db)
        self.artist_repository = RepositoryFactory.create_artist_repository(db)
        self.venue_repository = RepositoryFactory.create_venue_repository(db)

    @BaseService.measure_operation("upsert_artist_profile")
    def upsert_artist_profile(
        self,
        user: User,
        name: str,
        city: Optional[str] = None,
        genres: Union[str, Iterable[str], None] = None,
        rate: Optional[Decimal] = None,
        bio: Optional[str] = None,
        image_url: Optional[str] = None,
    ) -> Artist:
        """
        Create or update the caller's artist profile.

        Raises:
            ForbiddenException: caller is not an artist
            ValidationException: name is blank
        """
        if not user.is_artist:
            raise ForbiddenException("Only artists can manage an artist profile")
        cleaned_name = _clean(name)
        if not cleaned_name:
            raise ValidationException("Name is required", code="name_required")

        if isinstance(genres, str) or genres is None:
            genre_list = parse_genres(genres or "")
        else:
            genre_list = parse_genres(",".join(genres))

        fields = {
            "name": cleaned_name,
            "city": _clean(city),
            "genres": genre_list,
            "rate": rate if rate is not None and rate > 0 else None,
            "bio": _clean(bio),
            "image_url": _clean(image_url),
        }

        with self.transaction():
            artist = self.artist_repository.get_by_user_id(user.id)
            if artist is None:
                artist = self.artist_repository.create_with_unique_slug(
                    slugify(cleaned_name) or "artist", user_id=user.id, **fields
                )
                created = True
            else:
                for key, value in fields.items():
                    setattr(artist, key, value)
                created = False

        self.log_operation(
            "artist_profile_saved", artist_id=artist.id, user_id=user.id, is_new=created
        )
        return artist

    @BaseService.measure_operation("upsert_venue_profile")
    def upsert_venue_profile(
        self,
        user: User,
        name: str,
        city: Optional[str] = None,
        address: Optional[str] = None,
        about: Optional[str] = None,
        image_url: Optional[str] = None,
    ) -> Venue:
        """
        Create or update the caller's venue profile.

        Raises:
            ForbiddenException: caller is not a venue
            ValidationException: name is blank
        """
        if not user.is_venue:
            raise ForbiddenException("Only venues can manage a venue profile")
        cleaned_name = _clean(name)
        if not cleaned_name:
            raise ValidationException("Name is required", code="name_required")

        fields = {
            "name": cleaned_name,
            "city": _clean(city),
            "address": _clean(address),
            "about": _clean(about),
            "image_url": _clean(image_url),
        }

        with self.transaction():
            venue = self.venue_repository.get_by_user_id(user.id)
            if venue is None:
                venue = self.venue_repository.create_with_unique_slug(
                    slugify(cleaned_name) or "venue", user_id=user.id, **fields
                )
                created = True
            else:
                for key, value in fields.items():
                    setattr(venue, key, value)
                created = False

        self.log_operation("venue_profile_saved", venue_id=venue.id, user_id=user.id, is_new=created)
        return venue

    # Public catalog

    def list_artists(
        self, city: Optional[str] = None, genre: Optional[str] = None, limit: int = 100
    ) -> List[Artist]:
        return self.artist_repository.list_public(city=_clean(city), genre=_clean(genre), limit=limit)

    def get_artist_by_slug(self, slug: str) -> Artist:
        artist = self.artist_repository.get_by_slug(slug)
        if artist is None:
            raise NotFoundException("Artist not found", code="artist_not_found")
        return artist

    def list_venues(self, city: Optional[str] = None, limit: int = 100) -> List[Venue]:
        return self.venue_repository.list_public(city=_clean(city), limit=limit)

    def get_venue_by_slug(self, slug: str) -> Venue:
        venue = self.venue_repository.get_by_slug(slug)
        if venue is None:
            raise NotFoundException("Venue not found", code="venue_not_found")
        return venue
