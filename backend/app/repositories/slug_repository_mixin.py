# backend/app/repositories/slug_repository_mixin.py
"""
Slug Repository Mixin for the Enescena platform

Adds unique-slug creation to any repository whose model has a UNIQUE
``slug`` column. Candidates follow base, base-2, base-3, ...; slugs already
present are skipped, and a concurrent insert that takes the same slug is
caught by the unique constraint and retried with the next candidate.
"""

import logging
from typing import Any, Set

from ..core.constants import SLUG_MAX_ATTEMPTS
from ..core.exceptions import RepositoryException
from ..utils.slug import slug_candidates

logger = logging.getLogger(__name__)


class SlugRepositoryMixin:
    """
    Mixin for repositories of slugged models.

    Usage:
        class ArtistRepository(BaseRepository[Artist], SlugRepositoryMixin):
            ...
            artist = repo.create_with_unique_slug("luna-duo", name="Luna Duo", ...)
    """

    def taken_slugs(self, base_slug: str) -> Set[str]:
        """Return existing slugs in the base, base-N family."""
        column = self.model.slug
        rows = (
            self.db.query(column)
            .filter((column == base_slug) | (column.like(f"{base_slug}-%")))
            .all()
        )
        return {row[0] for row in rows}

    def create_with_unique_slug(self, base_slug: str, **fields: Any) -> Any:
        """Insert an entity under the first free slug for base_slug."""
        taken = self.taken_slugs(base_slug)
        candidates = (s for s in slug_candidates(base_slug, SLUG_MAX_ATTEMPTS) if s not in taken)
        return self._insert_with_unique_retry(candidates, lambda slug: {**fields, "slug": slug})

    def reassign_slug(self, entity: Any, base_slug: str) -> str:
        """
        Move an existing entity to the first free slug for base_slug.

        The entity's current slug counts as free, so re-saving a title that
        maps to the same family keeps the slug it already has.
        """
        taken = self.taken_slugs(base_slug) - {entity.slug}
        for candidate in slug_candidates(base_slug, SLUG_MAX_ATTEMPTS):
            if candidate not in taken:
                entity.slug = candidate
                return candidate
        raise RepositoryException(f"Could not allocate a unique slug for {base_slug!r}")
