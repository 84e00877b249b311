# backend/app/repositories/user_repository.py
"""
User Repository for the Enescena platform

Handles User data access: lookups by id and email, and the upsert used when
a verified identity reaches the API.
"""

import logging
from typing import Optional, cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, joinedload

from ..core.exceptions import RepositoryException
from ..models.user import User
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """Repository for User data access."""

    def __init__(self, db: Session):
        """Initialize with User model."""
        super().__init__(db, User)
        self.logger = logging.getLogger(__name__)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(joinedload(User.artist), joinedload(User.venue))

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email (case-insensitive, emails are stored lowercased)."""
        try:
            return cast(
                Optional[User],
                self._apply_eager_loading(self.db.query(User))
                .filter(User.email == email.strip().lower())
                .first(),
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting user by email {email}: {str(e)}")
            raise RepositoryException(f"Failed to retrieve user: {str(e)}")

    def upsert_from_identity(
        self, email: str, name: Optional[str], role: Optional[str], default_role: str
    ) -> User:
        """
        Create the user on first sight, otherwise refresh name and role.

        Name and role are only overwritten when the identity carries them.
        """
        normalized = email.strip().lower()
        user = self.get_by_email(normalized)
        if user is None:
            return self.create(email=normalized, name=name, role=role or default_role)

        changed = False
        if name and user.name != name:
            user.name = name
            changed = True
        if role and user.role != role:
            user.role = role
            changed = True
        if changed:
            self.flush()
        return user
