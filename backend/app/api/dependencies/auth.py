# backend/app/api/dependencies/auth.py
"""
Authentication and authorization dependencies.

Identity is resolved per request: the ID token is read from the
``Authorization: Bearer`` header or the ``id_token`` cookie, verified, and
the matching User row is upserted (created on first sight, name and role
refreshed from the claims afterwards).
"""

import logging
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from ...auth import (
    extract_token,
    map_role_from_claim,
    oauth2_scheme_optional,
    resolve_identity,
)
from ...core.config import settings
from ...core.exceptions import UnauthorizedException
from ...models.user import User
from ...repositories import RepositoryFactory
from .database import get_db

logger = logging.getLogger(__name__)


def get_current_user(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme_optional),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the caller to a User.

    Raises:
        UnauthorizedException: missing or invalid token
    """
    identity = resolve_identity(extract_token(request, token))
    user = RepositoryFactory.create_user_repository(db).upsert_from_identity(
        email=identity.email,
        name=identity.name,
        role=identity.role,
        default_role=map_role_from_claim(None, settings.default_user_role),
    )
    db.flush()
    return user


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Alias kept for route readability; every resolved user is active."""
    return current_user


def get_current_user_optional(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme_optional),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Resolve the caller when a valid token is present, else None."""
    if not extract_token(request, token):
        return None
    try:
        return get_current_user(request, token, db)
    except UnauthorizedException:
        return None

