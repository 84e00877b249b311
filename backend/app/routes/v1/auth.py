# backend/app/routes/v1/auth.py
"""
Authentication routes - API v1

Endpoints:
    GET /me  → The resolved caller with linked artist/venue profiles
"""

import logging

from fastapi import APIRouter, Depends

from ...api.dependencies.auth import get_current_active_user
from ...models.user import User
from ...schemas.user import UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth-v1"])


@router.get("/me", response_model=UserResponse)
async def read_users_me(current_user: User = Depends(get_current_active_user)) -> UserResponse:
    """Get the current user; creates the account on first sight of the identity."""
    return UserResponse.model_validate(current_user)
