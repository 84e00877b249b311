# backend/app/routes/v1/dashboard.py
"""
Dashboard routes - API v1

Profile management for the signed-in artist or venue.

Endpoints:
    POST /artist/profile   - Create or update the caller's artist profile
    POST /venue/profile    - Create or update the caller's venue profile
"""

import asyncio
import logging

from fastapi import APIRouter, Body, Depends

from ...api.dependencies import get_current_active_user, get_profile_service
from ...core.exceptions import DomainException
from ...errors import handle_domain_exception
from ...models.user import User
from ...schemas.profile import (
    ArtistProfileResult,
    ArtistProfileUpsert,
    ArtistResponse,
    VenueProfileResult,
    VenueProfileUpsert,
    VenueResponse,
)
from ...services.profile_service import ProfileService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["dashboard-v1"])


@router.post("/artist/profile", response_model=ArtistProfileResult)
async def upsert_artist_profile(
    payload: ArtistProfileUpsert = Body(...),
    current_user: User = Depends(get_current_active_user),
    profile_service: ProfileService = Depends(get_profile_service),
) -> ArtistProfileResult:
    try:
        artist = await asyncio.to_thread(
            profile_service.upsert_artist_profile,
            current_user,
            payload.name,
            city=payload.city,
            genres=payload.genres,
            rate=payload.rate,
            bio=payload.bio,
            image_url=payload.image_url,
        )
        return ArtistProfileResult(artist=ArtistResponse.model_validate(artist))
    except DomainException as e:
        handle_domain_exception(e)


@router.post("/venue/profile", response_model=VenueProfileResult)
async def upsert_venue_profile(
    payload: VenueProfileUpsert = Body(...),
    current_user: User = Depends(get_current_active_user),
    profile_service: ProfileService = Depends(get_profile_service),
) -> VenueProfileResult:
    try:
        venue = await asyncio.to_thread(
            profile_service.upsert_venue_profile,
            current_user,
            payload.name,
            city=payload.city,
            address=payload.address,
            about=payload.about,
            image_url=payload.image_url,
        )
        return VenueProfileResult(venue=VenueResponse.model_validate(venue))
    except DomainException as e:
        handle_domain_exception(e)
