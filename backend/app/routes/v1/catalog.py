# backend/app/routes/v1/catalog.py
"""
Public catalog routes - API v1

No authentication required.

Endpoints:
    GET /artists            - Artists, filterable by city and genre
    GET /artists/{slug}     - One artist by slug
    GET /venues             - Venues, filterable by city
    GET /venues/{slug}      - One venue by slug
"""

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ...api.dependencies import get_profile_service
from ...core.constants import DEFAULT_QUERY_LIMIT
from ...core.exceptions import DomainException
from ...errors import handle_domain_exception
from ...schemas.profile import (
    ArtistListResponse,
    ArtistResponse,
    ArtistSummary,
    VenueListResponse,
    VenueResponse,
    VenueSummary,
)
from ...services.profile_service import ProfileService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["catalog-v1"])


@router.get("/artists", response_model=ArtistListResponse)
async def list_artists(
    city: Optional[str] = Query(None),
    genre: Optional[str] = Query(None),
    limit: int = Query(DEFAULT_QUERY_LIMIT, ge=1, le=DEFAULT_QUERY_LIMIT),
    profile_service: ProfileService = Depends(get_profile_service),
) -> ArtistListResponse:
    artists = await asyncio.to_thread(profile_service.list_artists, city, genre, limit)
    return ArtistListResponse(artists=[ArtistSummary.model_validate(a) for a in artists])


@router.get("/artists/{slug}", response_model=ArtistResponse)
async def get_artist(
    slug: str, profile_service: ProfileService = Depends(get_profile_service)
) -> ArtistResponse:
    try:
        artist = await asyncio.to_thread(profile_service.get_artist_by_slug, slug)
        return ArtistResponse.model_validate(artist)
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/venues", response_model=VenueListResponse)
async def list_venues(
    city: Optional[str] = Query(None),
    limit: int = Query(DEFAULT_QUERY_LIMIT, ge=1, le=DEFAULT_QUERY_LIMIT),
    profile_service: ProfileService = Depends(get_profile_service),
) -> VenueListResponse:
    venues = await asyncio.to_thread(profile_service.list_venues, city, limit)
    return VenueListResponse(venues=[VenueSummary.model_validate(v) for v in venues])


@router.get("/venues/{slug}", response_model=VenueResponse)
async def get_venue(
    slug: str, profile_service: ProfileService = Depends(get_profile_service)
) -> VenueResponse:
    try:
        venue = await asyncio.to_thread(profile_service.get_venue_by_slug, slug)
        return VenueResponse.model_validate(venue)
    except DomainException as e:
        handle_domain_exception(e)
