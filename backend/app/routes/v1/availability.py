# backend/app/routes/v1/availability.py
"""
Availability routes - API v1

Blackout windows for the calling artist.

Endpoints:
    GET /                   - List the caller's blackout windows
    POST /                  - Add a window [start, end)
    DELETE /{blackout_id}   - Remove one of the caller's windows
"""

import asyncio
import logging

from fastapi import APIRouter, Body, Depends, Response, status

from ...api.dependencies import get_availability_service, get_current_active_user
from ...core.exceptions import DomainException
from ...errors import handle_domain_exception
from ...models.user import User
from ...schemas.availability import BlackoutCreate, BlackoutListResponse, BlackoutResponse
from ...services.availability_service import AvailabilityService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["availability-v1"])


@router.get("", response_model=BlackoutListResponse)
async def list_blackouts(
    current_user: User = Depends(get_current_active_user),
    availability_service: AvailabilityService = Depends(get_availability_service),
) -> BlackoutListResponse:
    try:
        blackouts = await asyncio.to_thread(availability_service.list_blackouts, current_user)
        return BlackoutListResponse(items=[BlackoutResponse.model_validate(b) for b in blackouts])
    except DomainException as e:
        handle_domain_exception(e)


@router.post("", response_model=BlackoutResponse, status_code=status.HTTP_201_CREATED)
async def add_blackout(
    payload: BlackoutCreate = Body(...),
    current_user: User = Depends(get_current_active_user),
    availability_service: AvailabilityService = Depends(get_availability_service),
) -> BlackoutResponse:
    try:
        blackout = await asyncio.to_thread(
            availability_service.add_blackout,
            current_user,
            payload.start,
            payload.end,
            payload.reason,
        )
        return BlackoutResponse.model_validate(blackout)
    except DomainException as e:
        handle_domain_exception(e)


@router.delete("/{blackout_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_blackout(
    blackout_id: str,
    current_user: User = Depends(get_current_active_user),
    availability_service: AvailabilityService = Depends(get_availability_service),
) -> Response:
    try:
        await asyncio.to_thread(availability_service.remove_blackout, current_user, blackout_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except DomainException as e:
        handle_domain_exception(e)
