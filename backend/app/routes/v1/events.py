# backend/app/routes/v1/events.py
"""
Event routes - API v1

Endpoints:
    POST /events/request                       - Artist asks a venue to host an event
    POST /events/{event_id}/respond            - Venue approves or declines a request
    POST /events                               - Venue creates a DRAFT event
    GET /events                                - Public (?public=true) or role-scoped list
    GET /events/{event_id}                     - Event details
    PATCH /events/{event_id}                   - Edit fields, slug or status
    DELETE /events/{event_id}                  - Delete an event without bookings
    POST /events/{event_id}/artists            - Add an unconfirmed line-up entry
    DELETE /events/{event_id}/artists/{artist_id}
    POST /events/{event_id}/publish            - Publish and invite the line-up
    POST /events/{event_id}/cancel             - Cancel and release bookings

The request/respond pair reports business failures as
``400 {success: false, error}`` instead of problem details.
"""

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, Response, status
from fastapi.responses import JSONResponse

from ...api.dependencies import (
    get_approval_workflow_service,
    get_current_active_user,
    get_current_user_optional,
    get_event_service,
)
from ...core.exceptions import DomainException
from ...errors import handle_domain_exception
from ...models.user import User
from ...schemas.event import (
    CancelResponse,
    EventArtistAdd,
    EventArtistResponse,
    EventCancel,
    EventCreate,
    EventListResponse,
    EventRequestCreate,
    EventRequestRespond,
    EventResponse,
    EventUpdate,
    PublishResponse,
    WorkflowResponse,
)
from ...services.approval_workflow_service import ApprovalWorkflowService, WorkflowResult
from ...services.event_service import EventService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["events-v1"])


def _workflow_payload(
    result: WorkflowResult, event_service: EventService, user: User
) -> WorkflowResponse:
    event = event_service.get_event(result.event_id, user) if result.event_id else None
    return WorkflowResponse(
        success=True,
        message=result.message,
        event=EventResponse.model_validate(event) if event is not None else None,
    )


async def _workflow_response(
    result: WorkflowResult, event_service: EventService, user: User
) -> JSONResponse:
    if not result.success:
        body = WorkflowResponse(success=False, message=result.message, error=result.message)
        return JSONResponse(
            body.model_dump(by_alias=True, mode="json", exclude_none=True),
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    try:
        body = await asyncio.to_thread(_workflow_payload, result, event_service, user)
    except DomainException as e:
        handle_domain_exception(e)
    return JSONResponse(body.model_dump(by_alias=True, mode="json", exclude_none=True))


# ============================================================================
# Artist-initiated requests and venue approval
# ============================================================================


@router.post("/request", response_model=WorkflowResponse)
async def request_event(
    payload: EventRequestCreate = Body(...),
    current_user: User = Depends(get_current_active_user),
    workflow_service: ApprovalWorkflowService = Depends(get_approval_workflow_service),
    event_service: EventService = Depends(get_event_service),
) -> JSONResponse:
    """Request an event at a venue; the venue must approve it."""
    event_data = payload.model_dump(exclude={"venue_id"})
    result = await asyncio.to_thread(
        workflow_service.request_event_at_venue, payload.venue_id, current_user, event_data
    )
    return await _workflow_response(result, event_service, current_user)


@router.post("/{event_id}/respond", response_model=WorkflowResponse)
async def respond_to_event_request(
    event_id: str,
    payload: EventRequestRespond = Body(...),
    current_user: User = Depends(get_current_active_user),
    workflow_service: ApprovalWorkflowService = Depends(get_approval_workflow_service),
    event_service: EventService = Depends(get_event_service),
) -> JSONResponse:
    """Approve or decline an event request as the hosting venue."""
    if payload.action == "approve":
        result = await asyncio.to_thread(
            workflow_service.approve_event_request, event_id, current_user
        )
    else:
        result = await asyncio.to_thread(
            workflow_service.decline_event_request, event_id, current_user, payload.reason
        )
    return await _workflow_response(result, event_service, current_user)


# ============================================================================
# Venue-created events
# ============================================================================


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    payload: EventCreate = Body(...),
    current_user: User = Depends(get_current_active_user),
    event_service: EventService = Depends(get_event_service),
) -> EventResponse:
    try:
        event = await asyncio.to_thread(
            event_service.create_event,
            current_user,
            payload.title,
            payload.event_date,
            description=payload.description,
            end_date=payload.end_date,
            hours=payload.hours,
            total_budget=payload.total_budget,
            notes=payload.notes,
        )
        return EventResponse.model_validate(event)
    except DomainException as e:
        handle_domain_exception(e)


@router.get("", response_model=EventListResponse)
async def list_events(
    public: bool = Query(False, description="List published events only"),
    current_user: Optional[User] = Depends(get_current_user_optional),
    event_service: EventService = Depends(get_event_service),
) -> EventListResponse:
    events = await asyncio.to_thread(event_service.list_events, current_user, public)
    items = [EventResponse.model_validate(e) for e in events]
    return EventListResponse(items=items, total=len(items))


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: str,
    current_user: Optional[User] = Depends(get_current_user_optional),
    event_service: EventService = Depends(get_event_service),
) -> EventResponse:
    try:
        event = await asyncio.to_thread(event_service.get_event, event_id, current_user)
        return EventResponse.model_validate(event)
    except DomainException as e:
        handle_domain_exception(e)


@router.patch("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: str,
    payload: EventUpdate = Body(...),
    current_user: User = Depends(get_current_active_user),
    event_service: EventService = Depends(get_event_service),
) -> EventResponse:
    """Edit an event as its hosting venue; only the fields sent are changed."""
    try:
        event = await asyncio.to_thread(
            event_service.update_event,
            event_id,
            current_user,
            payload.model_dump(exclude_unset=True),
        )
        return EventResponse.model_validate(event)
    except DomainException as e:
        handle_domain_exception(e)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(
    event_id: str,
    current_user: User = Depends(get_current_active_user),
    event_service: EventService = Depends(get_event_service),
) -> Response:
    try:
        await asyncio.to_thread(event_service.delete_event, event_id, current_user)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except DomainException as e:
        handle_domain_exception(e)


@router.post(
    "/{event_id}/artists",
    response_model=EventArtistResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_event_artist(
    event_id: str,
    payload: EventArtistAdd = Body(...),
    current_user: User = Depends(get_current_active_user),
    event_service: EventService = Depends(get_event_service),
) -> EventArtistResponse:
    try:
        entry = await asyncio.to_thread(
            event_service.add_artist,
            event_id,
            current_user,
            payload.artist_id,
            payload.fee,
            payload.hours,
        )
        return EventArtistResponse.model_validate(entry)
    except DomainException as e:
        handle_domain_exception(e)


@router.delete("/{event_id}/artists/{artist_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_event_artist(
    event_id: str,
    artist_id: str,
    current_user: User = Depends(get_current_active_user),
    event_service: EventService = Depends(get_event_service),
) -> Response:
    try:
        await asyncio.to_thread(event_service.remove_artist, event_id, current_user, artist_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except DomainException as e:
        handle_domain_exception(e)


@router.post("/{event_id}/publish", response_model=PublishResponse)
async def publish_event(
    event_id: str,
    current_user: User = Depends(get_current_active_user),
    event_service: EventService = Depends(get_event_service),
) -> PublishResponse:
    """Publish the event and send booking requests to its unconfirmed line-up."""
    try:
        result = await asyncio.to_thread(event_service.publish_event, event_id, current_user)
        return PublishResponse(
            event=EventResponse.model_validate(result.event),
            invited_artist_ids=result.invited_artist_ids,
            skipped_artist_ids=result.skipped_artist_ids,
        )
    except DomainException as e:
        handle_domain_exception(e)


@router.post("/{event_id}/cancel", response_model=CancelResponse)
async def cancel_event(
    event_id: str,
    payload: Optional[EventCancel] = Body(None),
    current_user: User = Depends(get_current_active_user),
    event_service: EventService = Depends(get_event_service),
) -> CancelResponse:
    try:
        result = await asyncio.to_thread(
            event_service.cancel_event,
            event_id,
            current_user,
            payload.reason if payload else None,
        )
        return CancelResponse(
            event=EventResponse.model_validate(result.event),
            declined_booking_ids=result.declined_booking_ids,
            cancelled_booking_ids=result.cancelled_booking_ids,
        )
    except DomainException as e:
        handle_domain_exception(e)
