# backend/app/routes/v1/approvals.py
"""
Approval routes - API v1

Endpoints:
    GET /approvals    - Event requests waiting for the caller's venue

Answering a request stays on POST /events/{event_id}/respond.
"""

import asyncio
import logging

from fastapi import APIRouter, Depends

from ...api.dependencies import get_approval_workflow_service, get_current_active_user
from ...models.user import User
from ...schemas.event import ApprovalsResponse, EventResponse
from ...services.approval_workflow_service import ApprovalWorkflowService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["approvals-v1"])


@router.get("", response_model=ApprovalsResponse)
async def list_pending_approvals(
    current_user: User = Depends(get_current_active_user),
    workflow_service: ApprovalWorkflowService = Depends(get_approval_workflow_service),
) -> ApprovalsResponse:
    """Pending event requests at the caller's venue, newest first."""
    events = await asyncio.to_thread(workflow_service.list_pending_approvals, current_user)
    items = [EventResponse.model_validate(e) for e in events]
    return ApprovalsResponse(event_approvals=items, total=len(items))
