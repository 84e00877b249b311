# backend/app/services/approval_workflow_service.py
"""
Approval Workflow Service for the Enescena platform

Artist-initiated events: an artist asks to hold an event at a venue and
the venue approves or declines.

    PENDING_VENUE_APPROVAL -> SEEKING_ARTISTS   (approve)
    PENDING_VENUE_APPROVAL -> CANCELLED         (decline)

Expected business failures come back as WorkflowResult(success=False)
with a human-readable message rather than as exceptions.

Each step also leaves an in-app notification for the other party.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
import logging
from typing import Any, List, Mapping, Optional

from sqlalchemy.orm import Session

from ..core.enums import EventStatus
from ..core.exceptions import DomainException, RepositoryException, ValidationException
from ..models.event import Event
from ..models.user import User
from ..repositories import RepositoryFactory
from ..utils.slug import slugify
from .base import BaseService
from .event_service import validate_hours
from .notification_inbox_service import NotificationInboxService
from .notification_service import NotificationService

logger = logging.getLogger(__name__)


@dataclass
class WorkflowResult:
    """Outcome of an approval workflow step."""

    success: bool
    message: str
    event_id: Optional[str] = None


class ApprovalWorkflowService(BaseService):
    """Event request / venue approval handshake."""

    def __init__(
        self,
        db: Session,
        notification_service: Optional[NotificationService] = None,
        inbox: Optional[NotificationInboxService] = None,
    ):
        super().__init__(db)
        self.notification_service = notification_service or NotificationService()
        self.inbox = inbox or NotificationInboxService(db)
        self.event_repository = RepositoryFactory.create_event_repository(db)
        self.event_artist_repository = RepositoryFactory.create_event_artist_repository(db)
        self.venue_repository = RepositoryFactory.create_venue_repository(db)
        self.artist_repository = RepositoryFactory.create_artist_repository(db)

    @BaseService.measure_operation("request_event_at_venue")
    def request_event_at_venue(
        self, venue_id: str, user: User, event_data: Mapping[str, Any]
    ) -> WorkflowResult:
        """
        Create an event in PENDING_VENUE_APPROVAL on behalf of an artist.

        ``event_data`` keys: title, description, event_date, end_date,
        total_hours, total_budget, notes.
        """
        venue = self.venue_repository.get_by_id(venue_id, load_relationships=False)
        if venue is None:
            return WorkflowResult(success=False, message="Venue not found")

        artist = self.artist_repository.get_by_user_id(user.id) if user.is_artist else None
        if artist is None:
            return WorkflowResult(success=False, message="Artist profile required")

        title = str(event_data.get("title") or "").strip()
        if not title:
            return WorkflowResult(success=False, message="Event title is required")
        event_date: Optional[datetime] = event_data.get("event_date")
        if event_date is None:
            return WorkflowResult(success=False, message="Event date is required")
        end_date: Optional[datetime] = event_data.get("end_date")
        if end_date is not None and end_date <= event_date:
            return WorkflowResult(success=False, message="End date must be after event date")
        total_hours: Optional[int] = event_data.get("total_hours")
        try:
            validate_hours(total_hours)
        except ValidationException as e:
            return WorkflowResult(success=False, message=e.message)
        total_budget: Optional[Decimal] = event_data.get("total_budget")
        if total_budget is not None and total_budget < 0:
            return WorkflowResult(success=False, message="Budget cannot be negative")

        try:
            with self.transaction():
                event = self.event_repository.create_with_unique_slug(
                    slugify(title) or "event",
                    venue_id=venue.id,
                    created_by_id=user.id,
                    title=title,
                    description=event_data.get("description"),
                    notes=event_data.get("notes"),
                    event_date=event_date,
                    end_date=end_date,
                    hours=total_hours,
                    total_hours=total_hours,
                    total_budget=total_budget,
                    status=EventStatus.PENDING_VENUE_APPROVAL.value,
                )
                self.event_artist_repository.create(
                    event_id=event.id, artist_id=artist.id, hours=total_hours, confirmed=False
                )
                self.inbox.record_event_request(event, artist, venue)
        except (DomainException, RepositoryException) as e:
            self.logger.error(f"Event request at venue {venue_id} failed: {e}")
            return WorkflowResult(success=False, message="Failed to request event")

        self.log_operation("event_requested", event_id=event.id, venue_id=venue.id)
        self._notify(self.notification_service.send_event_request, event, artist, venue)
        return WorkflowResult(
            success=True, event_id=event.id, message="Event request sent successfully"
        )

    @BaseService.measure_operation("approve_event_request")
    def approve_event_request(self, event_id: str, user: User) -> WorkflowResult:
        """Venue approves: PENDING_VENUE_APPROVAL -> SEEKING_ARTISTS."""
        event, failure = self._pending_event_for_venue(event_id, user)
        if failure:
            return failure

        with self.transaction():
            event.status = EventStatus.SEEKING_ARTISTS.value
            if event.created_by_id:
                self.inbox.record_event_request_answer(event, event.created_by_id, approved=True)

        self.log_operation("event_request_approved", event_id=event.id)
        artist = self._requesting_artist(event)
        if artist is not None:
            self._notify(
                self.notification_service.send_event_request_approved, event, artist, event.venue
            )
        return WorkflowResult(
            success=True, event_id=event.id, message="Event request approved successfully"
        )

    @BaseService.measure_operation("decline_event_request")
    def decline_event_request(
        self, event_id: str, user: User, reason: Optional[str] = None
    ) -> WorkflowResult:
        """Venue declines: PENDING_VENUE_APPROVAL -> CANCELLED."""
        event, failure = self._pending_event_for_venue(event_id, user)
        if failure:
            return failure

        cleaned_reason = (reason or "").strip() or None
        with self.transaction():
            event.status = EventStatus.CANCELLED.value
            if cleaned_reason:
                event.notes = (
                    f"{event.notes}\n\nDeclined: {cleaned_reason}"
                    if event.notes
                    else f"Declined: {cleaned_reason}"
                )
            if event.created_by_id:
                self.inbox.record_event_request_answer(
                    event, event.created_by_id, approved=False, reason=cleaned_reason
                )

        self.log_operation("event_request_declined", event_id=event.id)
        artist = self._requesting_artist(event)
        if artist is not None:
            self._notify(
                self.notification_service.send_event_request_declined,
                event,
                artist,
                event.venue,
                cleaned_reason,
            )
        return WorkflowResult(success=True, event_id=event.id, message="Event request declined")

    def list_pending_approvals(self, user: User) -> List[Event]:
        """Event requests awaiting the caller's venue; empty for non-venues."""
        venue = self.venue_repository.get_by_user_id(user.id) if user.is_venue else None
        if venue is None:
            return []
        return self.event_repository.list_awaiting_venue(venue.id)

    # Helpers

    def _pending_event_for_venue(
        self, event_id: str, user: User
    ) -> tuple[Optional[Event], Optional[WorkflowResult]]:
        event = self.event_repository.get_by_id(event_id)
        if event is None or event.venue is None or event.venue.user_id != user.id:
            return None, WorkflowResult(
                success=False, event_id=event_id, message="Unauthorized or event not found"
            )
        if event.status != EventStatus.PENDING_VENUE_APPROVAL.value:
            return None, WorkflowResult(
                success=False, event_id=event_id, message="Event is not pending venue approval"
            )
        return event, None

    def _requesting_artist(self, event: Event):
        if event.created_by_id:
            artist = self.artist_repository.get_by_user_id(event.created_by_id)
            if artist is not None:
                return artist
        return event.artists[0].artist if event.artists else None

    def _notify(self, send, *args) -> None:
        try:
            send(*args)
        except Exception as e:
            self.logger.error(f"Notification {getattr(send, '__name__', send)} failed: {e}")
