# backend/app/api/dependencies/services.py
"""
Service layer dependencies for dependency injection.

This module provides factory functions that create service instances
with their required dependencies properly injected. Tests override
``get_notification_service`` to capture outgoing mail.
"""

from functools import lru_cache
import logging

from fastapi import Depends
from sqlalchemy.orm import Session

from ...services.approval_workflow_service import ApprovalWorkflowService
from ...services.availability_service import AvailabilityService
from ...services.booking_service import BookingService
from ...services.conflict_checker import ConflictChecker
from ...services.email import EmailService
from ...services.event_service import EventService
from ...services.notification_inbox_service import NotificationInboxService
from ...services.notification_service import NotificationService
from ...services.profile_service import ProfileService
from ...services.template_service import TemplateService
from .database import get_db

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_email_service() -> EmailService:
    """Get the process-wide email service."""
    return EmailService()


@lru_cache(maxsize=1)
def get_template_service() -> TemplateService:
    """Get the process-wide template service (compiled templates are cached)."""
    return TemplateService()


def get_notification_service(
    email_service: EmailService = Depends(get_email_service),
    template_service: TemplateService = Depends(get_template_service),
) -> NotificationService:
    """
    Get notification service instance.

    Args:
        email_service: Email service for sending emails
        template_service: Template renderer

    Returns:
        NotificationService instance
    """
    return NotificationService(email_service=email_service, template_service=template_service)


def get_conflict_checker(db: Session = Depends(get_db)) -> ConflictChecker:
    return ConflictChecker(db)


def get_event_service(
    db: Session = Depends(get_db),
    notification_service: NotificationService = Depends(get_notification_service),
    conflict_checker: ConflictChecker = Depends(get_conflict_checker),
) -> EventService:
    """Get event service instance with all dependencies."""
    return EventService(
        db, notification_service=notification_service, conflict_checker=conflict_checker
    )


def get_booking_service(
    db: Session = Depends(get_db),
    notification_service: NotificationService = Depends(get_notification_service),
    conflict_checker: ConflictChecker = Depends(get_conflict_checker),
    event_service: EventService = Depends(get_event_service),
) -> BookingService:
    """
    Get booking service instance with all dependencies.

    Args:
        db: Database session
        notification_service: Notification service for sending emails
        conflict_checker: Availability checks
        event_service: Event materialization on accept

    Returns:
        BookingService instance
    """
    return BookingService(
        db,
        notification_service=notification_service,
        conflict_checker=conflict_checker,
        event_service=event_service,
    )


def get_notification_inbox_service(db: Session = Depends(get_db)) -> NotificationInboxService:
    return NotificationInboxService(db)


def get_approval_workflow_service(
    db: Session = Depends(get_db),
    notification_service: NotificationService = Depends(get_notification_service),
    inbox: NotificationInboxService = Depends(get_notification_inbox_service),
) -> ApprovalWorkflowService:
    return ApprovalWorkflowService(db, notification_service=notification_service, inbox=inbox)


def get_availability_service(db: Session = Depends(get_db)) -> AvailabilityService:
    return AvailabilityService(db)


def get_profile_service(db: Session = Depends(get_db)) -> ProfileService:
    return ProfileService(db)
