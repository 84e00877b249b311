# backend/app/api/dependencies/__init__.py
"""
Central export point for all dependencies.

This module re-exports all dependencies from submodules
for convenient access throughout the application.
"""

from .auth import (
    get_current_active_user,
    get_current_user,
    get_current_user_optional,
)
from .database import get_db
from .services import (
    get_approval_workflow_service,
    get_availability_service,
    get_booking_service,
    get_conflict_checker,
    get_email_service,
    get_event_service,
    get_notification_inbox_service,
    get_notification_service,
    get_profile_service,
    get_template_service,
)

__all__ = [
    # Auth
    "get_current_user",
    "get_current_active_user",
    "get_current_user_optional",
    # Database
    "get_db",
    # Services
    "get_approval_workflow_service",
    "get_availability_service",
    "get_booking_service",
    "get_conflict_checker",
    "get_email_service",
    "get_event_service",
    "get_notification_inbox_service",
    "get_notification_service",
    "get_profile_service",
    "get_template_service",
]
