# backend/app/routes/v1/__init__.py
"""
API v1 Routes

Versioned API endpoints under /api/v1.
"""

from . import approvals, auth, availability, bookings, catalog, dashboard, events, notifications

__all__ = [
    "approvals",
    "auth",
    "availability",
    "bookings",
    "catalog",
    "dashboard",
    "events",
    "notifications",
]
