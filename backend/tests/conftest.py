# backend/tests/conftest.py
"""
Pytest configuration for the Enescena backend.

Tests run against an in-memory SQLite database; the schema is created and
dropped around every test. Outbound mail is never sent: the Resend client
is patched globally and route tests replace the notification service with
a Mock.
"""

import os
import sys

# Set testing mode BEFORE any app imports
os.environ["is_testing"] = "true"
os.environ["TEST_DATABASE_URL"] = "sqlite://"
os.environ["ID_TOKEN_SECRET"] = "test-id-token-secret"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"
os.environ.pop("RESEND_API_KEY", None)
for _var in ("COGNITO_REGION", "COGNITO_USER_POOL_ID", "COGNITO_CLIENT_ID"):
    os.environ.pop(_var, None)

import unittest.mock

# Prevent real emails in ANY test
global_resend_mock = unittest.mock.patch("resend.Emails.send")
mocked_send = global_resend_mock.start()
mocked_send.return_value = {"id": "test-email-id"}

# Add the backend directory to Python path so imports work
backend_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if backend_dir not in sys.path:
    sys.path.insert(0, backend_dir)

from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional
from unittest.mock import Mock

from fastapi.testclient import TestClient
import pytest
from sqlalchemy.orm import Session

from app.api.dependencies import get_db, get_notification_service
from app.auth import create_id_token
from app.core.enums import BookingStatus, UserRole
from app.database import Base, SessionLocal, engine
from app.main import app
from app.models.artist import Artist
from app.models.availability import ArtistUnavailability
from app.models.booking import Booking
from app.models.user import User
from app.models.venue import Venue
from app.services.notification_service import NotificationService


# ============================================================================
# Database
# ============================================================================


@pytest.fixture
def db() -> Session:
    """Fresh schema and session per test."""
    from app import models  # noqa: F401  (registers mappers)

    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        Base.metadata.drop_all(bind=engine)


# ============================================================================
# Factories
# ============================================================================


@pytest.fixture
def user_factory(db: Session) -> Callable[..., User]:
    counter = {"n": 0}

    def _create(role: UserRole = UserRole.ARTIST, email: Optional[str] = None, name: str = "") -> User:
        counter["n"] += 1
        user = User(
            email=email or f"user{counter['n']}@example.com",
            name=name or f"User {counter['n']}",
            role=role.value,
        )
        db.add(user)
        db.commit()
        return user

    return _create


@pytest.fixture
def artist_factory(db: Session, user_factory) -> Callable[..., Artist]:
    counter = {"n": 0}

    def _create(name: str = "", user: Optional[User] = None, **fields) -> Artist:
        counter["n"] += 1
        name = name or f"Artist {counter['n']}"
        owner = user or user_factory(UserRole.ARTIST)
        artist = Artist(
            user_id=owner.id,
            name=name,
            slug=f"artist-{counter['n']}-{owner.id.lower()[-6:]}",
            genres=fields.pop("genres", []),
            **fields,
        )
        db.add(artist)
        db.commit()
        return artist

    return _create


@pytest.fixture
def venue_factory(db: Session, user_factory) -> Callable[..., Venue]:
    counter = {"n": 0}

    def _create(name: str = "", user: Optional[User] = None, **fields) -> Venue:
        counter["n"] += 1
        name = name or f"Venue {counter['n']}"
        owner = user or user_factory(UserRole.VENUE)
        venue = Venue(
            user_id=owner.id,
            name=name,
            slug=f"venue-{counter['n']}-{owner.id.lower()[-6:]}",
            **fields,
        )
        db.add(venue)
        db.commit()
        return venue

    return _create


@pytest.fixture
def blackout_factory(db: Session) -> Callable[..., ArtistUnavailability]:
    def _create(artist: Artist, start: datetime, end: datetime, reason: str = "") -> ArtistUnavailability:
        blackout = ArtistUnavailability(
            artist_id=artist.id, start=start, end=end, reason=reason or None
        )
        db.add(blackout)
        db.commit()
        return blackout

    return _create


@pytest.fixture
def booking_factory(db: Session) -> Callable[..., Booking]:
    def _create(
        artist: Artist,
        venue: Venue,
        event_date: datetime,
        hours: Optional[int] = None,
        status: BookingStatus = BookingStatus.PENDING,
        **fields,
    ) -> Booking:
        booking = Booking(
            artist_id=artist.id,
            venue_id=venue.id,
            event_date=event_date,
            hours=hours,
            status=status.value,
            **fields,
        )
        db.add(booking)
        db.commit()
        return booking

    return _create


@pytest.fixture
def artist(artist_factory) -> Artist:
    return artist_factory(name="Luna Duo", city="San José", genres=["jazz", "bossa"], rate=Decimal("150"))


@pytest.fixture
def venue(venue_factory) -> Venue:
    return venue_factory(name="Teatro Azul", city="San José")


# ============================================================================
# Notifications
# ============================================================================


@pytest.fixture
def notification_service() -> Mock:
    """Notification service double; every send reports success."""
    return Mock(spec=NotificationService)


# ============================================================================
# HTTP client
# ============================================================================


@pytest.fixture
def client(db: Session, notification_service: Mock) -> TestClient:
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notification_service] = lambda: notification_service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def auth_headers_for(user: User) -> dict:
    token = create_id_token(email=user.email, role=user.role, name=user.name)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers() -> Callable[[User], dict]:
    return auth_headers_for
