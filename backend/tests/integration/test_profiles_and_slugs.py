"""Profile upserts, slug allocation and the public catalog."""

from decimal import Decimal
import logging

import pytest

from app.core.enums import UserRole
from app.core.exceptions import ForbiddenException, NotFoundException, ValidationException
from app.repositories import RepositoryFactory
from app.services.profile_service import ProfileService


@pytest.fixture
def profiles(db):
    return ProfileService(db)


def test_same_name_gets_suffixed_slugs(profiles, user_factory):
    first = profiles.upsert_artist_profile(user_factory(UserRole.ARTIST), "Luna Duo")
    second = profiles.upsert_artist_profile(user_factory(UserRole.ARTIST), "Luna Duo")

    assert first.slug == "luna-duo"
    assert second.slug == "luna-duo-2"


def test_slug_is_stable_across_renames(profiles, user_factory):
    user = user_factory(UserRole.ARTIST)
    created = profiles.upsert_artist_profile(user, "Luna Duo")

    renamed = profiles.upsert_artist_profile(user, "Luna Trio", city="Heredia")

    assert renamed.id == created.id
    assert renamed.name == "Luna Trio"
    assert renamed.slug == "luna-duo"
    assert renamed.city == "Heredia"


def test_profile_saves_are_logged_with_context(caplog, profiles, user_factory):
    user = user_factory(UserRole.VENUE)

    with caplog.at_level(logging.INFO, logger="ProfileService"):
        profiles.upsert_venue_profile(user, "Teatro Azul")
        profiles.upsert_venue_profile(user, "Teatro Azul", city="Cartago")

    saved = [r for r in caplog.records if getattr(r, "operation", None) == "venue_profile_saved"]
    assert [r.is_new for r in saved] == [True, False]


def test_slug_collision_retries_next_candidate(db, user_factory):
    repo = RepositoryFactory.create_artist_repository(db)
    owner_a = user_factory(UserRole.ARTIST)
    owner_b = user_factory(UserRole.ARTIST)
    repo.create_with_unique_slug("luna-duo", user_id=owner_a.id, name="Luna Duo", genres=[])
    db.commit()

    # Simulate a racing writer that read the slug family before the first insert
    repo.taken_slugs = lambda base: set()
    artist = repo.create_with_unique_slug("luna-duo", user_id=owner_b.id, name="Luna Duo", genres=[])
    db.commit()

    assert artist.slug == "luna-duo-2"


def test_artist_profile_fields(profiles, user_factory):
    artist = profiles.upsert_artist_profile(
        user_factory(UserRole.ARTIST),
        "  Café Tacuba ",
        city=" San José ",
        genres="rock, alternativo, rock",
        rate=Decimal("-5"),
        bio="",
    )

    assert artist.name == "Café Tacuba"
    assert artist.slug == "cafe-tacuba"
    assert artist.city == "San José"
    assert artist.genres == ["rock", "alternativo"]
    assert artist.rate is None
    assert artist.bio is None


def test_profile_role_checks(profiles, user_factory):
    with pytest.raises(ForbiddenException):
        profiles.upsert_artist_profile(user_factory(UserRole.VENUE), "Luna Duo")
    with pytest.raises(ForbiddenException):
        profiles.upsert_venue_profile(user_factory(UserRole.ARTIST), "Teatro Azul")
    with pytest.raises(ValidationException) as exc_info:
        profiles.upsert_venue_profile(user_factory(UserRole.VENUE), "   ")
    assert exc_info.value.code == "name_required"


def test_venue_profile_upsert(profiles, user_factory):
    user = user_factory(UserRole.VENUE)
    venue = profiles.upsert_venue_profile(user, "Teatro Azul", address="Av. 2")

    updated = profiles.upsert_venue_profile(user, "Teatro Azul", about="Since 1920")

    assert updated.id == venue.id
    assert updated.slug == "teatro-azul"
    assert updated.address is None
    assert updated.about == "Since 1920"


def test_catalog_filters(profiles, artist_factory):
    artist_factory(name="Jazz Cats", city="Heredia", genres=["Jazz"])
    artist_factory(name="Rockers", city="Heredia", genres=["rock"])
    artist_factory(name="Far Jazz", city="Limón", genres=["jazz"])

    assert [a.name for a in profiles.list_artists(city="heredia")] == ["Jazz Cats", "Rockers"]
    assert [a.name for a in profiles.list_artists(genre="jazz")] == ["Far Jazz", "Jazz Cats"]
    assert [a.name for a in profiles.list_artists(city="Heredia", genre="JAZZ")] == ["Jazz Cats"]


def test_catalog_lookup_by_slug(profiles, user_factory):
    created = profiles.upsert_venue_profile(user_factory(UserRole.VENUE), "Teatro Azul")

    assert profiles.get_venue_by_slug("teatro-azul").id == created.id
    with pytest.raises(NotFoundException):
        profiles.get_artist_by_slug("nobody")
