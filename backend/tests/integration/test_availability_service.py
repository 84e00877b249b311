"""Artist blackout windows."""

import pytest

from app.core.exceptions import ForbiddenException, NotFoundException, ValidationException
from app.services.availability_service import AvailabilityService
from tests.utils.time import utc


@pytest.fixture
def service(db):
    return AvailabilityService(db)


def test_add_and_list_ordered_by_start(service, artist):
    later = service.add_blackout(artist.user, utc(2025, 10, 1), utc(2025, 10, 2), reason=" Tour ")
    earlier = service.add_blackout(artist.user, utc(2025, 9, 1), utc(2025, 9, 3))

    assert later.reason == "Tour"
    assert earlier.reason is None
    assert [b.id for b in service.list_blackouts(artist.user)] == [earlier.id, later.id]


def test_overlapping_windows_are_kept_separately(service, artist):
    service.add_blackout(artist.user, utc(2025, 9, 1), utc(2025, 9, 5))
    service.add_blackout(artist.user, utc(2025, 9, 3), utc(2025, 9, 8))

    assert len(service.list_blackouts(artist.user)) == 2


@pytest.mark.parametrize("end", [utc(2025, 9, 1), utc(2025, 8, 31)])
def test_end_must_follow_start(service, artist, end):
    with pytest.raises(ValidationException) as exc_info:
        service.add_blackout(artist.user, utc(2025, 9, 1), end)
    assert exc_info.value.code == "end_before_start"


def test_venues_cannot_manage_blackouts(service, venue):
    with pytest.raises(ForbiddenException):
        service.add_blackout(venue.user, utc(2025, 9, 1), utc(2025, 9, 2))


def test_remove(service, artist):
    blackout = service.add_blackout(artist.user, utc(2025, 9, 1), utc(2025, 9, 2))

    service.remove_blackout(artist.user, blackout.id)

    assert service.list_blackouts(artist.user) == []
    with pytest.raises(NotFoundException):
        service.remove_blackout(artist.user, blackout.id)


def test_cannot_remove_another_artists_blackout(service, artist, artist_factory):
    other = artist_factory(name="Other Act")
    blackout = service.add_blackout(other.user, utc(2025, 9, 1), utc(2025, 9, 2))

    with pytest.raises(ForbiddenException):
        service.remove_blackout(artist.user, blackout.id)
