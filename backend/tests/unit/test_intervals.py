"""Half-open interval overlap used by every availability check."""

from datetime import timedelta

import pytest

from app.services.conflict_checker import intervals_overlap
from tests.utils.time import utc

BASE = utc(2025, 9, 12, 20)


def window(start_offset_h: float, length_h: float):
    start = BASE + timedelta(hours=start_offset_h)
    return start, start + timedelta(hours=length_h)


@pytest.mark.parametrize(
    "a, b, expected",
    [
        (window(0, 3), window(1, 1), True),  # contained
        (window(0, 3), window(2, 3), True),  # partial tail
        (window(1, 3), window(0, 2), True),  # partial head
        (window(0, 3), window(0, 3), True),  # identical
        (window(0, 1), window(5, 1), False),  # disjoint
    ],
)
def test_overlap_is_symmetric(a, b, expected):
    assert intervals_overlap(*a, *b) is expected
    assert intervals_overlap(*b, *a) is expected


def test_adjacent_windows_do_not_overlap():
    first = window(0, 3)
    second = window(3, 1)
    assert intervals_overlap(*first, *second) is False
    assert intervals_overlap(*second, *first) is False


def test_one_minute_overlap_counts():
    first = window(0, 3)
    second = (first[1] - timedelta(minutes=1), first[1] + timedelta(hours=1))
    assert intervals_overlap(*first, *second) is True
