import pytest

from app.utils.slug import parse_genres, slug_candidates, slugify


@pytest.mark.parametrize(
    "value, expected",
    [
        ("Luna Duo", "luna-duo"),
        ("Café Tacuba", "cafe-tacuba"),
        ("  Los   Ángeles  Azules ", "los-angeles-azules"),
        ("Rock & Roll!!", "rock-roll"),
        ("already--hyphenated -- name", "already-hyphenated-name"),
        ("Luna Duo at Teatro Azul", "luna-duo-at-teatro-azul"),
        ("!!!", ""),
    ],
)
def test_slugify(value, expected):
    assert slugify(value) == expected


def test_slug_candidates_sequence():
    assert list(slug_candidates("luna-duo", 4)) == [
        "luna-duo",
        "luna-duo-2",
        "luna-duo-3",
        "luna-duo-4",
    ]


def test_parse_genres_trims_and_dedupes():
    assert parse_genres(" jazz, bossa ,, jazz,latin ") == ["jazz", "bossa", "latin"]


def test_parse_genres_accepts_lists_and_none():
    assert parse_genres(["rock", " rock ", "pop"]) == ["rock", "pop"]
    assert parse_genres(None) == []
    assert parse_genres("") == []
