# backend/app/utils/slug.py
"""Slug and tag helpers shared by profiles and events."""

import re
from typing import Iterable, Iterator, List, Optional
import unicodedata

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHEN_RUNS = re.compile(r"-+")


def slugify(value: str) -> str:
    """
    Derive a URL-safe slug from a display name.

    Lowercases, folds accents to ASCII, drops anything that is not a letter,
    digit, whitespace or hyphen, turns whitespace into hyphens and collapses
    hyphen runs. "Café Tacuba" becomes "cafe-tacuba".
    """
    folded = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    slug = folded.lower().strip()
    slug = _NON_SLUG_CHARS.sub("", slug)
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHEN_RUNS.sub("-", slug)
    return slug.strip("-")


def slug_candidates(base: str, limit: int) -> Iterator[str]:
    """Yield base, base-2, base-3, ... up to limit candidates."""
    yield base
    for suffix in range(2, limit + 1):
        yield f"{base}-{suffix}"


def parse_genres(raw: Optional[str | Iterable[str]]) -> List[str]:
    """Split a comma-separated genre string into trimmed, non-empty tags."""
    if raw is None:
        return []
    parts = raw.split(",") if isinstance(raw, str) else list(raw)
    seen: List[str] = []
    for part in parts:
        tag = part.strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen
