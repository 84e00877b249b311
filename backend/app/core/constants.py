"""Application-wide constants for the Enescena platform."""

from __future__ import annotations

BRAND_NAME = "Enescena"

# Bookings without an explicit duration block this many hours for conflict checks
DEFAULT_BOOKING_HOURS = 2
MAX_BOOKING_HOURS = 24

# Text constraints
MAX_NAME_LENGTH = 120
MAX_NOTE_LENGTH = 2000
MAX_BIO_LENGTH = 4000
MAX_REASON_LENGTH = 255

# Slug generation
SLUG_MAX_ATTEMPTS = 50

# Query limits
DEFAULT_QUERY_LIMIT = 100
