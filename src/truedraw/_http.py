"""Small HTTP-related constants shared across truedraw.

This module is intentionally tiny to avoid circular imports and drift.
"""

from __future__ import annotations

PROVIDER_ID = "random.org"
DEFAULT_BASE_URL = "https://www.random.org"
INTEGERS_PATH = "/integers/"

DEFAULT_TIMEOUT_S = 15.0
USER_AGENT = "truedraw/1.0"

# One base-10 integer per request, one column, plain text, freshly seeded.
INTEGER_QUERY: tuple[tuple[str, str], ...] = (
    ("col", "1"),
    ("base", "10"),
    ("format", "plain"),
    ("rnd", "new"),
)

# Largest magnitude hosts can represent exactly in a double.
MAX_SAFE_INTEGER = 2**53 - 1
MIN_SAFE_INTEGER = -MAX_SAFE_INTEGER

_STATUS_HINTS: dict[int, str] = {
    400: "random.org rejected the request; check that Min and Max are in range.",
    429: "random.org rate limit or quota exceeded; wait before drawing again.",
    500: "random.org internal error; try again later.",
    503: "random.org is temporarily unavailable; try again later.",
}


def status_hint(status_code: int | None) -> str | None:
    """Return an actionable hint for a given HTTP status code."""
    if status_code is None:
        return None
    return _STATUS_HINTS.get(status_code)
