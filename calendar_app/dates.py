"""
Lenient query-string parsers for the calendar and list pages.

Every parser falls back to a default instead of raising, so a hand-edited
URL shows the current period rather than an error page.
"""
from datetime import date

from django.utils import timezone

# Years the calendar pages navigate between.
MIN_YEAR = 1900
MAX_YEAR = 2999


def parse_ymd(value, default: date | None = None) -> date:
    """'YYYY-MM-DD' within MIN_YEAR..MAX_YEAR -> date; anything else -> default (today)."""
    if default is None:
        default = timezone.localdate()
    if not value:
        return default
    try:
        parsed = date.fromisoformat(value)
    except (TypeError, ValueError):
        return default
    if not MIN_YEAR <= parsed.year <= MAX_YEAR:
        return default
    return parsed


def parse_ym(value, default: date | None = None) -> date:
    """'YYYY-MM' within MIN_YEAR..MAX_YEAR -> first day of that month; anything else -> default."""
    if default is None:
        default = timezone.localdate().replace(day=1)
    if not value:
        return default
    try:
        year, month = (int(part) for part in value.split("-"))
        parsed = date(year, month, 1)
    except (TypeError, ValueError):
        return default
    if not MIN_YEAR <= parsed.year <= MAX_YEAR:
        return default
    return parsed


def parse_int(value, default: int, lo: int, hi: int) -> int:
    """Integer within [lo, hi]; anything else falls back to default."""
    try:
        n = int(value)
    except (TypeError, ValueError):
        return default
    if n < lo or n > hi:
        return default
    return n
