from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional

from dashboard.config import DEFAULT_COLORS
from events.models import ReservationStatus
from events.payments import EMPTY_SUMMARY, PaymentSummary, PaymentStatus

"""
calendar_app.bucketing

Groups events and holidays by calendar date and resolves the indicator color
of each event. Pure functions: callers pass in the events, the
PaymentSummary of each (from events.payments.summarize_events) and the color
scheme (from dashboard.config).

Color precedence for one event:
    1. color_override set on the event
    2. FULLY_PAID                      -> colors["paid"]
    3. has_contract                    -> colors["with_contract"]
    4. reservation CONFIRMED           -> colors["with_contract"]
       reservation IN_PROGRESS         -> colors["in_progress"]
       anything else                   -> colors["pre_reservation"]
"""


@dataclass
class CalendarEntry:
    event: Any
    summary: PaymentSummary
    color: str


@dataclass
class DayBucket:
    date: date
    entries: List[CalendarEntry] = field(default_factory=list)
    holiday: Optional[Any] = None

    @property
    def has_events(self) -> bool:
        return bool(self.entries)

    @property
    def color(self) -> Optional[str]:
        """Color of the first event of the day (year view dot)."""
        return self.entries[0].color if self.entries else None


def event_color(event: Any, summary: PaymentSummary, colors: Mapping[str, str] = DEFAULT_COLORS) -> str:
    override = getattr(event, "color_override", "")
    if override:
        return override

    if summary.status == PaymentStatus.FULLY_PAID:
        return colors["paid"]

    if getattr(event, "has_contract", False):
        return colors["with_contract"]

    status = getattr(event, "reservation_status", None)
    if status == ReservationStatus.CONFIRMED:
        return colors["with_contract"]
    if status == ReservationStatus.IN_PROGRESS:
        return colors["in_progress"]
    return colors["pre_reservation"]


def bucket_by_date(
    events: Iterable[Any],
    holidays: Iterable[Any],
    summaries: Optional[Mapping[Any, PaymentSummary]] = None,
    colors: Optional[Mapping[str, str]] = None,
) -> Dict[date, DayBucket]:
    """
    Build {date: DayBucket} for every date that has an event or a holiday.

    - events keep their incoming order within a day
    - an event missing from `summaries` gets an empty (no contract) summary
    - when two holidays share a date, the first one given wins
    - colors defaults to the built-in scheme
    """
    summaries = summaries or {}
    colors = colors or DEFAULT_COLORS
    buckets: Dict[date, DayBucket] = {}

    for h in holidays:
        bucket = buckets.setdefault(h.date, DayBucket(date=h.date))
        if bucket.holiday is None:
            bucket.holiday = h

    for e in events:
        summary = summaries.get(e.id, EMPTY_SUMMARY)
        bucket = buckets.setdefault(e.event_date, DayBucket(date=e.event_date))
        bucket.entries.append(CalendarEntry(event=e, summary=summary, color=event_color(e, summary, colors)))

    return buckets
