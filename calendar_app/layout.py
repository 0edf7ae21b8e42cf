from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Mapping, Optional, Tuple

from django.utils import timezone

from .bucketing import DayBucket

MONTH_NAMES = [
    "", "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]
WEEKDAY_HEADERS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


@dataclass
class DayCell:
    """
    One square of a month grid.

    in_month is False for the leading/trailing days borrowed from the
    neighbouring months to fill the Sunday-first rows.
    """
    date: date
    in_month: bool
    is_today: bool
    bucket: Optional[DayBucket] = None

    @property
    def entries(self):
        return self.bucket.entries if self.bucket else []

    @property
    def holiday(self):
        return self.bucket.holiday if self.bucket else None


@dataclass
class MonthGrid:
    year: int
    month: int
    weeks: List[List[DayCell]]

    @property
    def name(self) -> str:
        return MONTH_NAMES[self.month]

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)


def add_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    # delta = -1 or +1
    new_month = month + delta
    new_year = year
    if new_month == 0:
        new_month = 12
        new_year -= 1
    elif new_month == 13:
        new_month = 1
        new_year += 1
    return new_year, new_month


def grid_range(year: int, month: int) -> Tuple[date, date]:
    """
    Sunday on/before the 1st -> Saturday on/after the last day of the month.
    """
    first_day = date(year, month, 1)
    _, last_day_num = calendar.monthrange(year, month)
    last_day = date(year, month, last_day_num)

    grid_start = first_day - timedelta(days=(first_day.weekday() + 1) % 7)
    grid_end = last_day + timedelta(days=(6 - ((last_day.weekday() + 1) % 7)))
    return grid_start, grid_end


def build_weeks(grid_start: date, grid_end: date) -> list[list[date]]:
    days = []
    d = grid_start
    while d <= grid_end:
        days.append(d)
        d += timedelta(days=1)
    return [days[i:i+7] for i in range(0, len(days), 7)]


def build_month_grid(
    year: int,
    month: int,
    buckets: Mapping[date, DayBucket],
    today: Optional[date] = None,
) -> MonthGrid:
    """
    Sunday-first week rows of DayCells for one month.

    Days outside the month still get their bucket, so an event on the
    31st shows in next month's leading row too.
    """
    today = today or timezone.localdate()
    grid_start, grid_end = grid_range(year, month)

    weeks = [
        [
            DayCell(
                date=d,
                in_month=(d.month == month),
                is_today=(d == today),
                bucket=buckets.get(d),
            )
            for d in week
        ]
        for week in build_weeks(grid_start, grid_end)
    ]
    return MonthGrid(year=year, month=month, weeks=weeks)


def build_year(
    year: int,
    buckets: Mapping[date, DayBucket],
    today: Optional[date] = None,
) -> List[MonthGrid]:
    """Twelve month grids for the year view."""
    today = today or timezone.localdate()
    return [build_month_grid(year, month, buckets, today=today) for month in range(1, 13)]
