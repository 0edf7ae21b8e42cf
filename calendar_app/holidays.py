from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, List

"""
calendar_app.holidays

Brazilian holiday dates, computed rather than typed in per year.

- Fixed-date national holidays (same month/day every year).
- Movable dates derived from Easter Sunday:
    Carnival Tuesday  = Easter - 47 days
    Good Friday       = Easter - 2 days
    Corpus Christi    = Easter + 60 days

Carnival and Corpus Christi are optional days off (ponto facultativo), not
national holidays, so they carry is_national=False.
"""

FIXED_NATIONAL_HOLIDAYS = [
    # (month, day, name)
    (1, 1, "Confraternização Universal"),
    (4, 21, "Tiradentes"),
    (5, 1, "Dia do Trabalhador"),
    (9, 7, "Independência do Brasil"),
    (10, 12, "Nossa Senhora Aparecida"),
    (11, 2, "Finados"),
    (11, 15, "Proclamação da República"),
    (12, 25, "Natal"),
]

# (offset from Easter Sunday in days, name, is_national)
EASTER_OFFSETS = [
    (-47, "Carnaval", False),
    (-2, "Sexta-feira Santa", True),
    (60, "Corpus Christi", False),
]


@dataclass(frozen=True)
class HolidayDate:
    date: date
    name: str
    is_national: bool = True


def easter_western(year: int) -> date:
    """
    Compute Western (Gregorian) Easter for a given year.

    Uses the Meeus/Jones/Butcher "Anonymous Gregorian algorithm".
    Returns:
        date object for Easter Sunday in that year.
    """
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7  # noqa: E741
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = ((h + l - 7 * m + 114) % 31) + 1
    return date(year, month, day)


def holidays_for_year(year: int) -> List[HolidayDate]:
    """
    Every holiday of `year`, sorted by date.

    Example:
        holidays_for_year(2025)[0] -> HolidayDate(2025-01-01, "Confraternização Universal")
    """
    out = [HolidayDate(date(year, month, day), name) for month, day, name in FIXED_NATIONAL_HOLIDAYS]

    easter = easter_western(year)
    for offset, name, national in EASTER_OFFSETS:
        out.append(HolidayDate(easter + timedelta(days=offset), name, national))

    out.sort(key=lambda h: h.date)
    return out


def holidays_for_years(years: Iterable[int]) -> List[HolidayDate]:
    out = []
    for y in sorted(set(years)):
        out.extend(holidays_for_year(y))
    return out
