from datetime import timedelta

from django.shortcuts import render
from django.utils import timezone

from accounts.permissions import Capability, capability_required
from dashboard.config import get_setting

from .dates import MAX_YEAR, MIN_YEAR, parse_int, parse_ymd
from .layout import WEEKDAY_HEADERS, add_month, build_month_grid, build_year, grid_range
from .queries import load_buckets


@capability_required(Capability.VIEW_CALENDAR)
def calendar_year(request):
    """
    Year overview: twelve small month grids, one colored dot per event day.

    Query params:
      - y=YYYY (defaults to current year)
    """
    today = timezone.localdate()
    year = parse_int(request.GET.get("y"), today.year, MIN_YEAR, MAX_YEAR)

    colors = get_setting("color_scheme")
    # widen to the grid edges so spill-over days in Jan/Dec are colored too
    start_d, _ = grid_range(year, 1)
    _, end_d = grid_range(year, 12)
    buckets = load_buckets(start_d, end_d, colors=colors)

    context = {
        "current": "calendar",
        "today": today,
        "year": year,
        "prev_year": year - 1,
        "next_year": year + 1,
        "months": build_year(year, buckets, today=today),
        "weekday_headers": WEEKDAY_HEADERS,
        "colors": colors,
    }
    return render(request, "calendar/calendar_year.html", context)


@capability_required(Capability.VIEW_CALENDAR)
def calendar_month(request):
    """
    Month grid view.

    Query params:
      - y=YYYY, m=1..12 (defaults to current month)
    """
    today = timezone.localdate()
    year = parse_int(request.GET.get("y"), today.year, MIN_YEAR, MAX_YEAR)
    month = parse_int(request.GET.get("m"), today.month, 1, 12)

    prev_y, prev_m = add_month(year, month, -1)
    next_y, next_m = add_month(year, month, +1)

    colors = get_setting("color_scheme")
    grid_start, grid_end = grid_range(year, month)
    buckets = load_buckets(grid_start, grid_end, colors=colors)

    context = {
        "current": "calendar",
        "today": today,
        "grid": build_month_grid(year, month, buckets, today=today),
        "weekday_headers": WEEKDAY_HEADERS,
        "year": year,
        "month": month,
        "prev_y": prev_y, "prev_m": prev_m,
        "next_y": next_y, "next_m": next_m,
        "colors": colors,
    }
    return render(request, "calendar/calendar_month.html", context)


@capability_required(Capability.VIEW_CALENDAR)
def calendar_day(request):
    """
    Day view: that day's events with payment status, and the holiday if any.

    Query params:
      - date=YYYY-MM-DD (defaults to today)
    """
    today = timezone.localdate()
    day = parse_ymd(request.GET.get("date"), default=today)

    colors = get_setting("color_scheme")
    bucket = load_buckets(day, day, colors=colors).get(day)

    context = {
        "current": "calendar",
        "day": day,
        "today": today,
        "prev_day": day - timedelta(days=1),
        "next_day": day + timedelta(days=1),
        "entries": bucket.entries if bucket else [],
        "holiday": bucket.holiday if bucket else None,
    }
    return render(request, "calendar/calendar_day.html", context)
