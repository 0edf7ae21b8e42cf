from datetime import date
from typing import Dict, Mapping, Optional

from events.payments import summarize_events
from events.queries import get_events_in_range, installments_for

from .bucketing import DayBucket, bucket_by_date
from .models import Holiday


def get_holidays_in_range(start_d: date, end_d: date):
    return Holiday.objects.filter(date__gte=start_d, date__lte=end_d).order_by("date", "name")


def load_buckets(start_d: date, end_d: date, colors: Optional[Mapping[str, str]] = None) -> Dict[date, DayBucket]:
    """
    Everything a calendar page needs for [start_d, end_d] in three queries:
    events, their installments, holidays.
    """
    events = list(get_events_in_range(start_d, end_d))
    summaries = summarize_events(events, installments_for(events))
    holidays = get_holidays_in_range(start_d, end_d)
    return bucket_by_date(events, holidays, summaries=summaries, colors=colors)
