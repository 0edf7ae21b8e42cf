from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Optional, Tuple

from django.utils import timezone

from events.models import EventCategory, EventType, ReservationStatus
from events.payments import ZERO, count_by_status, summarize_events, to_money
from events.queries import month_range, quarter_range, year_range, get_events_in_range, installments_for
from expenses.models import Expense
from expenses.queries import totals_by_category

"""
dashboard.reports

Period report: event counts, money in/out and the breakdowns shown on the
reports page.

Revenue always comes from events.payments (one PaymentSummary per event);
this module only adds summaries up.

    contracted  = sum of every installment
    paid        = sum of PAID installments
    outstanding = contracted - paid
    net_result  = paid - expenses   (cash view: unpaid contracts don't count)
"""

PERIODS = OrderedDict([
    ("month", "This month"),
    ("quarter", "This quarter"),
    ("year", "This year"),
])


def period_range(period: str, today: Optional[date] = None) -> Tuple[date, date]:
    """
    Inclusive date range of the period containing `today`.
    Unknown periods fall back to the whole year.
    """
    today = today or timezone.localdate()
    if period == "month":
        return month_range(today.year, today.month)
    if period == "quarter":
        return quarter_range(today)
    return year_range(today.year)


def _share(part: Decimal, whole: Decimal) -> int:
    if not whole:
        return 0
    return int((part / whole * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@dataclass
class Report:
    start: date
    end: date
    event_type: str = ""

    total_events: int = 0
    events_by_type: Dict[str, int] = field(default_factory=dict)
    events_with_contract: int = 0
    events_by_reservation: Dict[str, int] = field(default_factory=dict)
    total_audience: int = 0

    contracted: Decimal = ZERO
    paid: Decimal = ZERO
    outstanding: Decimal = ZERO
    expenses: Decimal = ZERO

    payment_status_counts: Dict[str, int] = field(default_factory=dict)
    by_category: List[dict] = field(default_factory=list)
    by_month: List[dict] = field(default_factory=list)
    expenses_by_category: List[dict] = field(default_factory=list)

    @property
    def net_result(self) -> Decimal:
        return self.paid - self.expenses

    @property
    def is_profit(self) -> bool:
        return self.net_result >= ZERO


def build_report(
    events: Iterable[Any],
    installments: Iterable[Any],
    expenses: Iterable[Any],
    start: date,
    end: date,
    event_type: str = "",
) -> Report:
    """
    Pure: aggregate already-fetched rows for [start, end].

    - events outside the range (or of another type when event_type is set)
      are ignored, and so are their installments
    - expenses are filtered by date only; they are venue-wide
    """
    events = [
        e for e in events
        if start <= e.event_date <= end and (not event_type or e.event_type == event_type)
    ]
    expenses = [x for x in expenses if start <= x.expense_date <= end]
    summaries = summarize_events(events, installments)

    report = Report(start=start, end=end, event_type=event_type)
    report.total_events = len(events)
    report.events_by_type = {code: 0 for code in EventType.values}
    report.events_by_reservation = {code: 0 for code in ReservationStatus.values}

    categories: Dict[str, dict] = {}
    months: Dict[str, dict] = {}

    for e in events:
        s = summaries[e.id]
        report.events_by_type[e.event_type] = report.events_by_type.get(e.event_type, 0) + 1
        report.events_by_reservation[e.reservation_status] = report.events_by_reservation.get(e.reservation_status, 0) + 1
        if e.has_contract:
            report.events_with_contract += 1
        report.total_audience += e.estimated_audience or 0

        report.contracted += s.total_amount
        report.paid += s.paid_amount

        cat = categories.setdefault(e.event_category, {"count": 0, "revenue": ZERO})
        cat["count"] += 1
        cat["revenue"] += s.paid_amount

        month = months.setdefault(e.event_date.strftime("%Y-%m"), {"events": 0, "revenue": ZERO, "expenses": ZERO})
        month["events"] += 1
        month["revenue"] += s.paid_amount

    for x in expenses:
        amount = to_money(x.amount)
        report.expenses += amount
        month = months.setdefault(x.expense_date.strftime("%Y-%m"), {"events": 0, "revenue": ZERO, "expenses": ZERO})
        month["expenses"] += amount

    report.outstanding = report.contracted - report.paid
    report.payment_status_counts = count_by_status(summaries.values())

    labels = dict(EventCategory.choices)
    report.by_category = sorted(
        (
            {
                "category": code,
                "label": labels.get(code, code),
                "count": row["count"],
                "revenue": row["revenue"],
                "share": _share(row["revenue"], report.paid),
            }
            for code, row in categories.items()
        ),
        key=lambda r: (-r["revenue"], r["category"]),
    )
    report.by_month = [
        {"month": key, **months[key]}
        for key in sorted(months)
    ]
    report.expenses_by_category = totals_by_category(expenses)
    return report


def load_report(period: str = "year", event_type: str = "", today: Optional[date] = None) -> Report:
    """
    Fetch the period's events, installments and expenses, then build_report().
    """
    start, end = period_range(period, today)
    events = get_events_in_range(start, end)
    if event_type:
        events = events.filter(event_type=event_type)
    events = list(events)

    expenses = Expense.objects.filter(expense_date__gte=start, expense_date__lte=end)
    return build_report(events, installments_for(events), expenses, start, end, event_type=event_type)
