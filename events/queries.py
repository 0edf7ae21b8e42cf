from datetime import date, timedelta
from typing import Iterable, List, Tuple

from django.utils import timezone

from .models import Event, ContractInstallment, InstallmentStatus
from .payments import PaymentSummary, summarize_events


def month_range(year: int, month: int) -> Tuple[date, date]:
    """Inclusive [first day, last day] of a month."""
    start = date(year, month, 1)
    if month == 12:
        end = date(year + 1, 1, 1) - timedelta(days=1)
    else:
        end = date(year, month + 1, 1) - timedelta(days=1)
    return start, end


def quarter_range(d: date) -> Tuple[date, date]:
    first_month = 3 * ((d.month - 1) // 3) + 1
    start, _ = month_range(d.year, first_month)
    _, end = month_range(d.year, first_month + 2)
    return start, end


def year_range(year: int) -> Tuple[date, date]:
    return date(year, 1, 1), date(year, 12, 31)


def get_events_in_range(start_d: date, end_d: date):
    """
    Events whose event_date falls in the inclusive range [start_d, end_d].
    """
    return (
        Event.objects
        .filter(event_date__gte=start_d, event_date__lte=end_d)
        .order_by("event_date", "name")
    )


def installments_for(events: Iterable[Event]):
    """All installments of the given events in a single query."""
    ids = [e.id for e in events]
    if not ids:
        return ContractInstallment.objects.none()
    return ContractInstallment.objects.filter(event_id__in=ids).order_by("event_id", "installment_number")


def events_with_summaries(events) -> List[Tuple[Event, PaymentSummary]]:
    """
    Bulk-fetch installments for `events` and pair each event with its
    PaymentSummary, preserving the incoming order.
    """
    events = list(events)
    summaries = summarize_events(events, installments_for(events))
    return [(e, summaries[e.id]) for e in events]


def installments_due_within(days: int, today: date = None):
    """
    Unpaid installments due between today and today + days (inclusive).

    Read-only query for the external alert scheduler.
    """
    today = today or timezone.localdate()
    return (
        ContractInstallment.objects
        .select_related("event")
        .filter(
            payment_status=InstallmentStatus.UNPAID,
            due_date__gte=today,
            due_date__lte=today + timedelta(days=days),
        )
        .order_by("due_date", "event__name", "installment_number")
    )


def overdue_installments(today: date = None):
    """Unpaid installments whose due date has already passed."""
    today = today or timezone.localdate()
    return (
        ContractInstallment.objects
        .select_related("event")
        .filter(payment_status=InstallmentStatus.UNPAID, due_date__lt=today)
        .order_by("due_date", "event__name", "installment_number")
    )
