from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, Mapping

from django.db import models

"""
events.payments

The single place where an event's payment status is derived.

Every page that shows a payment label or color (home stats, event list,
event detail, calendar, reports) calls aggregate() or summarize_events();
none of them recompute status on their own.

aggregate() is pure: it takes already-validated installment rows (model
instances, dicts, or anything exposing `amount` and `payment_status`) and
returns a PaymentSummary. Sanitizing input is the writer's job
(events.services), not this module's.
"""

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

PAID = "PAID"
UNPAID = "UNPAID"


class PaymentStatus(models.TextChoices):
    NO_CONTRACT = "NO_CONTRACT", "No contract"
    FULLY_PAID = "FULLY_PAID", "Paid"
    PARTIALLY_PAID = "PARTIALLY_PAID", "Partially paid"
    PENDING = "PENDING", "Pending"


BADGE_CLASSES = {
    PaymentStatus.NO_CONTRACT: "badge-muted",
    PaymentStatus.FULLY_PAID: "badge-paid",
    PaymentStatus.PARTIALLY_PAID: "badge-partial",
    PaymentStatus.PENDING: "badge-pending",
}


def to_money(value) -> Decimal:
    """
    Normalize an amount to a 2-place Decimal.

    Floats go through str() so binary noise (0.1 + 0.2) never reaches a sum.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        d = value
    elif isinstance(value, float):
        d = Decimal(str(value))
    else:
        d = Decimal(value)
    return d.quantize(CENT, rounding=ROUND_HALF_UP)


def _field(item: Any, name: str):
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


@dataclass(frozen=True)
class PaymentSummary:
    total_amount: Decimal
    paid_amount: Decimal
    outstanding_amount: Decimal
    installment_count: int
    paid_installment_count: int
    status: str
    awaiting_schedule: bool = False

    @property
    def paid_percentage(self) -> int:
        """Share of the contracted total already paid, 0..100. Zero total -> 0."""
        if self.total_amount == ZERO:
            return 0
        pct = (self.paid_amount / self.total_amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        return int(pct)

    @property
    def label(self) -> str:
        if self.awaiting_schedule:
            return "Contract awaiting schedule"
        return PaymentStatus(self.status).label

    @property
    def badge_class(self) -> str:
        return BADGE_CLASSES[PaymentStatus(self.status)]

    @property
    def is_fully_paid(self) -> bool:
        return self.status == PaymentStatus.FULLY_PAID

    @property
    def has_outstanding(self) -> bool:
        return self.status in (PaymentStatus.PARTIALLY_PAID, PaymentStatus.PENDING)


EMPTY_SUMMARY = PaymentSummary(
    total_amount=ZERO,
    paid_amount=ZERO,
    outstanding_amount=ZERO,
    installment_count=0,
    paid_installment_count=0,
    status=PaymentStatus.NO_CONTRACT.value,
)


def aggregate(installments: Iterable[Any], has_contract: bool = True) -> PaymentSummary:
    """
    Reduce one event's installments into a PaymentSummary.

    Status precedence:
        1. NO_CONTRACT     no contract flag, or flag set with zero installments
        2. FULLY_PAID      every installment PAID
        3. PARTIALLY_PAID  at least one PAID and one UNPAID
        4. PENDING         none PAID

    Totals are always computed from the rows given, whatever the status.

    Example:
        [{"amount": 1000, "payment_status": "PAID"},
         {"amount": 500, "payment_status": "UNPAID"}]
        -> total 1500.00, paid 1000.00, outstanding 500.00, PARTIALLY_PAID
    """
    total = ZERO
    paid = ZERO
    count = 0
    paid_count = 0

    for inst in installments:
        amount = to_money(_field(inst, "amount"))
        total += amount
        count += 1
        if _field(inst, "payment_status") == PAID:
            paid += amount
            paid_count += 1

    if not has_contract or count == 0:
        status = PaymentStatus.NO_CONTRACT
    elif paid_count == count:
        status = PaymentStatus.FULLY_PAID
    elif paid_count > 0:
        status = PaymentStatus.PARTIALLY_PAID
    else:
        status = PaymentStatus.PENDING

    return PaymentSummary(
        total_amount=total,
        paid_amount=paid,
        outstanding_amount=total - paid,
        installment_count=count,
        paid_installment_count=paid_count,
        status=status.value,
        awaiting_schedule=bool(has_contract) and count == 0,
    )


def group_installments_by_event(installments: Iterable[Any]) -> Dict[Any, list]:
    """
    Group installment rows by their event id.
    Returns dict[event_id] -> list[installment]
    """
    out = defaultdict(list)
    for inst in installments:
        out[_field(inst, "event_id")].append(inst)
    return out


def summarize_events(events: Iterable[Any], installments: Iterable[Any]) -> Dict[Any, PaymentSummary]:
    """
    Bulk version of aggregate() for listing pages.

    Takes events and the installments fetched for them in one query, and
    returns dict[event_id] -> PaymentSummary (every event gets an entry).
    """
    by_event = group_installments_by_event(installments)
    return {
        _field(e, "id"): aggregate(by_event.get(_field(e, "id"), []), has_contract=bool(_field(e, "has_contract")))
        for e in events
    }


def count_by_status(summaries: Iterable[PaymentSummary]) -> Dict[str, int]:
    """Number of events per PaymentStatus; every status key is present."""
    counts = {status.value: 0 for status in PaymentStatus}
    for s in summaries:
        counts[s.status] += 1
    return counts
