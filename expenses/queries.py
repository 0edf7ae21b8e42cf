from collections import OrderedDict
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List

from django.db.models import Q

from events.payments import ZERO, to_money
from events.queries import month_range

from .models import Expense, ExpenseCategory


def get_expenses_for_month(year: int, month: int, search: str = "", category: str = ""):
    """
    Expenses dated within one month, optionally narrowed by a description
    search and a category code.
    """
    start_d, end_d = month_range(year, month)
    qs = (
        Expense.objects
        .select_related("event")
        .filter(expense_date__gte=start_d, expense_date__lte=end_d)
    )
    if search:
        qs = qs.filter(Q(description__icontains=search) | Q(notes__icontains=search))
    if category:
        qs = qs.filter(category=category)
    return qs.order_by("-expense_date", "-id")


def total_amount(expenses: Iterable[Expense]) -> Decimal:
    return sum((to_money(e.amount) for e in expenses), ZERO)


def totals_by_category(expenses: Iterable[Expense]) -> List[dict]:
    """
    Per-category totals of the given expenses, largest first.

    Each row: {"category", "label", "total", "count", "share"} where share is
    the integer percentage of the overall total (0 when the total is 0).
    """
    buckets = OrderedDict()
    for e in expenses:
        row = buckets.setdefault(e.category, {"total": ZERO, "count": 0})
        row["total"] += to_money(e.amount)
        row["count"] += 1

    grand = sum((r["total"] for r in buckets.values()), ZERO)
    labels = dict(ExpenseCategory.choices)

    out = []
    for code, row in buckets.items():
        share = int((row["total"] / grand * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)) if grand else 0
        out.append({
            "category": code,
            "label": labels.get(code, code),
            "total": row["total"],
            "count": row["count"],
            "share": share,
        })
    out.sort(key=lambda r: (-r["total"], r["category"]))
    return out
