from django.contrib import messages
from django.core.exceptions import ValidationError
from django.shortcuts import render, redirect, get_object_or_404
from django.urls import reverse
from django.utils import timezone

from accounts.permissions import Capability, capability_required, get_actor
from calendar_app.dates import parse_ym
from core.forms import apply_validation_error

from .forms import ExpenseForm, ExpenseFilterForm
from .models import Expense
from .queries import get_expenses_for_month, total_amount, totals_by_category
from . import services


@capability_required(Capability.VIEW_EXPENSES)
def expense_list(request):
    """
    Monthly expenses page.

    - month (YYYY-MM, default current month), q (description search) and
      category narrow the list.
    - Shows the filtered total and a per-category breakdown.
    """
    current_month = timezone.localdate().replace(day=1)
    filter_form = ExpenseFilterForm(request.GET or None)
    data = filter_form.cleaned_data if filter_form.is_valid() else {}

    selected_month = parse_ym(data.get("month"), current_month)
    expenses = list(get_expenses_for_month(
        selected_month.year,
        selected_month.month,
        search=(data.get("q") or "").strip(),
        category=data.get("category") or "",
    ))

    context = {
        "current": "expenses",
        "filter_form": filter_form,
        "selected_month": selected_month,
        "expenses": expenses,
        "total": total_amount(expenses),
        "by_category": totals_by_category(expenses),
    }
    return render(request, "expenses/expense_list.html", context)


def _expense_form_page(request, expense=None):
    if request.method == "POST":
        form = ExpenseForm(request.POST, instance=expense)
        if form.is_valid():
            try:
                saved = services.save_expense(get_actor(request), form.cleaned_data, expense=expense)
            except ValidationError as exc:
                apply_validation_error(form, exc)
            else:
                messages.success(request, "Expense saved.")
                return redirect(f"{reverse('expenses:expense_list')}?month={saved.expense_date:%Y-%m}")
    else:
        initial = {}
        if expense is None and request.GET.get("event"):
            initial["event"] = request.GET["event"]
        form = ExpenseForm(instance=expense, initial=initial)

    return render(request, "expenses/expense_form.html", {"current": "expenses", "form": form, "expense": expense})


@capability_required(Capability.CREATE_EXPENSE)
def expense_create(request):
    return _expense_form_page(request)


@capability_required(Capability.EDIT_EXPENSE)
def expense_edit(request, pk: int):
    expense = get_object_or_404(Expense, pk=pk)
    return _expense_form_page(request, expense=expense)


@capability_required(Capability.DELETE_EXPENSE)
def expense_delete(request, pk: int):
    expense = get_object_or_404(Expense, pk=pk)

    if request.method == "POST":
        services.delete_expense(get_actor(request), expense)
        messages.success(request, "Expense deleted.")
        return redirect("expenses:expense_list")

    return render(request, "expenses/expense_confirm_delete.html", {"current": "expenses", "expense": expense})
