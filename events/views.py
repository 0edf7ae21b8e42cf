from django.contrib import messages
from django.core.exceptions import ValidationError
from django.db.models import Q
from django.shortcuts import render, redirect, get_object_or_404
from django.utils import timezone
from django.views.decorators.http import require_POST

from accounts.permissions import Capability, capability_required, get_actor
from core.exceptions import ConflictError

from .forms import (
    EventForm,
    EventFilterForm,
    InstallmentFormSet,
    installment_initial,
    installment_rows,
)
from .models import Event, ContractInstallment, InstallmentStatus
from .payments import aggregate, count_by_status
from .queries import events_with_summaries
from . import services


def _filtered_events(filter_form):
    qs = Event.objects.all()
    if not filter_form.is_valid():
        return qs

    data = filter_form.cleaned_data
    if data.get("q"):
        qs = qs.filter(Q(name__icontains=data["q"]) | Q(observations__icontains=data["q"]))
    if data.get("event_type"):
        qs = qs.filter(event_type=data["event_type"])
    if data.get("reservation_status"):
        qs = qs.filter(reservation_status=data["reservation_status"])
    if data.get("year"):
        qs = qs.filter(event_date__year=data["year"])
    return qs


@capability_required(Capability.VIEW_EVENTS)
def event_list(request):
    """
    Events page.

    - GET filters: q (name / observations), event_type, reservation_status,
      payment_status, year.
    - Payment status is derived per event from one bulk installment fetch,
      so the payment filter runs after aggregation.
    """
    filter_form = EventFilterForm(request.GET or None)
    rows = events_with_summaries(_filtered_events(filter_form).order_by("event_date", "name"))

    payment_filter = filter_form.cleaned_data.get("payment_status") if filter_form.is_valid() else ""
    if payment_filter:
        rows = [(e, s) for e, s in rows if s.status == payment_filter]

    context = {
        "current": "events",
        "filter_form": filter_form,
        "rows": rows,
        "status_counts": count_by_status(s for _, s in rows),
    }
    return render(request, "events/event_list.html", context)


@capability_required(Capability.VIEW_EVENTS)
def event_detail(request, pk: int):
    event = get_object_or_404(Event, pk=pk)
    installments = list(event.installments.order_by("installment_number"))
    today = timezone.localdate()

    context = {
        "current": "events",
        "event": event,
        "summary": aggregate(installments, has_contract=event.has_contract),
        "installments": [(inst, inst.is_overdue(today)) for inst in installments],
        "expenses": event.expenses.order_by("-expense_date"),
    }
    return render(request, "events/event_detail.html", context)


def _event_form_page(request, event=None):
    """
    Shared create/edit handler: event form + installment formset saved
    together through services.save_event().
    """
    creating = event is None

    if request.method == "POST":
        form = EventForm(request.POST, instance=event)
        formset = InstallmentFormSet(request.POST, prefix="installments")
        contract_on = form.is_valid() and form.cleaned_data.get("has_contract")
        formset_ok = formset.is_valid() if contract_on else True

        if form.is_valid() and formset_ok:
            rows = installment_rows(formset) if contract_on else []
            try:
                saved = services.save_event(
                    get_actor(request),
                    form.event_data(),
                    installments=rows,
                    expected_version=form.cleaned_data.get("version"),
                    event=event,
                )
            except ConflictError as exc:
                form.add_error(None, str(exc))
                status = 409
            except ValidationError as exc:
                form.add_error(None, exc.messages)
                status = 400
            else:
                messages.success(request, "Event created." if creating else "Event saved.")
                return redirect("events:event_detail", pk=saved.pk)
        else:
            status = 400
    else:
        status = 200
        if creating:
            initial = {"event_date": request.GET.get("date") or timezone.localdate()}
            form = EventForm(initial=initial)
            formset = InstallmentFormSet(prefix="installments")
        else:
            form = EventForm(instance=event)
            formset = InstallmentFormSet(prefix="installments", initial=installment_initial(event))

    context = {
        "current": "events",
        "form": form,
        "formset": formset,
        "event": event,
    }
    return render(request, "events/event_form.html", context, status=status)


@capability_required(Capability.CREATE_EVENT)
def event_create(request):
    return _event_form_page(request)


@capability_required(Capability.EDIT_EVENT)
def event_edit(request, pk: int):
    event = get_object_or_404(Event, pk=pk)
    return _event_form_page(request, event=event)


@capability_required(Capability.DELETE_EVENT)
def event_delete(request, pk: int):
    event = get_object_or_404(Event, pk=pk)

    if request.method == "POST":
        services.delete_event(get_actor(request), event)
        messages.success(request, f"Event “{event.name}” deleted.")
        return redirect("events:event_list")

    return render(request, "events/event_confirm_delete.html", {"current": "events", "event": event})


@require_POST
@capability_required(Capability.EDIT_EVENT)
def installment_toggle(request, pk: int, number: int):
    """
    Quick action on the event detail page: mark one installment paid/unpaid.
    """
    installment = get_object_or_404(
        ContractInstallment.objects.select_related("event"),
        event_id=pk,
        installment_number=number,
    )
    status = InstallmentStatus.UNPAID if installment.is_paid else InstallmentStatus.PAID
    services.set_installment_status(
        get_actor(request),
        installment,
        status,
        paid_on=timezone.localdate() if status == InstallmentStatus.PAID else None,
    )
    messages.success(request, f"Installment {number} marked as {installment.get_payment_status_display().lower()}.")
    return redirect("events:event_detail", pk=pk)
