from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.exceptions import ValidationError
from django.shortcuts import render, redirect
from django.utils import timezone
from django.views.decorators.http import require_POST

from accounts.permissions import Capability, capability_required, get_actor
from calendar_app.layout import WEEKDAY_HEADERS, build_year, grid_range
from calendar_app.queries import load_buckets
from core.forms import apply_validation_error
from events.models import Event
from events.payments import PaymentStatus, count_by_status
from events.queries import events_with_summaries, installments_due_within, overdue_installments, year_range

from .config import ALERT_SETTINGS, COLOR_SCHEME, get_setting, reset_setting, save_setting
from .forms import AlertSettingsForm, ColorSchemeForm, ReportFilterForm
from .reports import load_report


@login_required
def home(request):
    """
    Landing page.

    - Current-year stats: events, with contract, fully paid, still pending
      (partially paid + pending).
    - Year calendar with event colors.
    - Upcoming unpaid installments within the alert window, and overdue ones
      unless overdue alerts are switched off.
    """
    today = timezone.localdate()
    year = today.year
    actor = get_actor(request)

    start_d, end_d = year_range(year)
    rows = events_with_summaries(Event.objects.filter(event_date__gte=start_d, event_date__lte=end_d))
    counts = count_by_status(s for _, s in rows)

    colors = get_setting(COLOR_SCHEME)
    grid_start, _ = grid_range(year, 1)
    _, grid_end = grid_range(year, 12)
    buckets = load_buckets(grid_start, grid_end, colors=colors)

    context = {
        "current": "home",
        "today": today,
        "year": year,
        "stats": {
            "total_events": len(rows),
            "with_contract": sum(1 for e, _ in rows if e.has_contract),
            "fully_paid": counts[PaymentStatus.FULLY_PAID],
            "pending": counts[PaymentStatus.PARTIALLY_PAID] + counts[PaymentStatus.PENDING],
        },
        "months": build_year(year, buckets, today=today),
        "weekday_headers": WEEKDAY_HEADERS,
        "colors": colors,
    }

    if actor.can(Capability.VIEW_ALERTS):
        alerts = get_setting(ALERT_SETTINGS)
        context["alert_days"] = alerts["alert_days_before_due"]
        context["upcoming"] = list(installments_due_within(alerts["alert_days_before_due"], today=today))
        context["overdue"] = list(overdue_installments(today=today)) if alerts["send_overdue_alerts"] else []

    return render(request, "dashboard/home.html", context)


@capability_required(Capability.VIEW_REPORTS)
def reports(request):
    """
    Reports page.

    Query params:
      - period = month | quarter | year (default year)
      - event_type = CEV_502 | FPP_501 (default all)
    """
    form = ReportFilterForm(request.GET or None)
    data = form.cleaned_data if form.is_valid() else {}
    period = data.get("period") or "year"

    report = load_report(period=period, event_type=data.get("event_type") or "")

    context = {
        "current": "reports",
        "form": form,
        "period": period,
        "report": report,
    }
    return render(request, "dashboard/reports.html", context)


@capability_required(Capability.MANAGE_SETTINGS)
def settings_page(request):
    """
    Settings page: color scheme and alert thresholds, each saved separately.

    POST field `section` picks which form is being submitted.
    """
    actor = get_actor(request)
    color_form = ColorSchemeForm(initial=get_setting(COLOR_SCHEME))
    alert_form = AlertSettingsForm(initial=get_setting(ALERT_SETTINGS))

    if request.method == "POST":
        section = request.POST.get("section")
        if section == COLOR_SCHEME:
            color_form = ColorSchemeForm(request.POST)
            form, key = color_form, COLOR_SCHEME
        elif section == ALERT_SETTINGS:
            alert_form = AlertSettingsForm(request.POST)
            form, key = alert_form, ALERT_SETTINGS
        else:
            messages.error(request, "Unknown settings section.")
            return redirect("dashboard:settings")

        if form.is_valid():
            try:
                save_setting(actor, key, form.cleaned_data)
            except ValidationError as exc:
                apply_validation_error(form, exc)
            else:
                messages.success(request, "Settings saved.")
                return redirect("dashboard:settings")

    context = {
        "current": "settings",
        "color_form": color_form,
        "alert_form": alert_form,
    }
    return render(request, "dashboard/settings.html", context)


@require_POST
@capability_required(Capability.MANAGE_SETTINGS)
def settings_reset(request, key: str):
    if key not in (COLOR_SCHEME, ALERT_SETTINGS):
        messages.error(request, "Unknown setting.")
        return redirect("dashboard:settings")

    reset_setting(get_actor(request), key)
    messages.success(request, "Defaults restored.")
    return redirect("dashboard:settings")
