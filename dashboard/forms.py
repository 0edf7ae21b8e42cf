from django import forms

from events.models import EventType

from .config import DEFAULT_COLORS, ALERT_BOUNDS
from .reports import PERIODS

COLOR_LABELS = {
    "paid": "Fully paid",
    "with_contract": "With contract / confirmed",
    "in_progress": "Reservation in progress",
    "pre_reservation": "Pre-reservation",
    "no_reservation": "Empty day",
}


class ColorSchemeForm(forms.Form):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for name in DEFAULT_COLORS:
            self.fields[name] = forms.RegexField(
                regex=r"^#[0-9A-Fa-f]{6}$",
                label=COLOR_LABELS.get(name, name),
                widget=forms.TextInput(attrs={"type": "color", "class": "h-8 w-16"}),
                error_messages={"invalid": "Use a #RRGGBB color."},
            )


class AlertSettingsForm(forms.Form):
    alert_days_before_due = forms.IntegerField(
        min_value=ALERT_BOUNDS["alert_days_before_due"][0],
        max_value=ALERT_BOUNDS["alert_days_before_due"][1],
        label="Days before due date",
    )
    send_overdue_alerts = forms.BooleanField(required=False, label="Alert on overdue installments")
    report_day_of_month = forms.IntegerField(
        min_value=ALERT_BOUNDS["report_day_of_month"][0],
        max_value=ALERT_BOUNDS["report_day_of_month"][1],
        label="Monthly report day",
    )


class ReportFilterForm(forms.Form):
    period = forms.ChoiceField(choices=list(PERIODS.items()), required=False, initial="year")
    event_type = forms.ChoiceField(choices=[("", "All types")] + EventType.choices, required=False)
