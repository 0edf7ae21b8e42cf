from django import forms
from django.core.exceptions import ValidationError
from django.forms import formset_factory

from .models import Event, InstallmentStatus, EventType, ReservationStatus
from .payments import PaymentStatus

FIELD_CLASS = "w-full border rounded px-2 py-1 text-sm"


class EventForm(forms.ModelForm):
    # Version the form was loaded at; the service rejects the save if it moved.
    version = forms.IntegerField(widget=forms.HiddenInput, required=False)
    # A color input always posts a value, so the override only applies when ticked.
    use_color_override = forms.BooleanField(required=False, label="Use custom calendar color")

    field_order = [
        "name", "event_date", "event_type", "event_category",
        "reservation_status", "has_contract", "estimated_audience",
        "observations", "use_color_override", "color_override",
    ]

    class Meta:
        model = Event
        fields = [
            "name", "event_date", "event_type", "event_category",
            "reservation_status", "has_contract", "estimated_audience",
            "observations", "color_override",
        ]
        widgets = {
            "name": forms.TextInput(attrs={"class": FIELD_CLASS}),
            "event_date": forms.DateInput(attrs={"type": "date", "class": FIELD_CLASS}),
            "estimated_audience": forms.NumberInput(attrs={"class": FIELD_CLASS, "min": "0", "step": "1"}),
            "observations": forms.Textarea(attrs={"rows": 3, "class": FIELD_CLASS}),
            "color_override": forms.TextInput(attrs={"type": "color", "class": "h-8 w-16"}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.instance and self.instance.pk and "version" not in self.initial:
            self.initial["version"] = self.instance.version
        if self.instance and self.instance.color_override and "use_color_override" not in self.initial:
            self.initial["use_color_override"] = True

    def clean_name(self):
        name = (self.cleaned_data.get("name") or "").strip()
        if len(name) < 3:
            raise ValidationError("Name must have at least 3 characters.")
        return name

    def clean(self):
        cleaned = super().clean()
        if not cleaned.get("use_color_override"):
            cleaned["color_override"] = ""
            self.errors.pop("color_override", None)
        return cleaned

    def event_data(self) -> dict:
        """cleaned_data minus the form-only fields."""
        return {
            k: v for k, v in self.cleaned_data.items()
            if k not in ("version", "use_color_override")
        }


class InstallmentForm(forms.Form):
    amount = forms.DecimalField(
        max_digits=12,
        decimal_places=2,
        widget=forms.NumberInput(attrs={"class": "text-right " + FIELD_CLASS, "min": "0", "step": "0.01"}),
    )
    due_date = forms.DateField(widget=forms.DateInput(attrs={"type": "date", "class": FIELD_CLASS}))
    payment_status = forms.ChoiceField(
        choices=InstallmentStatus.choices,
        initial=InstallmentStatus.UNPAID,
    )
    paid_at = forms.DateField(required=False, widget=forms.DateInput(attrs={"type": "date", "class": FIELD_CLASS}))
    notes = forms.CharField(max_length=255, required=False, widget=forms.TextInput(attrs={"class": FIELD_CLASS}))

    def clean_amount(self):
        amount = self.cleaned_data.get("amount")
        if amount is None:
            return amount
        if amount < 0:
            raise ValidationError("Amount cannot be negative.")
        return amount


# Rows are submitted in display order; the service renumbers them 1..N.
InstallmentFormSet = formset_factory(
    InstallmentForm,
    extra=3,
    can_delete=True,
)


def installment_initial(event: Event) -> list:
    """Formset initial data from an event's stored installments."""
    return [
        {
            "amount": inst.amount,
            "due_date": inst.due_date,
            "payment_status": inst.payment_status,
            "paid_at": inst.paid_at,
            "notes": inst.notes,
        }
        for inst in event.installments.order_by("installment_number")
    ]


def installment_rows(formset) -> list:
    """cleaned_data of every filled, non-deleted row, in submitted order."""
    rows = []
    for form in formset.forms:
        data = getattr(form, "cleaned_data", None)
        if not data or data.get("DELETE"):
            continue
        rows.append(data)
    return rows


class EventFilterForm(forms.Form):
    q = forms.CharField(required=False, label="Search")
    event_type = forms.ChoiceField(
        required=False,
        choices=[("", "All types")] + EventType.choices,
    )
    reservation_status = forms.ChoiceField(
        required=False,
        choices=[("", "All reservations")] + ReservationStatus.choices,
    )
    payment_status = forms.ChoiceField(
        required=False,
        choices=[("", "All payments")] + PaymentStatus.choices,
    )
    year = forms.IntegerField(required=False, min_value=1900, max_value=2999)
