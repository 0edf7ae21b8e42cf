from django import forms
from django.core.exceptions import ValidationError

from events.models import Event

from .models import Expense, ExpenseCategory

FIELD_CLASS = "w-full border rounded px-2 py-1 text-sm"


class ExpenseForm(forms.ModelForm):
    class Meta:
        model = Expense
        fields = ["description", "category", "amount", "expense_date", "event", "is_recurring", "notes"]
        widgets = {
            "description": forms.TextInput(attrs={"class": FIELD_CLASS}),
            "amount": forms.NumberInput(attrs={"class": "text-right " + FIELD_CLASS, "min": "0.01", "step": "0.01"}),
            "expense_date": forms.DateInput(attrs={"type": "date", "class": FIELD_CLASS}),
            "notes": forms.Textarea(attrs={"rows": 2, "class": FIELD_CLASS}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["event"].queryset = Event.objects.order_by("-event_date", "name")
        self.fields["event"].empty_label = "General expense (no event)"

    def clean_amount(self):
        amount = self.cleaned_data.get("amount")
        if amount is None:
            return amount
        if amount <= 0:
            raise ValidationError("Amount must be greater than zero.")
        return amount


class ExpenseFilterForm(forms.Form):
    month = forms.CharField(required=False, widget=forms.TextInput(attrs={"type": "month"}))
    q = forms.CharField(required=False, label="Search")
    category = forms.ChoiceField(required=False, choices=[("", "All categories")] + ExpenseCategory.choices)
