from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone


class ExpenseCategory(models.TextChoices):
    STAFF = "STAFF", "Staff"
    MAINTENANCE = "MAINTENANCE", "Maintenance"
    UTILITIES = "UTILITIES", "Utilities"
    MARKETING = "MARKETING", "Marketing"
    SUPPLIES = "SUPPLIES", "Supplies"
    SECURITY = "SECURITY", "Security"
    TAXES = "TAXES", "Taxes"
    OTHER = "OTHER", "Other"


class Expense(models.Model):
    description = models.CharField(max_length=255)
    category = models.CharField(max_length=20, choices=ExpenseCategory.choices, default=ExpenseCategory.OTHER)
    amount = models.DecimalField(
        max_digits=12, decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    expense_date = models.DateField(default=timezone.localdate)

    # Deleting the event keeps the expense as a general (venue-wide) expense.
    event = models.ForeignKey(
        "events.Event",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="expenses",
    )
    is_recurring = models.BooleanField(default=False)
    notes = models.TextField(blank=True)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="expenses_created",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-expense_date", "-id"]

    def __str__(self):
        return f"{self.expense_date} {self.description} ({self.amount})"
