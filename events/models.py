from django.conf import settings
from django.core.validators import MinLengthValidator, MinValueValidator, RegexValidator
from django.db import models
from django.utils import timezone
from decimal import Decimal

"""
events.models

Holds the venue's event calendar and contract payment schedules.

Core concepts:
- Event: one bookable date (type, category, reservation progress, contract flag).
- ContractInstallment: one scheduled payment of an event's contract.

Note:
Payment status is never stored on Event. It is derived from the installment
rows by events.payments.aggregate() so every page agrees on it.
"""

HEX_COLOR = RegexValidator(r"^#[0-9A-Fa-f]{6}$", "Use a #RRGGBB color.")


class EventType(models.TextChoices):
    CEV_502 = "CEV_502", "CEV – 502"
    FPP_501 = "FPP_501", "FPP – 501"


class EventCategory(models.TextChoices):
    SHOW = "SHOW", "Show"
    CORPORATE = "CORPORATE", "Corporate"
    FAIR = "FAIR", "Fair / Exhibition"
    SPORTS = "SPORTS", "Sports"
    PRIVATE = "PRIVATE", "Private party"
    OTHER = "OTHER", "Other"


class ReservationStatus(models.TextChoices):
    NO_RESERVATION = "NO_RESERVATION", "No reservation"
    PRE_RESERVATION = "PRE_RESERVATION", "Pre-reservation"
    IN_PROGRESS = "IN_PROGRESS", "Reservation in progress"
    CONFIRMED = "CONFIRMED", "Reservation confirmed"


class InstallmentStatus(models.TextChoices):
    PAID = "PAID", "Paid"
    UNPAID = "UNPAID", "Unpaid"


class Event(models.Model):
    name = models.CharField(max_length=255, validators=[MinLengthValidator(3)])
    event_date = models.DateField(default=timezone.localdate)
    event_type = models.CharField(max_length=20, choices=EventType.choices, default=EventType.CEV_502)
    event_category = models.CharField(max_length=20, choices=EventCategory.choices, default=EventCategory.OTHER)
    reservation_status = models.CharField(
        max_length=20,
        choices=ReservationStatus.choices,
        default=ReservationStatus.NO_RESERVATION,
    )
    has_contract = models.BooleanField(default=False)
    estimated_audience = models.PositiveIntegerField(null=True, blank=True)
    observations = models.TextField(blank=True)

    # optional: force a display color regardless of payment/reservation state
    color_override = models.CharField(max_length=7, blank=True, validators=[HEX_COLOR])

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="events_created",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    # Bumped on every save; a save carrying an older value is rejected as stale.
    version = models.PositiveIntegerField(default=1)

    class Meta:
        ordering = ["event_date", "name"]
        indexes = [
            models.Index(fields=["event_date"], name="event_date_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.event_date})"

    @property
    def payment_summary(self):
        """
        PaymentSummary for this event from its stored installments.

        Listing pages should use events.payments.summarize_events() on a bulk
        fetch instead of touching this per row.
        """
        from .payments import aggregate

        return aggregate(self.installments.all(), has_contract=self.has_contract)


class ContractInstallment(models.Model):
    """
    One scheduled payment of an event's contract.

    installment_number is 1..N within an event with no gaps; the only writer
    is events.services.replace_installments(), which renumbers on every save.
    """
    event = models.ForeignKey(
        "Event",
        related_name="installments",
        on_delete=models.CASCADE,
    )
    installment_number = models.PositiveIntegerField()
    amount = models.DecimalField(
        max_digits=12, decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    due_date = models.DateField()
    payment_status = models.CharField(
        max_length=10,
        choices=InstallmentStatus.choices,
        default=InstallmentStatus.UNPAID,
    )
    paid_at = models.DateField(null=True, blank=True)
    notes = models.CharField(max_length=255, blank=True)

    class Meta:
        ordering = ["event_id", "installment_number"]
        constraints = [
            models.UniqueConstraint(
                fields=["event", "installment_number"],
                name="unique_installment_number_per_event",
            )
        ]

    def __str__(self):
        return f"{self.event.name} #{self.installment_number} ({self.get_payment_status_display()})"

    @property
    def is_paid(self) -> bool:
        return self.payment_status == InstallmentStatus.PAID

    def is_overdue(self, today=None) -> bool:
        today = today or timezone.localdate()
        return not self.is_paid and self.due_date < today
