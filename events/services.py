"""
Events service module.

Write-side business logic for events and their contract installments.

Every function takes the request's Actor first and checks the capability
itself; views never decide on their own whether a write is allowed.

Installments are saved as a full replace-set: delete every row of the event,
insert the new list renumbered 1..N. The delete and the insert run in one
transaction with the event row locked, and the event's version is compared
and bumped in the same transaction so a stale form is rejected instead of
silently overwriting someone else's save.
"""
import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, List, Mapping, Optional

from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction
from django.db.models import F
from django.utils import timezone

from accounts.permissions import Actor, Capability
from core.exceptions import ConflictError, TransientStoreError

from .models import Event, ContractInstallment, InstallmentStatus
from .payments import to_money

logger = logging.getLogger(__name__)

EVENT_FIELDS = (
    "name",
    "event_date",
    "event_type",
    "event_category",
    "reservation_status",
    "has_contract",
    "estimated_audience",
    "observations",
    "color_override",
)


@dataclass(frozen=True)
class InstallmentInput:
    """One validated row headed for the installments table."""
    amount: Decimal
    due_date: date
    payment_status: str = InstallmentStatus.UNPAID
    paid_at: Optional[date] = None
    notes: str = ""


def _get(row: Any, name: str, default=None):
    if isinstance(row, Mapping):
        return row.get(name, default)
    return getattr(row, name, default)


def clean_installments(rows: Iterable[Any]) -> List[InstallmentInput]:
    """
    Validate raw installment rows (dicts, form cleaned_data, model instances).

    Raises:
        ValidationError listing every bad row; nothing is written.
    """
    cleaned = []
    errors = []

    for position, row in enumerate(rows, start=1):
        raw_amount = _get(row, "amount")
        due_date = _get(row, "due_date")
        status = _get(row, "payment_status") or InstallmentStatus.UNPAID

        try:
            amount = to_money(raw_amount) if raw_amount not in (None, "") else None
        except (InvalidOperation, TypeError, ValueError):
            amount = None
            errors.append(f"Installment {position}: amount is not a number.")
        else:
            if amount is None:
                errors.append(f"Installment {position}: amount is required.")
            elif amount < 0:
                errors.append(f"Installment {position}: amount cannot be negative.")

        if not isinstance(due_date, date):
            errors.append(f"Installment {position}: due date is required.")

        if status not in InstallmentStatus.values:
            errors.append(f"Installment {position}: unknown payment status {status!r}.")

        if amount is not None and isinstance(due_date, date) and status in InstallmentStatus.values:
            paid_at = _get(row, "paid_at") if status == InstallmentStatus.PAID else None
            cleaned.append(InstallmentInput(
                amount=amount,
                due_date=due_date,
                payment_status=status,
                paid_at=paid_at,
                notes=(_get(row, "notes") or "").strip(),
            ))

    if errors:
        raise ValidationError(errors)
    return cleaned


def _lock_current(event: Event, expected_version: Optional[int]) -> Event:
    """
    Re-read the event row under a lock and compare versions.
    Must be called inside transaction.atomic().
    """
    current = Event.objects.select_for_update().get(pk=event.pk)
    if expected_version is not None and current.version != expected_version:
        logger.warning(
            "Stale save of event %s: expected version %s, stored %s",
            event.pk, expected_version, current.version,
        )
        raise ConflictError(expected_version=expected_version, current_version=current.version)
    return current


def _write_installments(event: Event, rows: List[InstallmentInput]) -> List[ContractInstallment]:
    ContractInstallment.objects.filter(event=event).delete()
    return ContractInstallment.objects.bulk_create([
        ContractInstallment(
            event=event,
            installment_number=number,
            amount=row.amount,
            due_date=row.due_date,
            payment_status=row.payment_status,
            paid_at=row.paid_at,
            notes=row.notes,
        )
        for number, row in enumerate(rows, start=1)
    ])


def _bump_version(event: Event) -> None:
    Event.objects.filter(pk=event.pk).update(version=F("version") + 1, updated_at=timezone.now())
    event.refresh_from_db(fields=["version", "updated_at"])


def replace_installments(
    actor: Actor,
    event: Event,
    new_installments: Iterable[Any],
    expected_version: Optional[int] = None,
) -> List[ContractInstallment]:
    """
    Replace every installment of `event` with `new_installments`.

    - Rows are renumbered 1..N in list order, whatever numbers they carried.
    - Runs as one transaction: on any failure the previous rows stay.
    - expected_version (optional) guards against stale forms (ConflictError).
    - Calling twice with the same rows leaves the same stored set.
    """
    actor.require(Capability.EDIT_EVENT)
    rows = clean_installments(new_installments)

    try:
        with transaction.atomic():
            _lock_current(event, expected_version)
            created = _write_installments(event, rows)
            _bump_version(event)
    except DatabaseError as exc:
        logger.error("Installment replace failed for event %s", event.pk, exc_info=True)
        raise TransientStoreError() from exc

    logger.info(
        "%s replaced installments of event %s (%d rows, version %s)",
        actor.username, event.pk, len(created), event.version,
    )
    return created


def save_event(
    actor: Actor,
    data: Mapping[str, Any],
    installments: Iterable[Any] = (),
    expected_version: Optional[int] = None,
    event: Optional[Event] = None,
) -> Event:
    """
    Create (event=None) or update an event together with its installments.

    The event row and its installment replace-set commit together.
    Turning has_contract off drops every installment.
    """
    creating = event is None
    actor.require(Capability.CREATE_EVENT if creating else Capability.EDIT_EVENT)

    has_contract = bool(data.get("has_contract"))
    rows = clean_installments(installments) if has_contract else []

    try:
        with transaction.atomic():
            if creating:
                event = Event(created_by=actor.user if actor.is_authenticated else None)
            else:
                current = _lock_current(event, expected_version)
                event.version = current.version

            for name in EVENT_FIELDS:
                if name in data:
                    setattr(event, name, data[name])
            event.has_contract = has_contract
            event.full_clean(exclude=["created_by", "version"])
            event.save()

            _write_installments(event, rows)
            if not creating:
                _bump_version(event)
    except DatabaseError as exc:
        logger.error("Saving event %s failed", getattr(event, "pk", None), exc_info=True)
        raise TransientStoreError() from exc

    logger.info(
        "%s %s event %s (%d installments)",
        actor.username, "created" if creating else "updated", event.pk, len(rows),
    )
    return event


def delete_event(actor: Actor, event: Event) -> None:
    """
    Delete an event and its installments in one transaction.

    Expenses pointing at the event are kept and become general expenses.
    """
    actor.require(Capability.DELETE_EVENT)
    event_id = event.pk

    try:
        with transaction.atomic():
            ContractInstallment.objects.filter(event_id=event_id).delete()
            Event.objects.filter(pk=event_id).delete()
    except DatabaseError as exc:
        logger.error("Deleting event %s failed", event_id, exc_info=True)
        raise TransientStoreError() from exc

    logger.info("%s deleted event %s", actor.username, event_id)


def set_installment_status(
    actor: Actor,
    installment: ContractInstallment,
    status: str,
    paid_on: Optional[date] = None,
) -> ContractInstallment:
    """
    Flip one installment between PAID and UNPAID (event detail quick action).
    """
    actor.require(Capability.EDIT_EVENT)

    if status not in InstallmentStatus.values:
        raise ValidationError(f"Unknown payment status {status!r}.")

    try:
        with transaction.atomic():
            _lock_current(installment.event, None)
            installment.payment_status = status
            installment.paid_at = paid_on if status == InstallmentStatus.PAID else None
            installment.save(update_fields=["payment_status", "paid_at"])
            _bump_version(installment.event)
    except DatabaseError as exc:
        logger.error("Updating installment %s failed", installment.pk, exc_info=True)
        raise TransientStoreError() from exc

    logger.info(
        "%s marked installment %s of event %s as %s",
        actor.username, installment.installment_number, installment.event_id, status,
    )
    return installment
