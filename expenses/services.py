"""
Expenses service module.

Create / update / delete for venue expenses. Each call checks the actor's
capability first: ADMIN and EDITOR may create and edit, only ADMIN deletes.
"""
import logging
from typing import Any, Mapping, Optional

from django.db import DatabaseError, transaction

from accounts.permissions import Actor, Capability
from core.exceptions import TransientStoreError

from .models import Expense

logger = logging.getLogger(__name__)

EXPENSE_FIELDS = (
    "description",
    "category",
    "amount",
    "expense_date",
    "event",
    "is_recurring",
    "notes",
)


def _apply(expense: Expense, data: Mapping[str, Any]) -> None:
    for name in EXPENSE_FIELDS:
        if name in data:
            value = data[name]
            if isinstance(value, str):
                value = value.strip()
            setattr(expense, name, value)


def save_expense(actor: Actor, data: Mapping[str, Any], expense: Optional[Expense] = None) -> Expense:
    """
    Create (expense=None) or update an expense.

    Raises ValidationError for bad input (amount must be > 0).
    """
    creating = expense is None
    actor.require(Capability.CREATE_EXPENSE if creating else Capability.EDIT_EXPENSE)

    if creating:
        expense = Expense(created_by=actor.user if actor.is_authenticated else None)
    _apply(expense, data)
    expense.full_clean(exclude=["created_by"])

    try:
        with transaction.atomic():
            expense.save()
    except DatabaseError as exc:
        logger.error("Saving expense %s failed", expense.pk, exc_info=True)
        raise TransientStoreError() from exc

    logger.info(
        "%s %s expense %s (%s %s)",
        actor.username, "created" if creating else "updated",
        expense.pk, expense.category, expense.amount,
    )
    return expense


def delete_expense(actor: Actor, expense: Expense) -> None:
    actor.require(Capability.DELETE_EXPENSE)
    expense_id = expense.pk

    try:
        expense.delete()
    except DatabaseError as exc:
        logger.error("Deleting expense %s failed", expense_id, exc_info=True)
        raise TransientStoreError() from exc

    logger.info("%s deleted expense %s", actor.username, expense_id)
