"""
dashboard.config

Read/write access to the SystemSetting key -> JSON store.

Known keys and their defaults:

    color_scheme
        paid             #3B82F6  event fully paid
        with_contract    #22C55E  contract signed / reservation confirmed
        in_progress      #F59E0B  reservation in progress
        pre_reservation  #9CA3AF  pre-reservation, nothing signed
        no_reservation   #F3F4F6  empty day background

    alert_settings
        alert_days_before_due  10    (1..30)
        send_overdue_alerts    True
        report_day_of_month    1     (1..28)

get_setting() never fails on a missing row: callers always get a complete
dict, stored values merged over the defaults.
"""
import logging
import re
from copy import deepcopy
from typing import Any, Dict, Mapping

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import DatabaseError

from accounts.permissions import Actor, Capability
from core.exceptions import TransientStoreError

from .models import SystemSetting

logger = logging.getLogger(__name__)

COLOR_SCHEME = "color_scheme"
ALERT_SETTINGS = "alert_settings"

DEFAULT_COLORS = {
    "paid": "#3B82F6",
    "with_contract": "#22C55E",
    "in_progress": "#F59E0B",
    "pre_reservation": "#9CA3AF",
    "no_reservation": "#F3F4F6",
}

DEFAULT_ALERT_SETTINGS = {
    "alert_days_before_due": getattr(settings, "VENUE_ALERT_DAYS_DEFAULT", 10),
    "send_overdue_alerts": True,
    "report_day_of_month": 1,
}

SETTING_DEFAULTS = {
    COLOR_SCHEME: DEFAULT_COLORS,
    ALERT_SETTINGS: DEFAULT_ALERT_SETTINGS,
}

SETTING_DESCRIPTIONS = {
    COLOR_SCHEME: "Calendar indicator colors",
    ALERT_SETTINGS: "Installment due-date alert thresholds",
}

HEX_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")

# (min, max) for the numeric alert fields
ALERT_BOUNDS = {
    "alert_days_before_due": (1, 30),
    "report_day_of_month": (1, 28),
}


def _defaults(key: str) -> Dict[str, Any]:
    try:
        return deepcopy(SETTING_DEFAULTS[key])
    except KeyError:
        raise KeyError(f"Unknown setting: {key}") from None


def get_setting(key: str) -> Dict[str, Any]:
    """
    Stored value for `key` merged over its defaults.

    Unknown keys inside the stored JSON are ignored; a missing row (or a
    stored value that is not an object) yields the defaults.
    """
    value = _defaults(key)
    row = SystemSetting.objects.filter(key=key).first()
    if row is not None and isinstance(row.value, dict):
        for name in value:
            if name in row.value:
                value[name] = row.value[name]
    return value


def clean_setting(key: str, value: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Validate a submitted setting and return it merged over the defaults.

    Raises:
        ValidationError keyed by field name.
    """
    cleaned = _defaults(key)
    errors = {}

    for name, raw in value.items():
        if name not in cleaned:
            errors[name] = f"Unknown field {name!r}."
            continue

        if key == COLOR_SCHEME:
            if not isinstance(raw, str) or not HEX_RE.match(raw):
                errors[name] = "Use a #RRGGBB color."
                continue
            cleaned[name] = raw.upper()

        elif name == "send_overdue_alerts":
            if not isinstance(raw, bool):
                errors[name] = "Must be true or false."
                continue
            cleaned[name] = raw

        else:
            lo, hi = ALERT_BOUNDS[name]
            if isinstance(raw, bool) or not isinstance(raw, int) or not lo <= raw <= hi:
                errors[name] = f"Must be a whole number between {lo} and {hi}."
                continue
            cleaned[name] = raw

    if errors:
        raise ValidationError(errors)
    return cleaned


def save_setting(actor: Actor, key: str, value: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Validate and persist a setting. Requires manage_settings.
    """
    actor.require(Capability.MANAGE_SETTINGS)
    cleaned = clean_setting(key, value)

    try:
        SystemSetting.objects.update_or_create(
            key=key,
            defaults={
                "value": cleaned,
                "description": SETTING_DESCRIPTIONS.get(key, ""),
                "updated_by": actor.user if actor.is_authenticated else None,
            },
        )
    except DatabaseError as exc:
        logger.error("Saving setting %s failed", key, exc_info=True)
        raise TransientStoreError() from exc

    logger.info("%s saved setting %s", actor.username, key)
    return cleaned


def reset_setting(actor: Actor, key: str) -> Dict[str, Any]:
    """
    Drop the stored row so `key` reads back as its defaults.
    """
    actor.require(Capability.MANAGE_SETTINGS)
    _defaults(key)

    try:
        SystemSetting.objects.filter(key=key).delete()
    except DatabaseError as exc:
        logger.error("Resetting setting %s failed", key, exc_info=True)
        raise TransientStoreError() from exc

    logger.info("%s reset setting %s to defaults", actor.username, key)
    return _defaults(key)
