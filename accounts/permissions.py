from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import wraps
from typing import Any, FrozenSet

from django.contrib.auth.views import redirect_to_login

from core.exceptions import AuthorizationError

from .models import Role

logger = logging.getLogger(__name__)


class Capability:
    VIEW_CALENDAR = "view_calendar"
    VIEW_EVENTS = "view_events"
    VIEW_EXPENSES = "view_expenses"
    VIEW_REPORTS = "view_reports"
    VIEW_ALERTS = "view_alerts"

    CREATE_EVENT = "create_event"
    EDIT_EVENT = "edit_event"
    DELETE_EVENT = "delete_event"

    CREATE_EXPENSE = "create_expense"
    EDIT_EXPENSE = "edit_expense"
    DELETE_EXPENSE = "delete_expense"

    MANAGE_USERS = "manage_users"
    MANAGE_SETTINGS = "manage_settings"


# Role hierarchy: every role inherits the capabilities of the role below it.
VIEWER_CAPABILITIES = frozenset({
    Capability.VIEW_CALENDAR,
    Capability.VIEW_EVENTS,
    Capability.VIEW_EXPENSES,
})

EDITOR_CAPABILITIES = VIEWER_CAPABILITIES | frozenset({
    Capability.VIEW_REPORTS,
    Capability.VIEW_ALERTS,
    Capability.CREATE_EVENT,
    Capability.EDIT_EVENT,
    Capability.DELETE_EVENT,
    Capability.CREATE_EXPENSE,
    Capability.EDIT_EXPENSE,
})

# User and settings management stay ADMIN-only regardless of hierarchy.
ADMIN_ONLY_CAPABILITIES = frozenset({
    Capability.DELETE_EXPENSE,
    Capability.MANAGE_USERS,
    Capability.MANAGE_SETTINGS,
})

ADMIN_CAPABILITIES = EDITOR_CAPABILITIES | ADMIN_ONLY_CAPABILITIES

ROLE_CAPABILITIES = {
    Role.ADMIN: ADMIN_CAPABILITIES,
    Role.EDITOR: EDITOR_CAPABILITIES,
    Role.VIEWER: VIEWER_CAPABILITIES,
}


def capabilities_for(role: str | None) -> FrozenSet[str]:
    """
    Return the capability set for a role code.

    Unknown or missing roles fall back to the read-only viewer set.
    """
    return ROLE_CAPABILITIES.get(role, VIEWER_CAPABILITIES)


@dataclass(frozen=True)
class Actor:
    """
    The authenticated user behind one request, resolved once and passed
    explicitly into every service call that mutates data.
    """
    user: Any
    role: str
    capabilities: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user is not None and self.user.is_authenticated)

    @property
    def username(self) -> str:
        if not self.is_authenticated:
            return "anonymous"
        return self.user.get_username()

    def can(self, capability: str) -> bool:
        return self.is_authenticated and capability in self.capabilities

    def require(self, capability: str) -> None:
        if not self.can(capability):
            logger.warning(
                "Denied %s to %s (role=%s)", capability, self.username, self.role,
            )
            raise AuthorizationError(capability=capability, role=self.role)


def actor_for_user(user) -> Actor:
    """
    Build an Actor from an auth user.

    A user without a profile (or an anonymous user) is treated as a viewer.
    """
    if user is None or not user.is_authenticated:
        return Actor(user=user, role=Role.VIEWER, capabilities=frozenset())

    profile = getattr(user, "profile", None)
    role = profile.role if profile is not None else Role.VIEWER
    return Actor(user=user, role=role, capabilities=capabilities_for(role))


def get_actor(request) -> Actor:
    """
    Resolve (and memoize on the request) the Actor for this request.
    """
    actor = getattr(request, "_venue_actor", None)
    if actor is None:
        actor = actor_for_user(getattr(request, "user", None))
        request._venue_actor = actor
    return actor


def capability_required(capability: str):
    """
    View decorator:
      - anonymous users are sent to the login page
      - authenticated users without the capability get AuthorizationError (403)
    """
    def decorator(view_func):
        @wraps(view_func)
        def _wrapped(request, *args, **kwargs):
            if not request.user.is_authenticated:
                return redirect_to_login(request.get_full_path())
            get_actor(request).require(capability)
            return view_func(request, *args, **kwargs)
        return _wrapped
    return decorator


def permissions_context(request) -> dict:
    actor = get_actor(request)
    return {
        "role": actor.role,
        "role_label": Role(actor.role).label if actor.role in Role.values else actor.role,
        "can": {cap: actor.can(cap) for cap in ADMIN_CAPABILITIES},
    }
