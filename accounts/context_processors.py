from __future__ import annotations

from typing import Dict, Any

from django.conf import settings

from .permissions import permissions_context


def permissions_gate(request) -> Dict[str, Any]:
    """
    Global permission context available to templates as `perms_gate`.

    Templates use it to show/hide edit controls only; every mutation is
    checked again server-side by the service layer.
    """
    return {
        "perms_gate": permissions_context(request),
        "venue_name": settings.VENUE_NAME,
    }
