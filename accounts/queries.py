from .models import UserProfile


def alert_recipients():
    """
    Profiles opted into alerts that have somewhere to send them.

    Returns a list of (profile, email) pairs, de-duplicated by address.
    """
    profiles = (
        UserProfile.objects
        .select_related("user")
        .filter(receive_alerts=True, user__is_active=True)
        .order_by("id")
    )

    seen = set()
    out = []
    for p in profiles:
        email = p.alert_email
        if not email or email.lower() in seen:
            continue
        seen.add(email.lower())
        out.append((p, email))
    return out
