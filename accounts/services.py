"""
User management service module.

Business logic behind the ADMIN-only users page. Views stay thin and call
these functions with the request's Actor.
"""
import logging

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import transaction

from .models import Role, UserProfile
from .permissions import Actor, Capability

logger = logging.getLogger(__name__)

User = get_user_model()

MIN_PASSWORD_LENGTH = 6


def _admin_count() -> int:
    return UserProfile.objects.filter(role=Role.ADMIN, user__is_active=True).count()


def create_user(actor: Actor, email, password, full_name, role=Role.VIEWER):
    """
    Create an auth user plus profile.

    Raises:
        AuthorizationError: actor cannot manage users
        ValidationError: missing fields, short password, duplicate e-mail
    """
    actor.require(Capability.MANAGE_USERS)

    email = (email or "").strip().lower()
    full_name = (full_name or "").strip()

    errors = {}
    if not email:
        errors["email"] = "E-mail is required."
    if not full_name:
        errors["full_name"] = "Name is required."
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        errors["password"] = f"Password must be at least {MIN_PASSWORD_LENGTH} characters."
    if email and User.objects.filter(username__iexact=email).exists():
        errors["email"] = "This e-mail is already registered."
    if errors:
        raise ValidationError(errors)

    if role not in Role.values:
        role = Role.VIEWER

    with transaction.atomic():
        user = User.objects.create_user(username=email, email=email, password=password)
        profile = user.profile
        profile.full_name = full_name
        profile.role = role
        profile.save(update_fields=["full_name", "role", "updated_at"])

    logger.info("%s created user %s with role %s", actor.username, email, role)
    return user


def change_role(actor: Actor, profile: UserProfile, role: str) -> UserProfile:
    actor.require(Capability.MANAGE_USERS)

    if role not in Role.values:
        raise ValidationError({"role": "Unknown role."})

    if profile.role == Role.ADMIN and role != Role.ADMIN and _admin_count() <= 1:
        raise ValidationError("The last administrator cannot be demoted.")

    old_role = profile.role
    profile.role = role
    profile.save(update_fields=["role", "updated_at"])
    logger.info(
        "%s changed role of %s from %s to %s",
        actor.username, profile.user.get_username(), old_role, role,
    )
    return profile


def delete_user(actor: Actor, user) -> None:
    actor.require(Capability.MANAGE_USERS)

    if user.pk == actor.user.pk:
        raise ValidationError("You cannot delete your own account.")

    profile = getattr(user, "profile", None)
    if profile is not None and profile.role == Role.ADMIN and _admin_count() <= 1:
        raise ValidationError("The last administrator cannot be deleted.")

    username = user.get_username()
    user.delete()
    logger.info("%s deleted user %s", actor.username, username)


def update_own_profile(actor: Actor, full_name, notification_email, receive_alerts, receive_reports):
    """
    Any signed-in user may edit their own display/notification preferences.
    Role is never touched here.
    """
    profile, _ = UserProfile.objects.get_or_create(user=actor.user)
    profile.full_name = (full_name or "").strip()
    profile.notification_email = (notification_email or "").strip()
    profile.receive_alerts = bool(receive_alerts)
    profile.receive_reports = bool(receive_reports)
    profile.full_clean(exclude=["user"])
    profile.save()
    logger.info("%s updated own profile", actor.username)
    return profile
