from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import Role, UserProfile

"""
accounts.signals

Every auth user gets a profile the moment it is created.

Superusers start as ADMIN so a fresh `createsuperuser` can manage the
dashboard; everyone else starts read-only.
"""


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def ensure_user_profile(sender, instance, created, **kwargs):
    if not created:
        return

    role = Role.ADMIN if instance.is_superuser else Role.VIEWER
    UserProfile.objects.get_or_create(
        user=instance,
        defaults={
            "full_name": instance.get_full_name(),
            "role": role,
        },
    )
