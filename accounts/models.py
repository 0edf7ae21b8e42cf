from django.conf import settings
from django.db import models

"""
accounts.models

One UserProfile per Django auth user.

- role gates every mutation in the system (see accounts.permissions)
- notification fields are read by the scheduled-job queries only
"""


class Role(models.TextChoices):
    ADMIN = "ADMIN", "Administrator"
    EDITOR = "EDITOR", "Editor"
    VIEWER = "VISUALIZADOR", "Viewer"


class UserProfile(models.Model):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
    )
    full_name = models.CharField(max_length=255, blank=True)
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.VIEWER)

    notification_email = models.EmailField(blank=True)
    receive_alerts = models.BooleanField(default=False)
    receive_reports = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["full_name", "user__username"]

    def __str__(self) -> str:
        return f"{self.display_name} ({self.get_role_display()})"

    @property
    def display_name(self) -> str:
        return self.full_name or self.user.get_full_name() or self.user.get_username()

    @property
    def alert_email(self) -> str:
        """Where alerts go: the explicit notification address, else the login e-mail."""
        return self.notification_email or self.user.email
