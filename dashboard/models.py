from django.conf import settings
from django.db import models


class SystemSetting(models.Model):
    """
    Key -> JSON value store for dashboard configuration (color scheme,
    alert thresholds). Read through dashboard.config, which merges the
    stored value over the built-in defaults.
    """
    key = models.CharField(max_length=100, unique=True)
    value = models.JSONField(default=dict)
    description = models.CharField(max_length=255, blank=True)
    updated_at = models.DateTimeField(auto_now=True)
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="settings_updated",
    )

    class Meta:
        ordering = ["key"]

    def __str__(self):
        return self.key
