from django.db import models


class Holiday(models.Model):
    """
    A holiday shown on the calendar.

    Maintained through the admin and the seed_holidays command; dashboard
    users only read it.
    """
    name = models.CharField(max_length=120)
    date = models.DateField()
    is_national = models.BooleanField(default=True)
    year = models.PositiveIntegerField(editable=False, db_index=True)

    class Meta:
        ordering = ["date", "name"]
        constraints = [
            models.UniqueConstraint(fields=["date", "name"], name="unique_holiday_per_date"),
        ]

    def save(self, *args, **kwargs):
        # year always follows date
        self.year = self.date.year
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.name} ({self.date})"
