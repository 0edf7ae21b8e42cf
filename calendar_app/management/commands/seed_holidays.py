"""
Management command to seed Brazilian holidays.
Usage:
    python manage.py seed_holidays                 # current and next year
    python manage.py seed_holidays --year 2025 --year 2026
"""
from django.core.management.base import BaseCommand
from django.utils import timezone

from calendar_app.holidays import holidays_for_years
from calendar_app.models import Holiday


class Command(BaseCommand):
    help = "Seed Brazilian national holidays (fixed and Easter-based) for one or more years"

    def add_arguments(self, parser):
        parser.add_argument(
            "--year",
            type=int,
            action="append",
            dest="years",
            help="Year to seed; repeat for several (default: current and next year)",
        )

    def handle(self, *args, **options):
        years = options["years"]
        if not years:
            this_year = timezone.localdate().year
            years = [this_year, this_year + 1]

        added = 0
        for h in holidays_for_years(years):
            holiday, created = Holiday.objects.get_or_create(
                date=h.date,
                name=h.name,
                defaults={"is_national": h.is_national},
            )
            if created:
                added += 1
                self.stdout.write(f"  Added: {h.name} ({h.date})")

        self.stdout.write(self.style.SUCCESS(
            f"Holidays seeded for {', '.join(str(y) for y in sorted(set(years)))}: {added} new"
        ))
