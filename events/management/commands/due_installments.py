"""
List installments coming due and already overdue, plus who would be alerted.

Read-only: nothing is sent. An external scheduler can run this and pipe the
output wherever it needs.

Usage:
    python manage.py due_installments
    python manage.py due_installments --days 5
    python manage.py due_installments --today 2025-03-01 --no-overdue
"""
from datetime import date

from django.core.management.base import BaseCommand, CommandError

from accounts.queries import alert_recipients
from dashboard.config import get_setting
from events.queries import installments_due_within, overdue_installments


class Command(BaseCommand):
    help = "Print unpaid installments due soon and overdue, with alert recipients"

    def add_arguments(self, parser):
        parser.add_argument("--days", type=int, help="Window in days (default: alert_settings)")
        parser.add_argument("--today", help="Reference date YYYY-MM-DD (default: today)")
        parser.add_argument("--no-overdue", action="store_true", help="Skip the overdue list")

    def handle(self, *args, **options):
        alerts = get_setting("alert_settings")
        days = options["days"] if options["days"] is not None else alerts["alert_days_before_due"]
        if days < 0:
            raise CommandError("--days cannot be negative.")

        today = None
        if options["today"]:
            try:
                today = date.fromisoformat(options["today"])
            except ValueError:
                raise CommandError(f"Invalid --today value: {options['today']!r}")

        due = list(installments_due_within(days, today=today))
        self.stdout.write(self.style.MIGRATE_HEADING(f"Due within {days} days: {len(due)}"))
        for inst in due:
            self.stdout.write(self._line(inst))

        show_overdue = alerts["send_overdue_alerts"] and not options["no_overdue"]
        if show_overdue:
            overdue = list(overdue_installments(today=today))
            self.stdout.write(self.style.MIGRATE_HEADING(f"Overdue: {len(overdue)}"))
            for inst in overdue:
                self.stdout.write(self.style.WARNING(self._line(inst)))

        recipients = alert_recipients()
        self.stdout.write(self.style.MIGRATE_HEADING(f"Recipients: {len(recipients)}"))
        for profile, email in recipients:
            self.stdout.write(f"  {profile.display_name} <{email}>")

    def _line(self, inst) -> str:
        return (
            f"  {inst.due_date.isoformat()}  {inst.event.name}  "
            f"#{inst.installment_number}  {inst.amount}"
        )
