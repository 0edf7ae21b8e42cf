"""
Tests for the scheduler-facing queries and the due_installments command.
"""
from datetime import date
from io import StringIO

from django.core.management import call_command
from django.test import TestCase

from accounts.models import Role, UserProfile
from accounts.tests.helpers import make_user
from events import services
from events.queries import installments_due_within, month_range, overdue_installments, quarter_range


class DueQueriesTestCase(TestCase):

    def setUp(self):
        _, actor = make_user("editor", Role.EDITOR)
        self.today = date(2025, 3, 10)
        services.save_event(
            actor,
            {"name": "Spring Show", "event_date": date(2025, 4, 30), "has_contract": True},
            [
                {"amount": "100", "due_date": date(2025, 3, 1)},                        # overdue
                {"amount": "200", "due_date": date(2025, 3, 5), "payment_status": "PAID"},  # paid, ignored
                {"amount": "300", "due_date": date(2025, 3, 10)},                       # due today
                {"amount": "400", "due_date": date(2025, 3, 20)},                       # edge of window
                {"amount": "500", "due_date": date(2025, 3, 21)},                       # outside window
            ],
        )

    def test_due_within_is_inclusive(self):
        due = installments_due_within(10, today=self.today)
        self.assertEqual([i.installment_number for i in due], [3, 4])

    def test_overdue_is_unpaid_before_today(self):
        overdue = overdue_installments(today=self.today)
        self.assertEqual([i.installment_number for i in overdue], [1])

    def test_command_prints_lists_and_recipients(self):
        user, _ = make_user("ana", Role.VIEWER)
        UserProfile.objects.filter(user=user).update(receive_alerts=True)
        out = StringIO()

        call_command("due_installments", "--today", "2025-03-10", "--days", "10", stdout=out)

        text = out.getvalue()
        self.assertIn("Due within 10 days: 2", text)
        self.assertIn("Overdue: 1", text)
        self.assertIn("ana@example.com", text)
        self.assertIn("Spring Show", text)


class RangeHelpersTestCase(TestCase):

    def test_month_range(self):
        self.assertEqual(month_range(2024, 2), (date(2024, 2, 1), date(2024, 2, 29)))
        self.assertEqual(month_range(2025, 12), (date(2025, 12, 1), date(2025, 12, 31)))

    def test_quarter_range(self):
        self.assertEqual(quarter_range(date(2025, 5, 17)), (date(2025, 4, 1), date(2025, 6, 30)))
