"""
Tests for the period report aggregation.
"""
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

from django.test import SimpleTestCase, TestCase

from accounts.models import Role
from accounts.tests.helpers import make_user
from dashboard.reports import build_report, load_report, period_range
from events import services
from expenses.models import Expense


def ev(id, day, event_type="CEV_502", category="SHOW", has_contract=True, audience=100):
    return SimpleNamespace(
        id=id,
        event_date=day,
        event_type=event_type,
        event_category=category,
        reservation_status="CONFIRMED",
        has_contract=has_contract,
        estimated_audience=audience,
    )


def inst(event_id, amount, status="UNPAID"):
    return {"event_id": event_id, "amount": amount, "payment_status": status}


def exp(amount, day, category="STAFF"):
    return SimpleNamespace(amount=Decimal(amount), expense_date=day, category=category)


START, END = date(2025, 1, 1), date(2025, 12, 31)


class PeriodRangeTestCase(SimpleTestCase):

    def test_ranges(self):
        today = date(2025, 8, 15)
        self.assertEqual(period_range("month", today), (date(2025, 8, 1), date(2025, 8, 31)))
        self.assertEqual(period_range("quarter", today), (date(2025, 7, 1), date(2025, 9, 30)))
        self.assertEqual(period_range("year", today), (START, END))
        self.assertEqual(period_range("bogus", today), (START, END))


class BuildReportTestCase(SimpleTestCase):

    def setUp(self):
        self.events = [
            ev(1, date(2025, 3, 10)),
            ev(2, date(2025, 3, 20), event_type="FPP_501", category="FAIR", audience=None),
            ev(3, date(2025, 6, 1), has_contract=False, category="CORPORATE"),
            ev(4, date(2024, 12, 31)),
        ]
        self.installments = [
            inst(1, "1000", "PAID"),
            inst(1, "500"),
            inst(2, "300", "PAID"),
            inst(4, "9999", "PAID"),
        ]
        self.expenses = [
            exp("200", date(2025, 3, 5)),
            exp("100", date(2025, 6, 5), "UTILITIES"),
            exp("50", date(2024, 12, 1)),
        ]

    def test_totals(self):
        report = build_report(self.events, self.installments, self.expenses, START, END)

        self.assertEqual(report.total_events, 3)
        self.assertEqual(report.events_with_contract, 2)
        self.assertEqual(report.total_audience, 200)
        self.assertEqual(report.events_by_type["CEV_502"], 2)
        self.assertEqual(report.events_by_type["FPP_501"], 1)

        self.assertEqual(report.contracted, Decimal("1800.00"))
        self.assertEqual(report.paid, Decimal("1300.00"))
        self.assertEqual(report.outstanding, Decimal("500.00"))
        self.assertEqual(report.expenses, Decimal("300.00"))
        self.assertEqual(report.net_result, Decimal("1000.00"))
        self.assertTrue(report.is_profit)

        self.assertEqual(report.payment_status_counts["PARTIALLY_PAID"], 1)
        self.assertEqual(report.payment_status_counts["FULLY_PAID"], 1)
        self.assertEqual(report.payment_status_counts["NO_CONTRACT"], 1)

    def test_breakdowns(self):
        report = build_report(self.events, self.installments, self.expenses, START, END)

        self.assertEqual([r["category"] for r in report.by_category], ["SHOW", "FAIR", "CORPORATE"])
        self.assertEqual(report.by_category[0]["share"], 77)
        self.assertEqual(report.by_category[1]["share"], 23)

        self.assertEqual([m["month"] for m in report.by_month], ["2025-03", "2025-06"])
        march = report.by_month[0]
        self.assertEqual(march["events"], 2)
        self.assertEqual(march["revenue"], Decimal("1300.00"))
        self.assertEqual(march["expenses"], Decimal("200.00"))

        self.assertEqual([r["category"] for r in report.expenses_by_category], ["STAFF", "UTILITIES"])

    def test_event_type_filter(self):
        report = build_report(self.events, self.installments, self.expenses, START, END, event_type="FPP_501")

        self.assertEqual(report.total_events, 1)
        self.assertEqual(report.paid, Decimal("300.00"))
        # expenses are venue-wide and never filtered by type
        self.assertEqual(report.expenses, Decimal("300.00"))
        self.assertEqual(report.net_result, Decimal("0.00"))
        self.assertTrue(report.is_profit)

    def test_loss(self):
        report = build_report([], [], [exp("10", date(2025, 1, 2))], START, END)
        self.assertEqual(report.net_result, Decimal("-10.00"))
        self.assertFalse(report.is_profit)
        self.assertEqual(report.by_category, [])


class LoadReportTestCase(TestCase):

    def test_reads_from_database(self):
        user, actor = make_user("editor", Role.EDITOR)
        services.save_event(
            actor,
            {"name": "Spring Fair", "event_date": date(2025, 4, 2), "has_contract": True},
            [
                {"amount": "700", "due_date": date(2025, 3, 1), "payment_status": "PAID"},
                {"amount": "300", "due_date": date(2025, 4, 1)},
            ],
        )
        Expense.objects.create(
            description="Cleaning", category="STAFF", amount=Decimal("150"),
            expense_date=date(2025, 4, 3), created_by=user,
        )

        report = load_report("month", today=date(2025, 4, 20))

        self.assertEqual(report.total_events, 1)
        self.assertEqual(report.paid, Decimal("700.00"))
        self.assertEqual(report.outstanding, Decimal("300.00"))
        self.assertEqual(report.expenses, Decimal("150.00"))
        self.assertEqual(report.net_result, Decimal("550.00"))
