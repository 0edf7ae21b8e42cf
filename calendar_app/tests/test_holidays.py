"""
Tests for Brazilian holiday computation and the seed_holidays command.
"""
from datetime import date
from io import StringIO

from django.core.management import call_command
from django.test import SimpleTestCase, TestCase

from calendar_app.holidays import easter_western, holidays_for_year
from calendar_app.models import Holiday


class EasterTestCase(SimpleTestCase):

    def test_known_easter_dates(self):
        self.assertEqual(easter_western(2024), date(2024, 3, 31))
        self.assertEqual(easter_western(2025), date(2025, 4, 20))
        self.assertEqual(easter_western(2026), date(2026, 4, 5))


class HolidaysForYearTestCase(SimpleTestCase):

    def test_2025(self):
        by_name = {h.name: h for h in holidays_for_year(2025)}

        self.assertEqual(len(by_name), 11)
        self.assertEqual(by_name["Tiradentes"].date, date(2025, 4, 21))
        self.assertEqual(by_name["Natal"].date, date(2025, 12, 25))
        self.assertEqual(by_name["Carnaval"].date, date(2025, 3, 4))
        self.assertEqual(by_name["Sexta-feira Santa"].date, date(2025, 4, 18))
        self.assertEqual(by_name["Corpus Christi"].date, date(2025, 6, 19))

        self.assertTrue(by_name["Sexta-feira Santa"].is_national)
        self.assertFalse(by_name["Carnaval"].is_national)

    def test_sorted_by_date(self):
        dates = [h.date for h in holidays_for_year(2026)]
        self.assertEqual(dates, sorted(dates))
        self.assertEqual(dates[0], date(2026, 1, 1))


class SeedHolidaysTestCase(TestCase):

    def test_seed_is_idempotent(self):
        call_command("seed_holidays", "--year", "2025", stdout=StringIO())
        self.assertEqual(Holiday.objects.filter(year=2025).count(), 11)

        out = StringIO()
        call_command("seed_holidays", "--year", "2025", stdout=out)
        self.assertEqual(Holiday.objects.count(), 11)
        self.assertIn("0 new", out.getvalue())

    def test_several_years(self):
        call_command("seed_holidays", "--year", "2025", "--year", "2026", stdout=StringIO())
        self.assertEqual(Holiday.objects.filter(year=2026).count(), 11)
        self.assertTrue(Holiday.objects.filter(name="Corpus Christi", date=date(2026, 6, 4)).exists())
