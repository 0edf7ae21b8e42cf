"""
View-level tests for the home, reports and settings pages.
"""
from datetime import timedelta

from django.test import TestCase
from django.urls import reverse
from django.utils import timezone

from accounts.models import Role
from accounts.tests.helpers import PASSWORD, make_user
from dashboard.config import ALERT_SETTINGS, COLOR_SCHEME, get_setting
from dashboard.models import SystemSetting
from events import services


class HomeViewTestCase(TestCase):

    def setUp(self):
        _, actor = make_user("editor", Role.EDITOR)
        make_user("viewer", Role.VIEWER)
        today = timezone.localdate()
        services.save_event(
            actor,
            {"name": "Anniversary", "event_date": today, "has_contract": True},
            [
                {"amount": "100", "due_date": today + timedelta(days=3)},
                {"amount": "100", "due_date": today - timedelta(days=3)},
            ],
        )

    def test_editor_sees_alerts(self):
        self.client.login(username="editor", password=PASSWORD)
        resp = self.client.get(reverse("dashboard:home"))

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.context["stats"]["total_events"], 1)
        self.assertEqual(resp.context["stats"]["with_contract"], 1)
        self.assertEqual(resp.context["stats"]["pending"], 1)
        self.assertEqual(len(resp.context["upcoming"]), 1)
        self.assertEqual(len(resp.context["overdue"]), 1)
        self.assertEqual(len(resp.context["months"]), 12)

    def test_overdue_hidden_when_switched_off(self):
        SystemSetting.objects.create(key=ALERT_SETTINGS, value={"send_overdue_alerts": False})
        self.client.login(username="editor", password=PASSWORD)
        resp = self.client.get(reverse("dashboard:home"))
        self.assertEqual(resp.context["overdue"], [])
        self.assertEqual(len(resp.context["upcoming"]), 1)

    def test_viewer_gets_no_alerts(self):
        self.client.login(username="viewer", password=PASSWORD)
        resp = self.client.get(reverse("dashboard:home"))
        self.assertEqual(resp.status_code, 200)
        self.assertNotIn("upcoming", resp.context)
        self.assertNotIn("overdue", resp.context)

    def test_anonymous_redirected_to_login(self):
        resp = self.client.get(reverse("dashboard:home"))
        self.assertEqual(resp.status_code, 302)
        self.assertIn(reverse("login"), resp["Location"])


class ReportsViewTestCase(TestCase):

    def test_role_gate(self):
        make_user("viewer", Role.VIEWER)
        make_user("editor", Role.EDITOR)

        self.client.login(username="viewer", password=PASSWORD)
        self.assertEqual(self.client.get(reverse("dashboard:reports")).status_code, 403)

        self.client.login(username="editor", password=PASSWORD)
        resp = self.client.get(reverse("dashboard:reports"), {"period": "quarter"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.context["period"], "quarter")


class SettingsViewTestCase(TestCase):

    def setUp(self):
        make_user("boss", Role.ADMIN)
        make_user("editor", Role.EDITOR)

    def test_editor_denied(self):
        self.client.login(username="editor", password=PASSWORD)
        self.assertEqual(self.client.get(reverse("dashboard:settings")).status_code, 403)

    def test_save_colors(self):
        self.client.login(username="boss", password=PASSWORD)
        data = {
            "section": COLOR_SCHEME,
            "paid": "#111111",
            "with_contract": "#222222",
            "in_progress": "#333333",
            "pre_reservation": "#444444",
            "no_reservation": "#ffffff",
        }
        resp = self.client.post(reverse("dashboard:settings"), data)

        self.assertRedirects(resp, reverse("dashboard:settings"))
        colors = get_setting(COLOR_SCHEME)
        self.assertEqual(colors["paid"], "#111111")
        self.assertEqual(colors["no_reservation"], "#FFFFFF")

    def test_invalid_alert_days_rerenders(self):
        self.client.login(username="boss", password=PASSWORD)
        resp = self.client.post(reverse("dashboard:settings"), {
            "section": ALERT_SETTINGS,
            "alert_days_before_due": "45",
            "report_day_of_month": "1",
        })
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.context["alert_form"].errors)
        self.assertFalse(SystemSetting.objects.exists())

    def test_reset(self):
        self.client.login(username="boss", password=PASSWORD)
        SystemSetting.objects.create(key=ALERT_SETTINGS, value={"alert_days_before_due": 3})

        resp = self.client.post(reverse("dashboard:settings_reset", args=[ALERT_SETTINGS]))

        self.assertRedirects(resp, reverse("dashboard:settings"))
        self.assertEqual(get_setting(ALERT_SETTINGS)["alert_days_before_due"], 10)
