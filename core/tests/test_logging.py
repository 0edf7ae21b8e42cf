"""
Tests for the logging configuration.
"""
from datetime import date

from django.conf import settings
from django.test import TestCase

from accounts.models import Role
from accounts.tests.helpers import make_user
from events import services


class LoggingConfigTestCase(TestCase):

    def test_each_app_has_a_logger(self):
        loggers = settings.LOGGING["loggers"]
        for app in ("core", "accounts", "events", "expenses", "calendar_app", "dashboard"):
            self.assertIn(app, loggers)
            self.assertEqual(loggers[app]["level"], settings.VENUE_LOG_LEVEL)

    def test_service_mutation_logged_at_info(self):
        _, actor = make_user("editor", Role.EDITOR)
        with self.assertLogs("events.services", level="INFO") as logs:
            services.save_event(actor, {"name": "Logged Show", "event_date": date(2025, 3, 3)})
        self.assertTrue(any("editor created event" in line for line in logs.output))
