"""
Tests for StoreErrorMiddleware.
"""
from django.contrib.messages import get_messages
from django.contrib.messages.storage.fallback import FallbackStorage
from django.db import OperationalError
from django.http import HttpResponse
from django.test import RequestFactory, SimpleTestCase

from core.exceptions import ConflictError, TransientStoreError
from core.middleware import StoreErrorMiddleware


class StoreErrorMiddlewareTestCase(SimpleTestCase):

    def setUp(self):
        self.factory = RequestFactory()
        self.middleware = StoreErrorMiddleware(lambda request: HttpResponse("ok"))

    def post(self, **extra):
        request = self.factory.post("/events/1/edit/", **extra)
        request.session = {}
        request._messages = FallbackStorage(request)
        return request

    def test_passes_through(self):
        self.assertEqual(self.middleware(self.post()).content, b"ok")

    def test_conflict_without_referer(self):
        resp = self.middleware.process_exception(self.post(), ConflictError())
        self.assertEqual(resp.status_code, 409)
        self.assertIn(b"changed by someone else", resp.content)

    def test_database_errors_are_503(self):
        resp = self.middleware.process_exception(self.post(), OperationalError("db gone"))
        self.assertEqual(resp.status_code, 503)
        self.assertNotIn(b"db gone", resp.content)

        resp = self.middleware.process_exception(self.post(), TransientStoreError())
        self.assertEqual(resp.status_code, 503)

    def test_same_site_referer_redirects_with_message(self):
        request = self.post(HTTP_REFERER="http://testserver/events/1/")
        resp = self.middleware.process_exception(request, ConflictError())

        self.assertEqual(resp.status_code, 302)
        self.assertEqual(resp["Location"], "http://testserver/events/1/")
        self.assertEqual(len(list(get_messages(request))), 1)

    def test_foreign_referer_ignored(self):
        request = self.post(HTTP_REFERER="https://evil.example.com/")
        resp = self.middleware.process_exception(request, ConflictError())
        self.assertEqual(resp.status_code, 409)

    def test_other_exceptions_left_alone(self):
        self.assertIsNone(self.middleware.process_exception(self.post(), ValueError("x")))
