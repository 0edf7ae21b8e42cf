"""
Tests for the role -> capability gate.
"""
from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.test import TestCase
from django.urls import reverse

from accounts.models import Role
from accounts.permissions import (
    ADMIN_CAPABILITIES,
    Capability,
    actor_for_user,
    capabilities_for,
)
from core.exceptions import AuthorizationError

from .helpers import PASSWORD, make_user

User = get_user_model()


class CapabilityMatrixTestCase(TestCase):

    def test_viewer_is_read_only(self):
        caps = capabilities_for(Role.VIEWER)
        self.assertEqual(
            caps,
            {Capability.VIEW_CALENDAR, Capability.VIEW_EVENTS, Capability.VIEW_EXPENSES},
        )

    def test_editor_writes_events_and_expenses_but_cannot_delete_expenses(self):
        caps = capabilities_for(Role.EDITOR)
        for cap in (
            Capability.CREATE_EVENT, Capability.EDIT_EVENT, Capability.DELETE_EVENT,
            Capability.CREATE_EXPENSE, Capability.EDIT_EXPENSE,
            Capability.VIEW_REPORTS, Capability.VIEW_ALERTS,
        ):
            self.assertIn(cap, caps)
        for cap in (Capability.DELETE_EXPENSE, Capability.MANAGE_USERS, Capability.MANAGE_SETTINGS):
            self.assertNotIn(cap, caps)

    def test_admin_has_everything(self):
        self.assertEqual(capabilities_for(Role.ADMIN), ADMIN_CAPABILITIES)
        self.assertIn(Capability.MANAGE_USERS, ADMIN_CAPABILITIES)

    def test_unknown_role_falls_back_to_viewer(self):
        self.assertEqual(capabilities_for("ROOT"), capabilities_for(Role.VIEWER))
        self.assertEqual(capabilities_for(None), capabilities_for(Role.VIEWER))


class ActorTestCase(TestCase):

    def test_anonymous_actor_can_do_nothing(self):
        actor = actor_for_user(AnonymousUser())
        self.assertFalse(actor.is_authenticated)
        self.assertFalse(actor.can(Capability.VIEW_CALENDAR))
        with self.assertRaises(AuthorizationError):
            actor.require(Capability.VIEW_CALENDAR)

    def test_viewer_delete_event_raises_authorization_error(self):
        _, actor = make_user("vera", Role.VIEWER)
        with self.assertRaises(AuthorizationError) as ctx:
            actor.require(Capability.DELETE_EVENT)
        self.assertEqual(ctx.exception.capability, Capability.DELETE_EVENT)
        self.assertEqual(ctx.exception.role, Role.VIEWER)

    def test_new_user_gets_viewer_profile(self):
        user = User.objects.create_user("nina", "nina@example.com", PASSWORD)
        self.assertEqual(user.profile.role, Role.VIEWER)
        self.assertEqual(actor_for_user(user).role, Role.VIEWER)

    def test_superuser_profile_starts_as_admin(self):
        boss = User.objects.create_superuser("boss", "boss@example.com", PASSWORD)
        self.assertEqual(boss.profile.role, Role.ADMIN)


class ViewGateTestCase(TestCase):

    def setUp(self):
        self.viewer, _ = make_user("viewer", Role.VIEWER)
        self.editor, _ = make_user("editor", Role.EDITOR)

    def test_anonymous_is_redirected_to_login(self):
        resp = self.client.get(reverse("events:event_list"))
        self.assertEqual(resp.status_code, 302)
        self.assertIn(reverse("login"), resp["Location"])

    def test_viewer_can_read_events(self):
        self.client.login(username="viewer", password=PASSWORD)
        resp = self.client.get(reverse("events:event_list"))
        self.assertEqual(resp.status_code, 200)

    def test_viewer_gets_403_on_create(self):
        self.client.login(username="viewer", password=PASSWORD)
        resp = self.client.get(reverse("events:event_create"))
        self.assertEqual(resp.status_code, 403)

    def test_editor_gets_403_on_users_page(self):
        self.client.login(username="editor", password=PASSWORD)
        resp = self.client.get(reverse("accounts:user_list"))
        self.assertEqual(resp.status_code, 403)

    def test_nav_hides_links_the_role_cannot_use(self):
        self.client.login(username="viewer", password=PASSWORD)
        resp = self.client.get(reverse("events:event_list"))
        self.assertFalse(resp.context["perms_gate"]["can"][Capability.CREATE_EVENT])
        self.assertNotContains(resp, reverse("events:event_create"))
