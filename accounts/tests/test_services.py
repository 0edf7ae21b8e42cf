"""
Tests for user management in accounts/services.py.
"""
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.test import TestCase
from django.urls import reverse

from accounts import services
from accounts.models import Role, UserProfile
from accounts.queries import alert_recipients
from core.exceptions import AuthorizationError

from .helpers import PASSWORD, make_user

User = get_user_model()


class CreateUserTestCase(TestCase):

    def setUp(self):
        self.admin, self.admin_actor = make_user("admin", Role.ADMIN)

    def test_creates_user_with_profile_and_role(self):
        user = services.create_user(
            self.admin_actor,
            email="Carla@Example.com",
            password="abcdef",
            full_name="Carla Souza",
            role=Role.EDITOR,
        )
        user.refresh_from_db()
        self.assertEqual(user.username, "carla@example.com")
        self.assertEqual(user.profile.role, Role.EDITOR)
        self.assertEqual(user.profile.full_name, "Carla Souza")
        self.assertTrue(user.check_password("abcdef"))

    def test_short_password_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            services.create_user(self.admin_actor, "x@example.com", "12345", "Xavier")
        self.assertIn("password", ctx.exception.message_dict)
        self.assertFalse(User.objects.filter(username="x@example.com").exists())

    def test_duplicate_email_rejected(self):
        services.create_user(self.admin_actor, "dup@example.com", "abcdef", "First")
        with self.assertRaises(ValidationError) as ctx:
            services.create_user(self.admin_actor, "DUP@example.com", "abcdef", "Second")
        self.assertIn("email", ctx.exception.message_dict)

    def test_editor_cannot_create_users(self):
        _, editor = make_user("editor", Role.EDITOR)
        with self.assertRaises(AuthorizationError):
            services.create_user(editor, "y@example.com", "abcdef", "Yara")


class RoleAndDeleteTestCase(TestCase):

    def setUp(self):
        self.admin, self.admin_actor = make_user("admin", Role.ADMIN)
        self.other, _ = make_user("other", Role.VIEWER)

    def test_change_role(self):
        services.change_role(self.admin_actor, self.other.profile, Role.EDITOR)
        self.assertEqual(UserProfile.objects.get(user=self.other).role, Role.EDITOR)

    def test_last_admin_cannot_be_demoted(self):
        with self.assertRaises(ValidationError):
            services.change_role(self.admin_actor, self.admin.profile, Role.VIEWER)
        self.assertEqual(UserProfile.objects.get(user=self.admin).role, Role.ADMIN)

    def test_cannot_delete_self(self):
        with self.assertRaises(ValidationError):
            services.delete_user(self.admin_actor, self.admin)
        self.assertTrue(User.objects.filter(pk=self.admin.pk).exists())

    def test_delete_user(self):
        services.delete_user(self.admin_actor, self.other)
        self.assertFalse(User.objects.filter(pk=self.other.pk).exists())
        self.assertFalse(UserProfile.objects.filter(user_id=self.other.pk).exists())

    def test_users_page_lists_profiles(self):
        self.client.login(username="admin", password=PASSWORD)
        resp = self.client.get(reverse("accounts:user_list"))
        self.assertEqual(resp.status_code, 200)
        self.assertContains(resp, "Other")

    def test_create_user_view(self):
        self.client.login(username="admin", password=PASSWORD)
        resp = self.client.post(reverse("accounts:user_create"), {
            "email": "new@example.com",
            "full_name": "New Person",
            "password": "abcdef",
            "role": Role.EDITOR,
        })
        self.assertRedirects(resp, reverse("accounts:user_list"))
        self.assertEqual(User.objects.get(username="new@example.com").profile.role, Role.EDITOR)


class OwnProfileTestCase(TestCase):

    def test_viewer_can_edit_own_preferences(self):
        user, _ = make_user("vera", Role.VIEWER)
        self.client.login(username="vera", password=PASSWORD)
        resp = self.client.post(reverse("accounts:profile"), {
            "full_name": "Vera Lima",
            "notification_email": "alerts@example.com",
            "receive_alerts": "on",
        })
        self.assertRedirects(resp, reverse("accounts:profile"))
        profile = UserProfile.objects.get(user=user)
        self.assertEqual(profile.full_name, "Vera Lima")
        self.assertTrue(profile.receive_alerts)
        self.assertFalse(profile.receive_reports)
        self.assertEqual(profile.role, Role.VIEWER)


class AlertRecipientsTestCase(TestCase):

    def test_only_opted_in_with_fallback_and_dedupe(self):
        a, _ = make_user("ana")
        b, _ = make_user("bia")
        c, _ = make_user("caio")
        UserProfile.objects.filter(user=a).update(receive_alerts=True)
        UserProfile.objects.filter(user=b).update(receive_alerts=True, notification_email="ANA@example.com")
        UserProfile.objects.filter(user=c).update(receive_alerts=False)

        recipients = alert_recipients()

        self.assertEqual([email for _, email in recipients], ["ana@example.com"])
