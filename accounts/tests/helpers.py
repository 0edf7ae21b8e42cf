from django.contrib.auth import get_user_model

from accounts.models import Role, UserProfile
from accounts.permissions import actor_for_user

User = get_user_model()

PASSWORD = "secret123"


def make_user(username, role=Role.VIEWER, **extra):
    """
    Create an auth user with the given role and return (user, actor).

    The user is re-fetched so user.profile reflects the role.
    """
    user = User.objects.create_user(
        username=username,
        email=extra.pop("email", f"{username}@example.com"),
        password=PASSWORD,
        **extra,
    )
    UserProfile.objects.filter(user=user).update(role=role, full_name=username.title())
    user = User.objects.get(pk=user.pk)
    return user, actor_for_user(user)
