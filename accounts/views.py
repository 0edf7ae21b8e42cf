from django.contrib import messages
from django.contrib.auth import get_user_model
from django.contrib.auth.decorators import login_required
from django.core.exceptions import ValidationError
from django.shortcuts import render, redirect, get_object_or_404
from django.views.decorators.http import require_POST

from core.forms import apply_validation_error

from .forms import UserCreateForm, RoleForm, ProfileForm
from .models import UserProfile
from .permissions import Capability, capability_required, get_actor
from . import services

User = get_user_model()


@capability_required(Capability.MANAGE_USERS)
def user_list(request):
    """
    Users page: every account with its role and a role-change form.
    """
    profiles = UserProfile.objects.select_related("user").order_by("full_name", "user__username")
    context = {
        "current": "users",
        "profiles": profiles,
        "role_form": RoleForm(),
    }
    return render(request, "accounts/user_list.html", context)


@capability_required(Capability.MANAGE_USERS)
def user_create(request):
    if request.method == "POST":
        form = UserCreateForm(request.POST)
        if form.is_valid():
            try:
                services.create_user(
                    get_actor(request),
                    email=form.cleaned_data["email"],
                    password=form.cleaned_data["password"],
                    full_name=form.cleaned_data["full_name"],
                    role=form.cleaned_data["role"],
                )
            except ValidationError as exc:
                apply_validation_error(form, exc)
            else:
                messages.success(request, "User created.")
                return redirect("accounts:user_list")
    else:
        form = UserCreateForm()

    return render(request, "accounts/user_form.html", {"current": "users", "form": form})


@require_POST
@capability_required(Capability.MANAGE_USERS)
def user_change_role(request, user_id: int):
    profile = get_object_or_404(UserProfile.objects.select_related("user"), user_id=user_id)
    form = RoleForm(request.POST)
    if not form.is_valid():
        messages.error(request, "Unknown role.")
        return redirect("accounts:user_list")

    try:
        services.change_role(get_actor(request), profile, form.cleaned_data["role"])
    except ValidationError as exc:
        messages.error(request, " ".join(exc.messages))
    else:
        messages.success(request, f"Role updated for {profile.display_name}.")
    return redirect("accounts:user_list")


@capability_required(Capability.MANAGE_USERS)
def user_delete(request, user_id: int):
    target = get_object_or_404(User, pk=user_id)

    if request.method == "POST":
        try:
            services.delete_user(get_actor(request), target)
        except ValidationError as exc:
            messages.error(request, " ".join(exc.messages))
        else:
            messages.success(request, "User deleted.")
        return redirect("accounts:user_list")

    return render(request, "accounts/user_confirm_delete.html", {"current": "users", "target": target})


@login_required
def profile_edit(request):
    """
    Let any signed-in user edit their own name and notification preferences.
    """
    profile, _ = UserProfile.objects.get_or_create(user=request.user)

    if request.method == "POST":
        form = ProfileForm(request.POST, instance=profile)
        if form.is_valid():
            try:
                services.update_own_profile(get_actor(request), **form.cleaned_data)
            except ValidationError as exc:
                apply_validation_error(form, exc)
            else:
                messages.success(request, "Profile saved.")
                return redirect("accounts:profile")
    else:
        form = ProfileForm(instance=profile)

    return render(request, "accounts/profile_form.html", {"current": "profile", "form": form, "profile": profile})
