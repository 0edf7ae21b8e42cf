from django import forms

from .models import Role, UserProfile
from .services import MIN_PASSWORD_LENGTH


class UserCreateForm(forms.Form):
    email = forms.EmailField()
    full_name = forms.CharField(max_length=255, min_length=3)
    password = forms.CharField(
        widget=forms.PasswordInput,
        min_length=MIN_PASSWORD_LENGTH,
    )
    role = forms.ChoiceField(choices=Role.choices, initial=Role.VIEWER)


class RoleForm(forms.Form):
    role = forms.ChoiceField(choices=Role.choices)


class ProfileForm(forms.ModelForm):
    class Meta:
        model = UserProfile
        fields = ["full_name", "notification_email", "receive_alerts", "receive_reports"]
