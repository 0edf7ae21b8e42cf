from django.contrib import admin
from .models import UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "full_name", "role", "receive_alerts", "receive_reports")
    list_filter = ("role", "receive_alerts", "receive_reports")
    search_fields = ("full_name", "user__username", "user__email")
