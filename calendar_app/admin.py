from django.contrib import admin
from .models import Holiday


@admin.register(Holiday)
class HolidayAdmin(admin.ModelAdmin):
    list_display = ("date", "name", "is_national")
    list_filter = ("year", "is_national")
    search_fields = ("name",)
