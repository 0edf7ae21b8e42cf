from django.contrib import admin
from .models import Expense


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    list_display = ("expense_date", "description", "category", "amount", "event")
    list_filter = ("category", "is_recurring")
    search_fields = ("description", "notes")
    date_hierarchy = "expense_date"
