from django.contrib import admin
from .models import Event, ContractInstallment


class ViewOnlyAdminMixin:
    """
    Events and installments are written through events.services only, which
    renumbers installments, bumps the event version and checks the role.
    The admin can browse them but not change them.
    """

    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


class ContractInstallmentInline(ViewOnlyAdminMixin, admin.TabularInline):
    model = ContractInstallment
    extra = 0
    ordering = ("installment_number",)


@admin.register(Event)
class EventAdmin(ViewOnlyAdminMixin, admin.ModelAdmin):
    list_display = ("event_date", "name", "event_type", "reservation_status", "has_contract")
    list_filter = ("event_type", "event_category", "reservation_status", "has_contract")
    search_fields = ("name", "observations")
    date_hierarchy = "event_date"
    inlines = [ContractInstallmentInline]


@admin.register(ContractInstallment)
class ContractInstallmentAdmin(ViewOnlyAdminMixin, admin.ModelAdmin):
    list_display = ("event", "installment_number", "amount", "due_date", "payment_status")
    list_filter = ("payment_status",)
