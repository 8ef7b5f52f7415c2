from django.contrib import admin

from .models import Invoice, InvoiceItem


class InvoiceItemInline(admin.TabularInline):
    """Inline admin for invoice lines."""

    model = InvoiceItem
    extra = 0
    fields = ["product", "quantity", "rate", "total"]
    readonly_fields = ["product", "quantity", "rate", "total"]
    can_delete = False


@admin.register(Invoice)
class InvoiceAdmin(admin.ModelAdmin):
    """
    Read-only admin for invoices.

    Invoices are only written by the invoice transaction, never edited.
    """

    list_display = ["invoice_number", "date", "customer_id", "total", "line_total"]
    search_fields = ["invoice_number"]
    date_hierarchy = "date"
    readonly_fields = ["invoice_number", "date", "total", "customer", "created_at", "updated_at"]
    inlines = [InvoiceItemInline]

    fieldsets = (
        (None, {"fields": ("invoice_number", "date", "customer", "total")}),
        ("Timestamps", {"fields": ("created_at", "updated_at"), "classes": ("collapse",)}),
    )

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
