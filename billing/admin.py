"""
Billing — Django Admin Configuration

@file billing/admin.py
"""

from django.contrib import admin
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _

from .models import Invoice, InvoiceItem, Payment

STATUS_COLORS = {
    Invoice.StatusChoices.DRAFT: '#64748b',
    Invoice.StatusChoices.ISSUED: '#3b82f6',
    Invoice.StatusChoices.PARTIAL: '#f59e0b',
    Invoice.StatusChoices.PAID: '#22c55e',
    Invoice.StatusChoices.OVERDUE: '#ef4444',
    Invoice.StatusChoices.CANCELLED: '#6b7280',
}


class InvoiceItemInline(admin.TabularInline):
    model = InvoiceItem
    extra = 0
    fields = ('product', 'quantity', 'unit_price', 'discount_percentage', 'total_amount', 'is_deleted')
    readonly_fields = fields
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


class PaymentInline(admin.TabularInline):
    model = Payment
    extra = 0
    fields = ('payment_date', 'amount', 'payment_method', 'reference_number', 'is_deleted')
    readonly_fields = fields
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Invoice)
class InvoiceAdmin(admin.ModelAdmin):
    list_display = (
        'invoice_number', 'pharmacy', 'issue_date', 'due_date',
        'total_amount', 'paid_amount', 'status_badge',
    )
    list_filter = ('status', 'is_deleted', 'issue_date')
    search_fields = ('invoice_number', 'notes')
    readonly_fields = (
        'id', 'invoice_number', 'pharmacy_snapshot', 'subtotal', 'discount_amount',
        'tax_amount', 'total_amount', 'paid_amount', 'created_at', 'updated_at',
        'created_by', 'updated_by',
    )
    date_hierarchy = 'issue_date'
    inlines = [InvoiceItemInline, PaymentInline]
    list_per_page = 50

    @admin.display(description=_('Status'))
    def status_badge(self, obj):
        return format_html(
            '<span style="background:{}; color:#fff; padding:2px 8px; '
            'border-radius:4px; font-size:11px; font-weight:600;">{}</span>',
            STATUS_COLORS.get(obj.status, '#6b7280'), obj.get_status_display(),
        )


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ('invoice', 'payment_date', 'amount', 'payment_method', 'reference_number')
    list_filter = ('payment_method', 'is_deleted')
    search_fields = ('invoice__invoice_number', 'reference_number')
    readonly_fields = ('id', 'created_at', 'updated_at', 'created_by')
    date_hierarchy = 'payment_date'
