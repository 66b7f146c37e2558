"""
Inventory — Django Admin Configuration

@file inventory/admin.py
"""

from django.contrib import admin
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _

from .models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = (
        'name', 'category', 'quantity', 'unit', 'reorder_level',
        'stock_badge', 'batch_number', 'expiry_date', 'cost_per_unit',
    )
    list_filter = ('category', 'is_deleted', 'expiry_date')
    search_fields = ('name', 'batch_number', 'manufacturer', 'category')
    readonly_fields = ('id', 'created_at', 'updated_at', 'created_by', 'updated_by')
    date_hierarchy = 'expiry_date'
    list_per_page = 50

    fieldsets = (
        (None, {
            'fields': ('id', 'name', 'description', 'category', 'manufacturer'),
        }),
        (_('Stock'), {
            'fields': ('quantity', 'unit', 'reorder_level', 'cost_per_unit'),
        }),
        (_('Batch'), {
            'fields': ('batch_number', 'expiry_date'),
        }),
        (_('Audit'), {
            'fields': ('created_at', 'updated_at', 'created_by', 'updated_by'),
            'classes': ('collapse',),
        }),
        (_('Soft Delete'), {
            'fields': ('is_deleted', 'deleted_at', 'deleted_by'),
            'classes': ('collapse',),
        }),
    )

    @admin.display(description=_('Stock'))
    def stock_badge(self, obj):
        if obj.is_expired:
            color, label = '#ef4444', _('Expired')
        elif obj.is_low_stock:
            color, label = '#f97316', _('Low')
        else:
            color, label = '#22c55e', _('OK')
        return format_html(
            '<span style="background:{}; color:#fff; padding:2px 8px; '
            'border-radius:4px; font-size:11px; font-weight:600;">{}</span>',
            color, label,
        )
