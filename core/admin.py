"""
Core — Django Admin Configuration

Read-only admin for ActivityLog.

@file core/admin.py
"""

from django.contrib import admin
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _

from core.models import ActivityLog


@admin.register(ActivityLog)
class ActivityLogAdmin(admin.ModelAdmin):
    """Read-only activity viewer for administrators."""

    list_display = (
        'created_at', 'action_badge', 'entity_type', 'entity_id', 'actor',
    )
    list_filter = ('entity_type', 'action', 'created_at')
    search_fields = ('entity_id', 'details', 'actor__email', 'actor__name')
    readonly_fields = (
        'id', 'actor', 'action', 'entity_type', 'entity_id', 'details', 'created_at',
    )
    date_hierarchy = 'created_at'
    list_select_related = ('actor',)
    list_per_page = 50
    ordering = ('-created_at',)

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    @admin.display(description=_('Action'))
    def action_badge(self, obj):
        colors = {
            'created': '#22c55e',
            'updated': '#3b82f6',
            'deleted': '#ef4444',
            'assigned': '#f97316',
            'stock_added': '#14b8a6',
            'status_changed': '#eab308',
            'payment_recorded': '#8b5cf6',
            'signed_in': '#06b6d4',
            'signed_out': '#6b7280',
        }
        color = colors.get(obj.action, '#6b7280')
        return format_html(
            '<span style="background:{}; color:#fff; padding:2px 8px; '
            'border-radius:4px; font-size:11px; font-weight:600;">{}</span>',
            color, obj.action,
        )
