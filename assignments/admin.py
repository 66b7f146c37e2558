"""
Assignments — Django Admin Configuration

Read-only: assignments are only created through the service layer.

@file assignments/admin.py
"""

from django.contrib import admin

from .models import Assignment


@admin.register(Assignment)
class AssignmentAdmin(admin.ModelAdmin):
    list_display = ('created_at', '__str__', 'quantity', 'assigned_by', 'is_deleted')
    list_filter = ('is_deleted', 'created_at')
    search_fields = ('notes', 'assigned_by__email')
    readonly_fields = (
        'id', 'product', 'client', 'product_snapshot', 'client_snapshot',
        'quantity', 'assigned_by', 'notes', 'created_at',
    )
    list_select_related = ('assigned_by',)
    date_hierarchy = 'created_at'
    list_per_page = 50

    def has_add_permission(self, request):
        return False
