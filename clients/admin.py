"""
Clients — Django Admin Configuration

@file clients/admin.py
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from .models import Client


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ('name', 'client_type', 'identifier', 'contact_person', 'contact_number', 'email')
    list_filter = ('client_type', 'is_deleted')
    search_fields = ('name', 'patient_id', 'department_id', 'contact_person', 'email')
    readonly_fields = ('id', 'created_at', 'updated_at', 'created_by', 'updated_by')
    list_per_page = 50

    fieldsets = (
        (None, {
            'fields': ('id', 'name', 'client_type', 'patient_id', 'department_id'),
        }),
        (_('Contact'), {
            'fields': ('contact_person', 'contact_number', 'email'),
        }),
        (_('Audit'), {
            'fields': ('created_at', 'updated_at', 'created_by', 'updated_by'),
            'classes': ('collapse',),
        }),
    )
