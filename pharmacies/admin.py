"""
Pharmacies — Django Admin Configuration

@file pharmacies/admin.py
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from .models import Pharmacy


@admin.register(Pharmacy)
class PharmacyAdmin(admin.ModelAdmin):
    list_display = (
        'name', 'registration_number', 'contact_person', 'contact_number',
        'credit_limit', 'payment_terms', 'created_at',
    )
    list_filter = ('is_deleted', 'payment_terms')
    search_fields = ('name', 'registration_number', 'contact_person', 'email')
    readonly_fields = ('id', 'created_at', 'updated_at', 'created_by', 'updated_by')
    list_per_page = 50

    fieldsets = (
        (None, {
            'fields': ('id', 'name', 'registration_number', 'address'),
        }),
        (_('Contact'), {
            'fields': ('contact_person', 'contact_number', 'email'),
        }),
        (_('Credit'), {
            'fields': ('credit_limit', 'payment_terms'),
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
