"""
Users — DRF Permission Classes

@file users/permissions.py
"""

from rest_framework.permissions import BasePermission


class IsSuperAdmin(BasePermission):
    """User management is restricted to the superadmin role (or a Django superuser)."""

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return user.is_superuser or getattr(user, 'is_superadmin', False)
