"""
Users — User Management URL Configuration

Superadmin-only account management routed under /v1/users/.
Sign-in and session endpoints live in users/urls.py.

@file users/urls_users.py
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import UserViewSet

app_name = 'users'

router = DefaultRouter()
router.register('', UserViewSet, basename='user')

urlpatterns = [
    path('', include(router.urls)),
]
