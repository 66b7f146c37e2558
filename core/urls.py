"""
Core — URL Configuration

@file core/urls.py
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import ActivityLogViewSet

app_name = 'activity'

router = DefaultRouter()
router.register('', ActivityLogViewSet, basename='activity')

urlpatterns = [
    path('', include(router.urls)),
]
