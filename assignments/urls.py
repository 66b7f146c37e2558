"""
Assignments — URL Configuration

@file assignments/urls.py
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import AssignmentViewSet

app_name = 'assignments'

router = DefaultRouter()
router.register('', AssignmentViewSet, basename='assignment')

urlpatterns = [
    path('', include(router.urls)),
]
