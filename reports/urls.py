"""
Reports — URL Configuration

@file reports/urls.py
"""

from django.urls import path

from .views import DashboardView, ReportView

app_name = 'reports'

urlpatterns = [
    path('dashboard/', DashboardView.as_view(), name='dashboard'),
    path('<str:report_type>/', ReportView.as_view(), name='report'),
]
