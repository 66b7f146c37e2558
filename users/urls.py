"""
Users — Auth URL Configuration

Endpoints: login, signup, session, refresh, logout, me.

@file users/urls.py
"""

from django.urls import path

from .views import (
    LoginView,
    LogoutView,
    MeView,
    SessionView,
    SignupView,
    TokenRefreshAPIView,
)

app_name = 'auth'

urlpatterns = [
    path('login/', LoginView.as_view(), name='login'),
    path('signup/', SignupView.as_view(), name='signup'),
    path('session/', SessionView.as_view(), name='session'),
    path('refresh/', TokenRefreshAPIView.as_view(), name='token-refresh'),
    path('logout/', LogoutView.as_view(), name='logout'),
    path('me/', MeView.as_view(), name='me'),
]
