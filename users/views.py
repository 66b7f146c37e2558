"""
Users — Views

Auth endpoints (login, signup, session, refresh, logout, me) and the
user management CRUD ViewSet.

@file users/views.py
"""

import logging

from rest_framework import status, viewsets
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenRefreshView

from .models import User
from .permissions import IsSuperAdmin
from .serializers import (
    LoginSerializer,
    LogoutSerializer,
    SessionSerializer,
    SignupSerializer,
    UserReadSerializer,
    UserWriteSerializer,
)
from .services import AuthService, UserService

logger = logging.getLogger('medstock')


# ---------------------------------------------------------------------------
# Auth views
# ---------------------------------------------------------------------------

class LoginView(APIView):
    """POST /v1/auth/login — Sign in with the identity provider and obtain a JWT pair."""
    permission_classes = [AllowAny]
    throttle_scope = 'anon'

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AuthService.sign_in(request=request, **serializer.validated_data)

        return Response({
            'success': True,
            'data': {
                'access': result['access'],
                'refresh': result['refresh'],
                'user': UserReadSerializer(result['user']).data,
                'session': result['session'],
            },
        })


class SignupView(APIView):
    """POST /v1/auth/signup — Register with the identity provider."""
    permission_classes = [AllowAny]
    throttle_scope = 'anon'

    def post(self, request):
        serializer = SignupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AuthService.sign_up(**serializer.validated_data)
        message = (
            'Check your email for confirmation!'
            if result['confirmation_required'] else 'Account created.'
        )
        return Response(
            {
                'success': True,
                'data': {
                    'user': UserReadSerializer(result['user']).data,
                    'session': result['session'],
                    'confirmation_required': result['confirmation_required'],
                    'message': message,
                },
            },
            status=status.HTTP_201_CREATED,
        )


class SessionView(APIView):
    """POST /v1/auth/session — Restore a session from a provider access token."""
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = SessionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AuthService.get_session(access_token=serializer.validated_data['access_token'])
        return Response({
            'success': True,
            'data': {
                'access': result['access'],
                'refresh': result['refresh'],
                'user': UserReadSerializer(result['user']).data,
            },
        })


class LogoutView(APIView):
    """POST /v1/auth/logout — Blacklist the refresh token and end the provider session."""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = LogoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        refresh_token = serializer.validated_data.get('refresh')
        if refresh_token:
            try:
                RefreshToken(refresh_token).blacklist()
            except TokenError as exc:
                logger.info('Logout with unusable refresh token: %s', exc)

        AuthService.sign_out(
            user=request.user,
            provider_access_token=serializer.validated_data.get('provider_access_token'),
        )
        return Response({'success': True, 'data': None}, status=status.HTTP_200_OK)


class TokenRefreshAPIView(TokenRefreshView):
    """
    POST /v1/auth/refresh — Rotate the local refresh token. When
    ``provider_refresh_token`` is supplied the provider session is
    refreshed too and returned under ``session``.
    """

    def post(self, request, *args, **kwargs):
        response = super().post(request, *args, **kwargs)
        provider_refresh_token = request.data.get('provider_refresh_token')
        if provider_refresh_token:
            response.data['session'] = AuthService.refresh_provider_session(
                refresh_token=provider_refresh_token,
            )
        return response


class MeView(APIView):
    """GET /v1/auth/me — Return the current authenticated user."""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response({
            'success': True,
            'data': UserReadSerializer(request.user).data,
        })


# ---------------------------------------------------------------------------
# User management ViewSet
# ---------------------------------------------------------------------------

class UserViewSet(viewsets.ModelViewSet):
    """CRUD for user accounts. Superadmin only."""

    permission_classes = [IsAuthenticated, IsSuperAdmin]
    filterset_fields = ['role', 'is_active']
    search_fields = ['name', 'email', 'role']
    ordering_fields = ['created_at', 'name', 'email', 'role']
    ordering = ['-created_at']

    def get_queryset(self):
        return User.objects.filter(is_deleted=False)

    def get_serializer_class(self):
        if self.action in ('list', 'retrieve'):
            return UserReadSerializer
        return UserWriteSerializer

    def create(self, request, *args, **kwargs):
        serializer = UserWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        user = UserService.create_user(
            email=data.pop('email'),
            password=data.pop('password', None),
            actor=request.user,
            **data,
        )
        return Response(
            {'success': True, 'data': UserReadSerializer(user).data},
            status=status.HTTP_201_CREATED,
        )

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = UserWriteSerializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        user = UserService.update_user(
            user_id=instance.pk,
            actor=request.user,
            **serializer.validated_data,
        )
        return Response({'success': True, 'data': UserReadSerializer(user).data})

    def perform_destroy(self, instance):
        UserService.delete_user(user=instance, actor=self.request.user)
