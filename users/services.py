"""
Users — Service Layer

All user-related business logic. No HTTP context — services receive
plain Python arguments and raise typed exceptions.

@file users/services.py
"""

import logging

from django.contrib.auth import authenticate
from django.db import transaction

from core.constants import (
    ACTIVITY_ACTION_CREATED,
    ACTIVITY_ACTION_DELETED,
    ACTIVITY_ACTION_SIGNED_UP,
    ACTIVITY_ACTION_UPDATED,
)
from core.exceptions import (
    AuthenticationFailedError,
    DuplicateResourceError,
    ResourceNotFoundError,
)
from core.models import ActivityLog
from core.services import ActivityService

from .identity import IdentityProviderClient, map_provider_user
from .models import User
from .signals import SIGNED_IN, SIGNED_OUT, TOKEN_REFRESHED, session_changed

logger = logging.getLogger('medstock')


# ---------------------------------------------------------------------------
# User service
# ---------------------------------------------------------------------------

def _trusted_role(profile: dict) -> str:
    role = profile.get('app_role')
    if role in User.RoleChoices.values:
        return role
    if role:
        logger.warning('Ignoring unknown provider role %r for %s', role, profile.get('email'))
    return User.RoleChoices.AUTHENTICATED


class UserService:
    """CRUD for User accounts and mirroring of provider accounts."""

    @staticmethod
    @transaction.atomic
    def create_user(*, email: str, password: str | None = None, actor=None, **extra_fields) -> User:
        if User.objects.filter(email__iexact=email).exists():
            raise DuplicateResourceError(detail=f'Email {email} already registered.')

        user = User.objects.create_user(email=email, password=password, **extra_fields)
        user.created_by = actor
        user.save(update_fields=['created_by'])

        ActivityService.log(
            actor=actor,
            action=ACTIVITY_ACTION_CREATED,
            entity_type=ActivityLog.EntityType.USER,
            entity_id=user.pk,
            details=f'Created user {user.email} ({user.role})',
        )
        return user

    @staticmethod
    @transaction.atomic
    def update_user(*, user_id, actor=None, **fields) -> User:
        try:
            user = User.objects.select_for_update().get(pk=user_id, is_deleted=False)
        except User.DoesNotExist:
            raise ResourceNotFoundError()

        password = fields.pop('password', None)
        for field, value in fields.items():
            if hasattr(user, field) and field not in ('id', 'pk'):
                setattr(user, field, value)
        if password:
            user.set_password(password)

        user.updated_by = actor
        user.save()

        ActivityService.log(
            actor=actor,
            action=ACTIVITY_ACTION_UPDATED,
            entity_type=ActivityLog.EntityType.USER,
            entity_id=user.pk,
            details=f'Updated user {user.email}',
        )
        return user

    @staticmethod
    @transaction.atomic
    def delete_user(*, user: User, actor=None) -> None:
        user.is_active = False
        user.save(update_fields=['is_active', 'updated_at'])
        user.soft_delete(user=actor)
        ActivityService.log(
            actor=actor,
            action=ACTIVITY_ACTION_DELETED,
            entity_type=ActivityLog.EntityType.USER,
            entity_id=user.pk,
            details=f'Deleted user {user.email}',
        )

    @staticmethod
    @transaction.atomic
    def sync_from_provider(profile: dict) -> User:
        """
        Find or create the local mirror of a provider account. New accounts
        take their role from ``app_role`` when it is a known role and
        otherwise get the non-privileged default; the self-declared
        metadata ``role`` is never trusted. The local role is authoritative
        once the account exists; only the provider id, email and a
        non-empty name are refreshed.
        """
        provider_id = profile.get('id')
        email = profile.get('email') or ''

        user = None
        if provider_id:
            user = User.objects.filter(provider_id=provider_id).first()
        if user is None and email:
            user = User.objects.filter(email__iexact=email).first()

        if user is None:
            user = User.objects.create_user(
                email=email,
                name=profile.get('name', ''),
                role=_trusted_role(profile),
                provider_id=provider_id,
            )
            logger.info('Mirrored provider account %s as user %s', provider_id, user.pk)
            return user

        changed = []
        if provider_id and user.provider_id != provider_id:
            user.provider_id = provider_id
            changed.append('provider_id')
        if email and user.email != email:
            user.email = email
            changed.append('email')
        if profile.get('name') and user.name != profile['name']:
            user.name = profile['name']
            changed.append('name')
        if changed:
            user.save(update_fields=changed + ['updated_at'])
        return user


# ---------------------------------------------------------------------------
# Auth service
# ---------------------------------------------------------------------------

class AuthService:
    """Sign-in, sign-up, session retrieval, refresh and sign-out."""

    @staticmethod
    def issue_tokens(user: User) -> dict:
        from .serializers import TokenClaimsSerializer

        refresh = TokenClaimsSerializer.get_token(user)
        return {'access': str(refresh.access_token), 'refresh': str(refresh)}

    @classmethod
    def sign_in(cls, *, email: str, password: str, request=None) -> dict:
        user = authenticate(request=request, email=email, password=password)
        if user is None:
            raise AuthenticationFailedError(detail='Invalid credentials or account not active.')

        session = getattr(user, 'provider_session', None)
        session_changed.send(sender=cls, user=user, session=session, event=SIGNED_IN)
        logger.info('User %s signed in', user.pk)

        return {**cls.issue_tokens(user), 'user': user, 'session': session}

    @classmethod
    def sign_up(cls, *, email: str, password: str, name: str = '') -> dict:
        payload = IdentityProviderClient().sign_up(email, password, metadata={'name': name} if name else None)

        session = payload if 'access_token' in payload else None
        provider_user = payload.get('user') if session else payload
        user = UserService.sync_from_provider(map_provider_user(provider_user or {}))

        ActivityService.log(
            actor=user,
            action=ACTIVITY_ACTION_SIGNED_UP,
            entity_type=ActivityLog.EntityType.USER,
            entity_id=user.pk,
            details=f'{user.email} signed up',
        )
        return {
            'user': user,
            'session': session,
            'confirmation_required': session is None,
        }

    @staticmethod
    def get_session(*, access_token: str) -> dict:
        """Resolve a provider access token into the mapped local user."""
        provider_user = IdentityProviderClient().get_user(access_token)
        user = UserService.sync_from_provider(map_provider_user(provider_user))
        if user.is_deleted or not user.is_active:
            raise AuthenticationFailedError(detail='Account is not active.')
        return {**AuthService.issue_tokens(user), 'user': user}

    @classmethod
    def refresh_provider_session(cls, *, refresh_token: str) -> dict:
        session = IdentityProviderClient().refresh(refresh_token)
        user = UserService.sync_from_provider(map_provider_user(session.get('user') or {}))
        session_changed.send(sender=cls, user=user, session=session, event=TOKEN_REFRESHED)
        return session

    @classmethod
    def sign_out(cls, *, user, provider_access_token: str | None = None) -> None:
        if provider_access_token:
            IdentityProviderClient().sign_out(provider_access_token)
        session_changed.send(sender=cls, user=user, session=None, event=SIGNED_OUT)
        logger.info('User %s signed out', user.pk)
