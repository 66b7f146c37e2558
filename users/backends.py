"""
Users — Authentication Backend

Authenticates email + password against the identity provider and
mirrors the provider account into the local User table.

@file users/backends.py
"""

from django.contrib.auth.backends import ModelBackend

from users.identity import IdentityProviderClient, map_provider_user


class IdentityProviderBackend(ModelBackend):
    """
    Password check is delegated to the provider. The provider session is
    attached to the returned user as ``provider_session``. Provider
    rejections propagate as IdentityProviderError.
    """

    def authenticate(self, request, email=None, password=None, **kwargs):
        if email is None or password is None:
            return None

        from users.services import UserService

        session = IdentityProviderClient().sign_in(email, password)
        user = UserService.sync_from_provider(map_provider_user(session.get('user') or {}))

        if user.is_deleted or not self.user_can_authenticate(user):
            return None

        user.provider_session = session
        return user
