"""
Users — Models

Custom User model with UUID PK, email login and a three-level role.
Accounts are mirrored from the identity provider on first sign-in
(``provider_id``) or created locally by a superadmin.

@file users/models.py
"""

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models
from django.utils.translation import gettext_lazy as _

from core.models import RegulatedModel
from users.managers import UserManager


class User(AbstractBaseUser, PermissionsMixin, RegulatedModel):
    """Dashboard user. Identified by email; role drives user management access."""

    class RoleChoices(models.TextChoices):
        SUPERADMIN = 'superadmin', _('Super Admin')
        ADMIN = 'admin', _('Admin')
        AUTHENTICATED = 'authenticated', _('Authenticated')

    email = models.EmailField(_('email'), unique=True)
    name = models.CharField(_('name'), max_length=150, blank=True)
    role = models.CharField(
        _('role'), max_length=20,
        choices=RoleChoices.choices, default=RoleChoices.AUTHENTICATED,
        db_index=True,
    )
    provider_id = models.CharField(
        _('identity provider ID'), max_length=64,
        unique=True, null=True, blank=True,
    )

    is_staff = models.BooleanField(_('staff status'), default=False)
    is_active = models.BooleanField(_('active'), default=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        verbose_name = _('user')
        verbose_name_plural = _('users')
        ordering = ['-created_at']

    def __str__(self):
        return self.name or self.email

    def get_full_name(self):
        return self.name or self.email

    def get_short_name(self):
        return self.name.split(' ')[0] if self.name else self.email

    @property
    def is_superadmin(self) -> bool:
        return self.role == self.RoleChoices.SUPERADMIN
