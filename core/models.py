"""
Core — Base Models & Activity Log

Provides reusable abstract models for timestamps, soft-delete, and
actor fields. Also defines the ActivityLog model, the append-only
record of user actions shown on the dashboard.

@file core/models.py
"""

import uuid

from django.conf import settings
from django.core.exceptions import PermissionDenied
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


# ---------------------------------------------------------------------------
# Abstract base models (mixins)
# ---------------------------------------------------------------------------

class TimestampMixin(models.Model):
    """Adds created_at / updated_at to any model."""

    created_at = models.DateTimeField(
        _('created at'), auto_now_add=True, db_index=True,
    )
    updated_at = models.DateTimeField(
        _('updated at'), auto_now=True,
    )

    class Meta:
        abstract = True


class AuditFieldsMixin(models.Model):
    """Adds created_by / updated_by foreign keys for actor tracking."""

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='+',
        verbose_name=_('created by'),
    )
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='+',
        verbose_name=_('updated by'),
    )

    class Meta:
        abstract = True


class SoftDeleteMixin(models.Model):
    """
    Soft-delete. Rows disappear from every list but stay in the table;
    nothing referencing them is cascaded or blocked.
    """

    is_deleted = models.BooleanField(_('deleted'), default=False, db_index=True)
    deleted_at = models.DateTimeField(_('deleted at'), null=True, blank=True)
    deleted_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='+',
        verbose_name=_('deleted by'),
    )

    class Meta:
        abstract = True

    def soft_delete(self, user=None):
        self.is_deleted = True
        self.deleted_at = timezone.now()
        self.deleted_by = user
        self.save(update_fields=['is_deleted', 'deleted_at', 'deleted_by', 'updated_at'])

    def restore(self, user=None):
        self.is_deleted = False
        self.deleted_at = None
        self.deleted_by = None
        self.save(update_fields=['is_deleted', 'deleted_at', 'deleted_by', 'updated_at'])


class BaseModel(TimestampMixin, AuditFieldsMixin):
    """
    Standard base for all MedStock models.
    UUID PK + timestamps + actor fields.
    """

    id = models.UUIDField(
        primary_key=True, default=uuid.uuid4, editable=False,
    )

    class Meta:
        abstract = True


class RegulatedModel(BaseModel, SoftDeleteMixin):
    """Base for records the dashboard can delete; they are only ever soft-deleted."""

    class Meta:
        abstract = True


# ---------------------------------------------------------------------------
# Activity Log: append-only record of user actions
# ---------------------------------------------------------------------------

class ActivityLog(models.Model):
    """
    One row per user action (created a product, assigned stock, recorded a
    payment, signed in...). INSERT ONLY — never updated or deleted.
    """

    class EntityType(models.TextChoices):
        PRODUCT = 'product', _('Product')
        CLIENT = 'client', _('Client')
        PHARMACY = 'pharmacy', _('Pharmacy')
        ASSIGNMENT = 'assignment', _('Assignment')
        USER = 'user', _('User')
        INVOICE = 'invoice', _('Invoice')
        PAYMENT = 'payment', _('Payment')

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='activity_logs',
        verbose_name=_('actor'),
    )
    action = models.CharField(_('action'), max_length=40, db_index=True)
    entity_type = models.CharField(
        _('entity type'), max_length=20,
        choices=EntityType.choices, db_index=True,
    )
    entity_id = models.CharField(_('entity ID'), max_length=40, blank=True, db_index=True)
    details = models.TextField(_('details'), blank=True, default='')

    created_at = models.DateTimeField(_('created at'), auto_now_add=True, db_index=True)

    class Meta:
        verbose_name = _('activity log')
        verbose_name_plural = _('activity logs')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['entity_type', 'entity_id'], name='core_activi_entity__4c1f0e_idx'),
            models.Index(fields=['actor', 'created_at'], name='core_activi_actor_i_9a2b7d_idx'),
        ]

    def __str__(self):
        return f'{self.action} {self.entity_type}:{self.entity_id} by {self.actor_id}'

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise PermissionDenied('ActivityLog is insert-only; updates are not allowed.')
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise PermissionDenied('ActivityLog records cannot be deleted.')
