"""
Pharmacies — Service Layer

Business logic for pharmacy billing entities: creation with a unique
registration number, updates, soft deletion and balance lookups.

@file pharmacies/services.py
"""

import logging
from decimal import Decimal

from django.db import transaction
from django.db.models import F, Sum

from core.constants import ACTIVITY_ACTION_CREATED, ACTIVITY_ACTION_DELETED, ACTIVITY_ACTION_UPDATED
from core.exceptions import DuplicateResourceError, ResourceNotFoundError
from core.models import ActivityLog
from core.services import ActivityService

from .models import Pharmacy

logger = logging.getLogger('medstock')

SNAPSHOT_FIELDS = [
    'name', 'contact_person', 'contact_number', 'email', 'address',
    'registration_number', 'credit_limit', 'payment_terms',
]


class PharmacyService:
    """Pharmacy lifecycle: create, update, delete, outstanding balance."""

    @staticmethod
    def snapshot(pharmacy: Pharmacy) -> dict:
        return ActivityService.snapshot(pharmacy, fields=SNAPSHOT_FIELDS)

    @staticmethod
    def _check_registration_number(registration_number: str, exclude_pk=None) -> None:
        qs = Pharmacy.objects.filter(registration_number=registration_number, is_deleted=False)
        if exclude_pk:
            qs = qs.exclude(pk=exclude_pk)
        if qs.exists():
            raise DuplicateResourceError(
                detail=f'Registration number {registration_number} already in use.',
            )

    @staticmethod
    @transaction.atomic
    def create_pharmacy(*, actor=None, **fields) -> Pharmacy:
        PharmacyService._check_registration_number(fields.get('registration_number', ''))

        pharmacy = Pharmacy(**fields)
        pharmacy.full_clean(validate_constraints=False)
        pharmacy.created_by = actor
        pharmacy.save()

        ActivityService.log(
            actor=actor,
            action=ACTIVITY_ACTION_CREATED,
            entity_type=ActivityLog.EntityType.PHARMACY,
            entity_id=pharmacy.pk,
            details=f'Added pharmacy {pharmacy.name}',
        )
        return pharmacy

    @staticmethod
    @transaction.atomic
    def update_pharmacy(*, pharmacy_id, actor=None, **fields) -> Pharmacy:
        try:
            pharmacy = Pharmacy.objects.select_for_update().get(
                pk=pharmacy_id, is_deleted=False,
            )
        except Pharmacy.DoesNotExist:
            raise ResourceNotFoundError(detail='Pharmacy not found.')

        if 'registration_number' in fields:
            PharmacyService._check_registration_number(
                fields['registration_number'], exclude_pk=pharmacy.pk,
            )

        for field, value in fields.items():
            if hasattr(pharmacy, field) and field not in ('id', 'pk'):
                setattr(pharmacy, field, value)
        pharmacy.updated_by = actor
        pharmacy.full_clean(validate_constraints=False)
        pharmacy.save()

        ActivityService.log(
            actor=actor,
            action=ACTIVITY_ACTION_UPDATED,
            entity_type=ActivityLog.EntityType.PHARMACY,
            entity_id=pharmacy.pk,
            details=f'Updated pharmacy {pharmacy.name}',
        )
        return pharmacy

    @staticmethod
    @transaction.atomic
    def delete_pharmacy(*, pharmacy: Pharmacy, actor=None) -> None:
        """Soft delete. Invoices keep their pharmacy snapshot."""
        pharmacy.soft_delete(user=actor)
        ActivityService.log(
            actor=actor,
            action=ACTIVITY_ACTION_DELETED,
            entity_type=ActivityLog.EntityType.PHARMACY,
            entity_id=pharmacy.pk,
            details=f'Deleted pharmacy {pharmacy.name}',
        )

    @staticmethod
    def outstanding_balance(pharmacy: Pharmacy) -> Decimal:
        """Sum of unpaid balances on the pharmacy's live, non-cancelled invoices."""
        result = (
            pharmacy.invoices
            .filter(is_deleted=False)
            .exclude(status__in=['cancelled', 'draft'])
            .aggregate(balance=Sum(F('total_amount') - F('paid_amount')))
        )
        return result['balance'] or Decimal('0.00')
