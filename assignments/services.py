"""
Assignments — Service Layer

Creating an assignment snapshots the product and client and decrements
the product quantity. Deleting one is a soft delete that leaves the
product quantity untouched.

@file assignments/services.py
"""

import logging

from django.db import transaction

from clients.services import ClientService
from core.constants import ACTIVITY_ACTION_ASSIGNED, ACTIVITY_ACTION_DELETED
from core.models import ActivityLog
from core.services import ActivityService
from inventory.services import ProductService

from .models import Assignment

logger = logging.getLogger('medstock')


class AssignmentService:

    @staticmethod
    @transaction.atomic
    def create_assignment(*, product, client, quantity: int, notes: str = '', actor=None) -> Assignment:
        """
        ``quantity <= product.quantity`` is checked by the serializer at
        validation time only; this method does not re-check it.
        """
        product_snapshot = ProductService.decrement_stock(product, quantity)

        assignment = Assignment(
            product=product,
            client=client,
            product_snapshot=product_snapshot,
            client_snapshot=ClientService.snapshot(client),
            quantity=quantity,
            notes=notes,
            assigned_by=actor if getattr(actor, 'is_authenticated', False) else None,
        )
        assignment.created_by = assignment.assigned_by
        assignment.save()

        ActivityService.log(
            actor=actor,
            action=ACTIVITY_ACTION_ASSIGNED,
            entity_type=ActivityLog.EntityType.ASSIGNMENT,
            entity_id=assignment.pk,
            details=f'Assigned {quantity} {product.unit} of {product.name} to {client.name}',
        )
        logger.info('Assignment %s created: %d x %s', assignment.pk, quantity, product.pk)
        return assignment

    @staticmethod
    @transaction.atomic
    def delete_assignment(*, assignment: Assignment, actor=None) -> None:
        assignment.soft_delete(user=actor)
        ActivityService.log(
            actor=actor,
            action=ACTIVITY_ACTION_DELETED,
            entity_type=ActivityLog.EntityType.ASSIGNMENT,
            entity_id=assignment.pk,
            details=f'Deleted assignment {assignment}',
        )

    @staticmethod
    def recent(limit: int = 5):
        return (
            Assignment.objects
            .filter(is_deleted=False)
            .select_related('assigned_by')
            .order_by('-created_at')[:limit]
        )
