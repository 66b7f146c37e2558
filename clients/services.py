"""
Clients — Service Layer

@file clients/services.py
"""

import logging

from django.db import transaction

from core.constants import ACTIVITY_ACTION_CREATED, ACTIVITY_ACTION_DELETED, ACTIVITY_ACTION_UPDATED
from core.exceptions import ResourceNotFoundError
from core.models import ActivityLog
from core.services import ActivityService

from .models import Client

logger = logging.getLogger('medstock')

SNAPSHOT_FIELDS = [
    'name', 'client_type', 'contact_person', 'contact_number',
    'email', 'patient_id', 'department_id',
]


class ClientService:

    @staticmethod
    def snapshot(client: Client) -> dict:
        return ActivityService.snapshot(client, fields=SNAPSHOT_FIELDS)

    @staticmethod
    @transaction.atomic
    def create_client(*, actor=None, **fields) -> Client:
        client = Client(**fields)
        client.full_clean()
        client.created_by = actor
        client.save()

        ActivityService.log(
            actor=actor,
            action=ACTIVITY_ACTION_CREATED,
            entity_type=ActivityLog.EntityType.CLIENT,
            entity_id=client.pk,
            details=f'Added {client.get_client_type_display().lower()} {client.name}',
        )
        return client

    @staticmethod
    @transaction.atomic
    def update_client(*, client_id, actor=None, **fields) -> Client:
        try:
            client = Client.objects.select_for_update().get(pk=client_id, is_deleted=False)
        except Client.DoesNotExist:
            raise ResourceNotFoundError(detail='Client not found.')

        for field, value in fields.items():
            if hasattr(client, field) and field not in ('id', 'pk'):
                setattr(client, field, value)

        client.updated_by = actor
        client.full_clean()
        client.save()

        ActivityService.log(
            actor=actor,
            action=ACTIVITY_ACTION_UPDATED,
            entity_type=ActivityLog.EntityType.CLIENT,
            entity_id=client.pk,
            details=f'Updated client {client.name}',
        )
        return client

    @staticmethod
    @transaction.atomic
    def delete_client(*, client: Client, actor=None) -> None:
        client.soft_delete(user=actor)
        ActivityService.log(
            actor=actor,
            action=ACTIVITY_ACTION_DELETED,
            entity_type=ActivityLog.EntityType.CLIENT,
            entity_id=client.pk,
            details=f'Deleted client {client.name}',
        )
