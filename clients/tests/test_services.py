"""
Clients — Model & Service Tests

@file clients/tests/test_services.py
"""

import pytest
from django.core.exceptions import ValidationError

from clients.models import Client
from clients.services import ClientService
from core.exceptions import ResourceNotFoundError
from core.models import ActivityLog
from tests.factories import ClientFactory, DepartmentClientFactory

pytestmark = pytest.mark.django_db


class TestClientModel:
    def test_patient_keeps_only_patient_id(self):
        client = ClientFactory(patient_id='PAT-1', department_id='DEP-9')
        client.refresh_from_db()
        assert client.patient_id == 'PAT-1'
        assert client.department_id == ''
        assert client.identifier == 'PAT-1'

    def test_department_identifier(self):
        client = DepartmentClientFactory(department_id='ICU')
        assert client.identifier == 'ICU'
        assert client.patient_id == ''

    def test_str(self):
        assert str(ClientFactory(name='Jane Doe')) == 'Jane Doe (Patient)'


class TestClientService:
    def test_create(self):
        client = ClientService.create_client(
            name='Cardiology', client_type=Client.TypeChoices.DEPARTMENT, department_id='CARD',
        )
        assert client.pk is not None
        assert ActivityLog.objects.filter(
            entity_type=ActivityLog.EntityType.CLIENT, entity_id=str(client.pk),
        ).exists()

    def test_create_requires_known_type(self):
        with pytest.raises(ValidationError):
            ClientService.create_client(name='Someone', client_type='visitor')

    def test_switching_type_clears_old_identifier(self):
        client = ClientFactory(patient_id='PAT-7')
        client = ClientService.update_client(
            client_id=client.pk, client_type=Client.TypeChoices.DEPARTMENT, department_id='ER',
        )
        client.refresh_from_db()
        assert client.patient_id == ''
        assert client.department_id == 'ER'

    def test_delete_is_soft(self):
        client = ClientFactory()
        ClientService.delete_client(client=client)
        client.refresh_from_db()
        assert client.is_deleted is True
        with pytest.raises(ResourceNotFoundError):
            ClientService.update_client(client_id=client.pk, name='again')

    def test_snapshot(self):
        client = ClientFactory(name='John Roe', patient_id='PAT-3')
        snapshot = ClientService.snapshot(client)
        assert snapshot['name'] == 'John Roe'
        assert snapshot['client_type'] == 'patient'
        assert snapshot['id'] == str(client.pk)
