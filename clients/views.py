"""
Clients — Views

@file clients/views.py
"""

from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated

from .models import Client
from .serializers import ClientReadSerializer, ClientWriteSerializer
from .services import ClientService


class ClientViewSet(viewsets.ModelViewSet):
    """Patients and departments. Filter with ?client_type=patient."""

    permission_classes = [IsAuthenticated]
    filterset_fields = ['client_type']
    search_fields = ['name', 'contact_person', 'email', 'patient_id', 'department_id']
    ordering_fields = ['name', 'client_type', 'created_at']
    ordering = ['name']

    def get_queryset(self):
        return Client.objects.filter(is_deleted=False)

    def get_serializer_class(self):
        if self.action in ('list', 'retrieve'):
            return ClientReadSerializer
        return ClientWriteSerializer

    def perform_create(self, serializer):
        serializer.instance = ClientService.create_client(
            actor=self.request.user, **serializer.validated_data,
        )

    def perform_update(self, serializer):
        serializer.instance = ClientService.update_client(
            client_id=self.get_object().pk,
            actor=self.request.user,
            **serializer.validated_data,
        )

    def perform_destroy(self, instance):
        ClientService.delete_client(client=instance, actor=self.request.user)
