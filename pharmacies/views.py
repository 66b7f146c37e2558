"""
Pharmacies — Views

@file pharmacies/views.py
"""

from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated

from .models import Pharmacy
from .serializers import PharmacyReadSerializer, PharmacyWriteSerializer
from .services import PharmacyService


class PharmacyViewSet(viewsets.ModelViewSet):
    """Pharmacies that are invoiced for supplied stock."""

    permission_classes = [IsAuthenticated]
    search_fields = ['name', 'registration_number', 'contact_person', 'email']
    ordering_fields = ['name', 'credit_limit', 'payment_terms', 'created_at']
    ordering = ['name']

    def get_queryset(self):
        return Pharmacy.objects.filter(is_deleted=False)

    def get_serializer_class(self):
        if self.action in ('list', 'retrieve'):
            return PharmacyReadSerializer
        return PharmacyWriteSerializer

    def perform_create(self, serializer):
        serializer.instance = PharmacyService.create_pharmacy(
            actor=self.request.user, **serializer.validated_data,
        )

    def perform_update(self, serializer):
        serializer.instance = PharmacyService.update_pharmacy(
            pharmacy_id=self.get_object().pk,
            actor=self.request.user,
            **serializer.validated_data,
        )

    def perform_destroy(self, instance):
        PharmacyService.delete_pharmacy(pharmacy=instance, actor=self.request.user)
