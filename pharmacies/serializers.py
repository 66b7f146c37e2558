"""
Pharmacies — Serializers

@file pharmacies/serializers.py
"""

from rest_framework import serializers

from .models import Pharmacy
from .services import PharmacyService


class PharmacyReadSerializer(serializers.ModelSerializer):
    outstanding_balance = serializers.SerializerMethodField()

    class Meta:
        model = Pharmacy
        fields = [
            'id', 'name', 'contact_person', 'contact_number', 'email', 'address',
            'registration_number', 'credit_limit', 'payment_terms',
            'outstanding_balance',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields

    def get_outstanding_balance(self, obj):
        return PharmacyService.outstanding_balance(obj)


class PharmacyWriteSerializer(serializers.ModelSerializer):
    registration_number = serializers.CharField(max_length=100)
    credit_limit = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=0, required=False)
    payment_terms = serializers.IntegerField(min_value=0, required=False)

    class Meta:
        model = Pharmacy
        fields = [
            'id', 'name', 'contact_person', 'contact_number', 'email', 'address',
            'registration_number', 'credit_limit', 'payment_terms',
        ]
        read_only_fields = ['id']
        # Registration-number uniqueness is enforced by the service (409).
        validators = []
