"""
Clients — Serializers

@file clients/serializers.py
"""

from rest_framework import serializers

from .models import Client


class ClientReadSerializer(serializers.ModelSerializer):
    client_type_display = serializers.CharField(source='get_client_type_display', read_only=True)
    identifier = serializers.CharField(read_only=True)

    class Meta:
        model = Client
        fields = [
            'id', 'name', 'client_type', 'client_type_display',
            'contact_person', 'contact_number', 'email',
            'patient_id', 'department_id', 'identifier',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class ClientWriteSerializer(serializers.ModelSerializer):
    class Meta:
        model = Client
        fields = [
            'id', 'name', 'client_type',
            'contact_person', 'contact_number', 'email',
            'patient_id', 'department_id',
        ]
        read_only_fields = ['id']

    def validate(self, attrs):
        client_type = attrs.get('client_type', getattr(self.instance, 'client_type', None))
        if client_type == Client.TypeChoices.PATIENT:
            attrs['department_id'] = ''
        elif client_type == Client.TypeChoices.DEPARTMENT:
            attrs['patient_id'] = ''
        return attrs
