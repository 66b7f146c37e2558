"""
Assignments — Serializers

@file assignments/serializers.py
"""

from rest_framework import serializers

from clients.models import Client
from inventory.models import Product

from .models import Assignment


class AssignmentReadSerializer(serializers.ModelSerializer):
    assigned_by_name = serializers.CharField(source='assigned_by.name', read_only=True, default=None)

    class Meta:
        model = Assignment
        fields = [
            'id', 'product', 'product_snapshot', 'client', 'client_snapshot',
            'quantity', 'assigned_by', 'assigned_by_name', 'notes',
            'created_at',
        ]
        read_only_fields = fields


class AssignmentWriteSerializer(serializers.Serializer):
    product = serializers.PrimaryKeyRelatedField(queryset=Product.objects.filter(is_deleted=False))
    client = serializers.PrimaryKeyRelatedField(queryset=Client.objects.filter(is_deleted=False))
    quantity = serializers.IntegerField(min_value=1)
    notes = serializers.CharField(required=False, allow_blank=True, default='')

    def validate(self, attrs):
        product = attrs['product']
        if attrs['quantity'] > product.quantity:
            raise serializers.ValidationError({
                'quantity': f'Only {product.quantity} {product.unit} of {product.name} in stock.',
            })
        return attrs
