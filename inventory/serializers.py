"""
Inventory — Serializers

@file inventory/serializers.py
"""

from rest_framework import serializers

from .models import Product


class ProductReadSerializer(serializers.ModelSerializer):
    is_low_stock = serializers.BooleanField(read_only=True)
    is_expired = serializers.BooleanField(read_only=True)
    is_expiring_soon = serializers.SerializerMethodField()
    days_to_expiry = serializers.IntegerField(read_only=True)

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'description', 'category',
            'quantity', 'unit', 'manufacturer', 'batch_number',
            'expiry_date', 'reorder_level', 'cost_per_unit',
            'is_low_stock', 'is_expired', 'is_expiring_soon', 'days_to_expiry',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields

    def get_is_expiring_soon(self, obj):
        return obj.is_expiring_soon()


class ProductWriteSerializer(serializers.ModelSerializer):
    quantity = serializers.IntegerField(min_value=0)
    reorder_level = serializers.IntegerField(min_value=0, required=False, default=0)
    cost_per_unit = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'description', 'category',
            'quantity', 'unit', 'manufacturer', 'batch_number',
            'expiry_date', 'reorder_level', 'cost_per_unit',
        ]
        read_only_fields = ['id']


class AddStockSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1)
