"""
Billing — Serializers

Percentages are range-checked here; the calculation functions accept
whatever they are given.

@file billing/serializers.py
"""

from decimal import Decimal

from rest_framework import serializers

from inventory.models import Product
from pharmacies.models import Pharmacy

from .models import Invoice, InvoiceItem, Payment


def _percentage_field(**kwargs):
    return serializers.DecimalField(
        max_digits=5, decimal_places=2,
        min_value=Decimal('0'), max_value=Decimal('100'),
        **kwargs,
    )


class InvoiceItemReadSerializer(serializers.ModelSerializer):
    class Meta:
        model = InvoiceItem
        fields = [
            'id', 'product', 'product_snapshot', 'quantity', 'unit_price',
            'discount_percentage', 'discount_amount', 'total_amount',
        ]
        read_only_fields = fields


class InvoiceItemWriteSerializer(serializers.Serializer):
    product = serializers.PrimaryKeyRelatedField(queryset=Product.objects.filter(is_deleted=False))
    quantity = serializers.IntegerField(min_value=1)
    unit_price = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal('0'), required=False,
    )
    discount_percentage = _percentage_field(required=False, default=Decimal('0'))


class InvoiceListSerializer(serializers.ModelSerializer):
    pharmacy_name = serializers.SerializerMethodField()
    status_display = serializers.CharField(source='get_status_display', read_only=True)
    balance_due = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta:
        model = Invoice
        fields = [
            'id', 'invoice_number', 'pharmacy', 'pharmacy_name',
            'issue_date', 'due_date', 'total_amount', 'paid_amount', 'balance_due',
            'status', 'status_display', 'created_at',
        ]
        read_only_fields = fields

    def get_pharmacy_name(self, obj):
        return obj.pharmacy_snapshot.get('name', '')


class InvoiceDetailSerializer(InvoiceListSerializer):
    items = serializers.SerializerMethodField()

    class Meta(InvoiceListSerializer.Meta):
        fields = InvoiceListSerializer.Meta.fields + [
            'pharmacy_snapshot', 'subtotal', 'discount_percentage', 'discount_amount',
            'tax_percentage', 'tax_amount', 'notes', 'items', 'updated_at',
        ]
        read_only_fields = fields

    def get_items(self, obj):
        return InvoiceItemReadSerializer(obj.items.filter(is_deleted=False), many=True).data


class InvoiceCreateSerializer(serializers.Serializer):
    pharmacy = serializers.PrimaryKeyRelatedField(queryset=Pharmacy.objects.filter(is_deleted=False))
    issue_date = serializers.DateField(required=False)
    due_date = serializers.DateField(required=False)
    discount_percentage = _percentage_field(required=False, default=Decimal('0'))
    tax_percentage = _percentage_field(required=False, default=Decimal('0'))
    notes = serializers.CharField(required=False, allow_blank=True, default='')
    items = InvoiceItemWriteSerializer(many=True)

    def validate_items(self, items):
        if not items:
            raise serializers.ValidationError('At least one item is required.')
        requested = {}
        for line in items:
            product = line['product']
            requested[product.pk] = requested.get(product.pk, 0) + line['quantity']
            if requested[product.pk] > product.quantity:
                raise serializers.ValidationError(
                    f'Only {product.quantity} {product.unit} of {product.name} in stock.',
                )
        return items

    def validate(self, attrs):
        issue_date, due_date = attrs.get('issue_date'), attrs.get('due_date')
        if issue_date and due_date and due_date < issue_date:
            raise serializers.ValidationError({'due_date': 'Due date cannot be before the issue date.'})
        return attrs


class InvoiceUpdateSerializer(serializers.Serializer):
    pharmacy = serializers.PrimaryKeyRelatedField(
        queryset=Pharmacy.objects.filter(is_deleted=False), required=False,
    )
    issue_date = serializers.DateField(required=False)
    due_date = serializers.DateField(required=False)
    discount_percentage = _percentage_field(required=False)
    tax_percentage = _percentage_field(required=False)
    notes = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        invoice = self.instance
        issue_date = attrs.get('issue_date', getattr(invoice, 'issue_date', None))
        due_date = attrs.get('due_date', getattr(invoice, 'due_date', None))
        if issue_date and due_date and due_date < issue_date:
            raise serializers.ValidationError({'due_date': 'Due date cannot be before the issue date.'})
        return attrs


class InvoiceStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Invoice.StatusChoices.choices)


class PaymentReadSerializer(serializers.ModelSerializer):
    invoice_number = serializers.CharField(source='invoice.invoice_number', read_only=True)
    payment_method_display = serializers.CharField(source='get_payment_method_display', read_only=True)

    class Meta:
        model = Payment
        fields = [
            'id', 'invoice', 'invoice_number', 'payment_date', 'amount',
            'payment_method', 'payment_method_display', 'reference_number',
            'notes', 'created_at',
        ]
        read_only_fields = fields


class PaymentWriteSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal('0.01'))
    payment_date = serializers.DateField(required=False)
    payment_method = serializers.ChoiceField(
        choices=Payment.MethodChoices.choices, default=Payment.MethodChoices.CASH,
    )
    reference_number = serializers.CharField(required=False, allow_blank=True, default='')
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class PaymentCreateSerializer(PaymentWriteSerializer):
    invoice = serializers.PrimaryKeyRelatedField(queryset=Invoice.objects.filter(is_deleted=False))
