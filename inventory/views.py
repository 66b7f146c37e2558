"""
Inventory — Views

@file inventory/views.py
"""

from django.conf import settings
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .serializers import AddStockSerializer, ProductReadSerializer, ProductWriteSerializer
from .services import ProductService


def _positive_int_param(request, name, default):
    raw = request.query_params.get(name)
    if raw in (None, ''):
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValidationError({name: 'Must be an integer.'})
    if value < 0:
        raise ValidationError({name: 'Must be zero or greater.'})
    return value


class ProductViewSet(viewsets.ModelViewSet):
    """
    Product stock. Search by name / manufacturer / batch, filter by
    category. Deletes are soft and never touch assignments or invoices.
    """

    permission_classes = [IsAuthenticated]
    filterset_fields = ['category', 'unit', 'manufacturer']
    search_fields = ['name', 'description', 'category', 'manufacturer', 'batch_number']
    ordering_fields = ['name', 'quantity', 'expiry_date', 'cost_per_unit', 'created_at']
    ordering = ['name']

    def get_queryset(self):
        return ProductService.active()

    def get_serializer_class(self):
        if self.action in ('list', 'retrieve', 'low_stock', 'expiring'):
            return ProductReadSerializer
        return ProductWriteSerializer

    def perform_create(self, serializer):
        serializer.instance = ProductService.create_product(
            actor=self.request.user, **serializer.validated_data,
        )

    def perform_update(self, serializer):
        serializer.instance = ProductService.update_product(
            product_id=self.get_object().pk,
            actor=self.request.user,
            **serializer.validated_data,
        )

    def perform_destroy(self, instance):
        ProductService.delete_product(product=instance, actor=self.request.user)

    @action(detail=True, methods=['post'], url_path='add-stock')
    def add_stock(self, request, pk=None):
        ser = AddStockSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        product = ProductService.add_stock(
            product_id=self.get_object().pk,
            quantity=ser.validated_data['quantity'],
            actor=request.user,
        )
        return Response({'success': True, 'data': ProductReadSerializer(product).data})

    @action(detail=False, methods=['get'], url_path='low-stock')
    def low_stock(self, request):
        products = ProductService.low_stock()
        page = self.paginate_queryset(products)
        if page is not None:
            return self.get_paginated_response(ProductReadSerializer(page, many=True).data)
        return Response({'success': True, 'data': ProductReadSerializer(products, many=True).data})

    @action(detail=False, methods=['get'], url_path='expiring')
    def expiring(self, request):
        days = _positive_int_param(request, 'days', settings.EXPIRY_WARNING_DAYS)
        products = ProductService.expiring_soon(days=days)
        page = self.paginate_queryset(products)
        if page is not None:
            return self.get_paginated_response(ProductReadSerializer(page, many=True).data)
        return Response({'success': True, 'data': ProductReadSerializer(products, many=True).data})

    @action(detail=False, methods=['get'], url_path='categories')
    def categories(self, request):
        return Response({'success': True, 'data': ProductService.categories()})
