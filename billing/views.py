"""
Billing — Views

Invoices with nested item, status, PDF and payment actions, plus a
flat payment list.

@file billing/views.py
"""

from django.http import HttpResponse
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .models import Invoice, Payment
from .pdf import build_invoice_pdf, invoice_filename
from .serializers import (
    InvoiceCreateSerializer,
    InvoiceDetailSerializer,
    InvoiceItemReadSerializer,
    InvoiceItemWriteSerializer,
    InvoiceListSerializer,
    InvoiceStatusSerializer,
    InvoiceUpdateSerializer,
    PaymentCreateSerializer,
    PaymentReadSerializer,
    PaymentWriteSerializer,
)
from .services import InvoiceService, PaymentService


class InvoiceViewSet(viewsets.ModelViewSet):
    """
    Invoices raised against pharmacies. Creating one decrements stock for
    each line. Status changes go through the ``status`` action.
    """

    permission_classes = [IsAuthenticated]
    filterset_fields = ['status', 'pharmacy']
    search_fields = ['invoice_number', 'notes']
    ordering_fields = ['issue_date', 'due_date', 'total_amount', 'invoice_number', 'created_at']
    ordering = ['-issue_date', '-invoice_number']

    def get_queryset(self):
        return Invoice.objects.filter(is_deleted=False).select_related('pharmacy')

    def get_serializer_class(self):
        if self.action == 'list':
            return InvoiceListSerializer
        if self.action == 'create':
            return InvoiceCreateSerializer
        if self.action in ('update', 'partial_update'):
            return InvoiceUpdateSerializer
        return InvoiceDetailSerializer

    def create(self, request, *args, **kwargs):
        ser = InvoiceCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        invoice = InvoiceService.create_invoice(actor=request.user, **ser.validated_data)
        return Response(
            {'success': True, 'data': InvoiceDetailSerializer(invoice).data},
            status=status.HTTP_201_CREATED,
        )

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        invoice = self.get_object()
        ser = InvoiceUpdateSerializer(invoice, data=request.data, partial=partial)
        ser.is_valid(raise_exception=True)
        invoice = InvoiceService.update_invoice(
            invoice_id=invoice.pk,
            actor=request.user,
            **ser.validated_data,
        )
        return Response({'success': True, 'data': InvoiceDetailSerializer(invoice).data})

    def perform_destroy(self, instance):
        InvoiceService.delete_invoice(invoice=instance, actor=self.request.user)

    @action(detail=True, methods=['post'], url_path='items')
    def add_item(self, request, pk=None):
        ser = InvoiceItemWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        invoice = self.get_object()
        item = InvoiceService.add_item(invoice=invoice, actor=request.user, **ser.validated_data)
        invoice.refresh_from_db()
        return Response(
            {
                'success': True,
                'data': {
                    'item': InvoiceItemReadSerializer(item).data,
                    'invoice': InvoiceDetailSerializer(invoice).data,
                },
            },
            status=status.HTTP_201_CREATED,
        )

    @action(detail=True, methods=['delete'], url_path=r'items/(?P<item_id>[^/.]+)')
    def remove_item(self, request, pk=None, item_id=None):
        invoice = self.get_object()
        InvoiceService.remove_item(invoice=invoice, item_id=item_id, actor=request.user)
        invoice.refresh_from_db()
        return Response({'success': True, 'data': InvoiceDetailSerializer(invoice).data})

    @action(detail=True, methods=['post'], url_path='status')
    def change_status(self, request, pk=None):
        ser = InvoiceStatusSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        invoice = InvoiceService.update_status(
            invoice_id=self.get_object().pk,
            status=ser.validated_data['status'],
            actor=request.user,
        )
        return Response({'success': True, 'data': InvoiceDetailSerializer(invoice).data})

    @action(detail=True, methods=['get'], url_path='pdf')
    def pdf(self, request, pk=None):
        invoice = self.get_object()
        response = HttpResponse(build_invoice_pdf(invoice), content_type='application/pdf')
        response['Content-Disposition'] = f'attachment; filename="{invoice_filename(invoice)}"'
        return response

    @action(detail=True, methods=['get', 'post'], url_path='payments')
    def payments(self, request, pk=None):
        invoice = self.get_object()
        if request.method == 'POST':
            ser = PaymentWriteSerializer(data=request.data)
            ser.is_valid(raise_exception=True)
            payment = PaymentService.record_payment(
                invoice_id=invoice.pk, actor=request.user, **ser.validated_data,
            )
            return Response(
                {'success': True, 'data': PaymentReadSerializer(payment).data},
                status=status.HTTP_201_CREATED,
            )

        payments = PaymentService.for_invoice(invoice).select_related('invoice')
        page = self.paginate_queryset(payments)
        if page is not None:
            return self.get_paginated_response(PaymentReadSerializer(page, many=True).data)
        return Response({'success': True, 'data': PaymentReadSerializer(payments, many=True).data})


class PaymentViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """Payments are recorded and deleted, never edited."""

    permission_classes = [IsAuthenticated]
    filterset_fields = ['invoice', 'payment_method']
    search_fields = ['reference_number', 'notes', 'invoice__invoice_number']
    ordering_fields = ['payment_date', 'amount', 'created_at']
    ordering = ['-payment_date', '-created_at']

    def get_queryset(self):
        return Payment.objects.filter(is_deleted=False).select_related('invoice')

    def get_serializer_class(self):
        if self.action == 'create':
            return PaymentCreateSerializer
        return PaymentReadSerializer

    def create(self, request, *args, **kwargs):
        ser = PaymentCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = dict(ser.validated_data)
        invoice = data.pop('invoice')
        payment = PaymentService.record_payment(invoice_id=invoice.pk, actor=request.user, **data)
        return Response(
            {'success': True, 'data': PaymentReadSerializer(payment).data},
            status=status.HTTP_201_CREATED,
        )

    def perform_destroy(self, instance):
        PaymentService.delete_payment(payment=instance, actor=self.request.user)
