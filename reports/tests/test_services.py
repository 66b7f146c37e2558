"""
Tests — ReportService: dashboard counts and report filters/charts.

@file reports/tests/test_services.py
"""

from datetime import timedelta

import pytest
from django.utils import timezone

from assignments.models import Assignment
from assignments.services import AssignmentService
from reports.services import ReportService
from tests.factories import (
    ClientFactory,
    InvoiceFactory,
    ProductFactory,
    UserFactory,
)

pytestmark = pytest.mark.django_db


def _today():
    return timezone.now().date()


class TestDashboard:
    def test_stats(self):
        UserFactory()
        UserFactory(is_active=False)
        ProductFactory(quantity=100)
        ProductFactory(quantity=5, reorder_level=10)
        ProductFactory(expiry_date=_today() + timedelta(days=10))
        ProductFactory(expiry_date=_today() - timedelta(days=1))
        client = ClientFactory()
        AssignmentService.create_assignment(product=ProductFactory(), client=client, quantity=3)
        InvoiceFactory(status='issued')
        InvoiceFactory(status='overdue')
        InvoiceFactory(status='paid')
        InvoiceFactory(status='draft')

        stats = ReportService.dashboard_stats()

        assert stats['total_products'] == 5
        assert stats['total_clients'] == 1
        assert stats['low_stock_items'] == 1
        assert stats['expiring_items'] == 1
        assert stats['expired_items'] == 1
        assert stats['recent_assignments'] == 1
        assert stats['active_users'] == 1
        assert stats['total_invoices'] == 4
        assert stats['pending_payments'] == 2

    def test_recent_lists_are_limited(self):
        client = ClientFactory()
        product = ProductFactory(quantity=100)
        for _ in range(7):
            AssignmentService.create_assignment(product=product, client=client, quantity=1)

        data = ReportService.dashboard()

        assert len(data['recent_assignments']) == 5
        assert len(data['recent_activities']) == 5


class TestInventoryReport:
    def test_category_chart(self):
        ProductFactory(category='Antibiotics', quantity=10)
        ProductFactory(category='Antibiotics', quantity=15)
        ProductFactory(category='Vaccines', quantity=4)

        report = ReportService.inventory()

        assert report['chart']['labels'] == ['Antibiotics', 'Vaccines']
        total_items, product_types = report['chart']['datasets']
        assert total_items == {'label': 'Total Items', 'data': [25, 4]}
        assert product_types == {'label': 'Product Types', 'data': [2, 1]}

    def test_category_filter(self):
        ProductFactory(category='Antibiotics')
        ProductFactory(category='Vaccines')
        report = ReportService.inventory(category='Vaccines')
        assert [p.category for p in report['rows']] == ['Vaccines']


class TestExpiryReport:
    def test_expired_and_expiring_sorted(self):
        later = ProductFactory(expiry_date=_today() + timedelta(days=60))
        expired = ProductFactory(expiry_date=_today() - timedelta(days=5))
        soon = ProductFactory(expiry_date=_today() + timedelta(days=3))
        ProductFactory(expiry_date=_today() + timedelta(days=200))

        report = ReportService.expiry()

        assert list(report['rows']) == [expired, soon, later]
        assert sum(report['chart']['datasets'][0]['data']) == 3

    def test_custom_window(self):
        ProductFactory(expiry_date=_today() + timedelta(days=60))
        assert ReportService.expiry(days=30)['rows'].count() == 0


class TestAssignmentsReport:
    def test_date_category_and_client_filters(self):
        ward = ClientFactory(name='Ward A')
        patient = ClientFactory(name='Jane Doe')
        antibiotic = ProductFactory(category='Antibiotics', quantity=100)
        vaccine = ProductFactory(category='Vaccines', quantity=100)

        old = AssignmentService.create_assignment(product=antibiotic, client=ward, quantity=5)
        Assignment.objects.filter(pk=old.pk).update(created_at=timezone.now() - timedelta(days=40))
        AssignmentService.create_assignment(product=antibiotic, client=patient, quantity=2)
        AssignmentService.create_assignment(product=vaccine, client=ward, quantity=7)

        since = _today() - timedelta(days=10)
        assert ReportService.assignments(start_date=since)['rows'].count() == 2
        assert ReportService.assignments(end_date=since)['rows'].count() == 1
        assert ReportService.assignments(category='Antibiotics')['rows'].count() == 2
        assert ReportService.assignments(client=ward)['rows'].count() == 2

    def test_chart_ranks_clients_by_quantity(self):
        product = ProductFactory(quantity=100)
        small, big = ClientFactory(name='Small'), ClientFactory(name='Big')
        AssignmentService.create_assignment(product=product, client=small, quantity=1)
        AssignmentService.create_assignment(product=product, client=big, quantity=4)
        AssignmentService.create_assignment(product=product, client=big, quantity=4)

        chart = ReportService.assignments()['chart']

        assert chart['labels'] == ['Big', 'Small']
        assert chart['datasets'][0]['data'] == [8, 1]
