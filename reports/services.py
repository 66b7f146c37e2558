"""
Reports — Service Layer

Read-only aggregates for the dashboard and the three reports
(inventory, expiry, assignments). Each report returns its rows as a
queryset plus chart-ready data: ``{'labels': [...], 'datasets': [{'label',
'data'}]}``.

@file reports/services.py
"""

from collections import OrderedDict
from datetime import timedelta

from django.conf import settings
from django.db.models import Count, Sum
from django.utils import timezone

from assignments.models import Assignment
from assignments.services import AssignmentService
from billing.models import Invoice
from clients.models import Client
from core.services import ActivityService
from inventory.services import ProductService
from users.models import User

INVENTORY = 'inventory'
EXPIRY = 'expiry'
ASSIGNMENTS = 'assignments'
REPORT_TYPES = (INVENTORY, EXPIRY, ASSIGNMENTS)

PENDING_INVOICE_STATUSES = (
    Invoice.StatusChoices.ISSUED,
    Invoice.StatusChoices.PARTIAL,
    Invoice.StatusChoices.OVERDUE,
)
RECENT_ASSIGNMENT_DAYS = 7
TOP_CLIENTS = 10


def _chart(labels, *datasets):
    return {
        'labels': list(labels),
        'datasets': [{'label': label, 'data': list(data)} for label, data in datasets],
    }


class ReportService:

    @staticmethod
    def dashboard_stats() -> dict:
        today = timezone.now().date()
        products = ProductService.active()
        return {
            'total_products': products.count(),
            'total_clients': Client.objects.filter(is_deleted=False).count(),
            'low_stock_items': ProductService.low_stock().count(),
            'expiring_items': ProductService.expiring_soon(days=settings.EXPIRY_WARNING_DAYS).count(),
            'expired_items': products.filter(expiry_date__lte=today).count(),
            'recent_assignments': Assignment.objects.filter(
                is_deleted=False,
                created_at__gte=timezone.now() - timedelta(days=RECENT_ASSIGNMENT_DAYS),
            ).count(),
            'active_users': User.objects.active().count(),
            'total_invoices': Invoice.objects.filter(is_deleted=False).count(),
            'pending_payments': Invoice.objects.filter(
                is_deleted=False, status__in=PENDING_INVOICE_STATUSES,
            ).count(),
        }

    @staticmethod
    def dashboard(limit: int | None = None) -> dict:
        limit = limit or settings.DASHBOARD_RECENT_LIMIT
        return {
            'stats': ReportService.dashboard_stats(),
            'recent_assignments': AssignmentService.recent(limit),
            'recent_activities': ActivityService.recent(limit),
            'low_stock': ProductService.low_stock()[:limit],
            'expiring': ProductService.expiring_soon()[:limit],
        }

    # --- Reports ---

    @staticmethod
    def inventory(*, category: str | None = None) -> dict:
        rows = ProductService.active().order_by('category', 'name')
        if category:
            rows = rows.filter(category=category)

        per_category = (
            ProductService.active()
            .values('category')
            .annotate(product_count=Count('id'), total_items=Sum('quantity'))
            .order_by('category')
        )
        return {
            'rows': rows,
            'chart': _chart(
                [c['category'] for c in per_category],
                ('Total Items', [c['total_items'] or 0 for c in per_category]),
                ('Product Types', [c['product_count'] for c in per_category]),
            ),
        }

    @staticmethod
    def expiry(*, category: str | None = None, days: int | None = None) -> dict:
        """Expired products plus those expiring within ``days``, soonest first."""
        if days is None:
            days = settings.EXPIRY_WARNING_DAYS
        horizon = timezone.now().date() + timedelta(days=days)
        rows = ProductService.active().filter(expiry_date__lte=horizon).order_by('expiry_date', 'name')
        if category:
            rows = rows.filter(category=category)

        months = OrderedDict()
        for expiry_date in rows.values_list('expiry_date', flat=True):
            label = expiry_date.strftime('%b %Y')
            months[label] = months.get(label, 0) + 1
        return {
            'rows': rows,
            'chart': _chart(months.keys(), ('Expiring Products', months.values())),
        }

    @staticmethod
    def assignments(*, start_date=None, end_date=None, category: str | None = None, client=None) -> dict:
        """Both dates are inclusive."""
        rows = (
            Assignment.objects
            .filter(is_deleted=False)
            .select_related('product', 'client', 'assigned_by')
            .order_by('-created_at')
        )
        if start_date:
            rows = rows.filter(created_at__date__gte=start_date)
        if end_date:
            rows = rows.filter(created_at__date__lte=end_date)
        if category:
            rows = rows.filter(product__category=category)
        if client:
            rows = rows.filter(client=client)

        totals = {}
        for assignment in rows:
            name = assignment.client_snapshot.get('name', '')
            totals[name] = totals.get(name, 0) + assignment.quantity
        top = sorted(totals.items(), key=lambda kv: kv[1], reverse=True)[:TOP_CLIENTS]
        return {
            'rows': rows,
            'chart': _chart([name for name, _ in top], ('Items Assigned', [qty for _, qty in top])),
        }

    @staticmethod
    def build(report_type: str, **filters) -> dict:
        builders = {
            INVENTORY: ReportService.inventory,
            EXPIRY: ReportService.expiry,
            ASSIGNMENTS: ReportService.assignments,
        }
        return builders[report_type](**filters)
