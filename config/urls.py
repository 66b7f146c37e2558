"""
MedStock — Root URL Configuration

All API endpoints are namespaced under /api/v1/.
The DRF browsable API is available for route inspection in development.

@file config/urls.py
"""

from django.contrib import admin
from django.urls import include, path
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.reverse import reverse

admin.site.site_header = 'MedStock Administration'
admin.site.site_title = 'MedStock'
admin.site.index_title = 'Medical Inventory Management'


@api_view(['GET'])
@permission_classes([AllowAny])
def api_root(request, format=None):
    """MedStock API v1 — endpoint directory."""
    return Response({
        'auth': {
            'login': reverse('api-v1:auth:login', request=request, format=format),
            'signup': reverse('api-v1:auth:signup', request=request, format=format),
            'refresh': reverse('api-v1:auth:token-refresh', request=request, format=format),
            'logout': reverse('api-v1:auth:logout', request=request, format=format),
            'session': reverse('api-v1:auth:session', request=request, format=format),
            'me': reverse('api-v1:auth:me', request=request, format=format),
        },
        'users': reverse('api-v1:users:user-list', request=request, format=format),
        'products': reverse('api-v1:inventory:product-list', request=request, format=format),
        'clients': reverse('api-v1:clients:client-list', request=request, format=format),
        'pharmacies': reverse('api-v1:pharmacies:pharmacy-list', request=request, format=format),
        'assignments': reverse('api-v1:assignments:assignment-list', request=request, format=format),
        'billing': {
            'invoices': reverse('api-v1:billing:invoice-list', request=request, format=format),
            'payments': reverse('api-v1:billing:payment-list', request=request, format=format),
        },
        'activity': reverse('api-v1:activity:activity-list', request=request, format=format),
        'reports': {
            'dashboard': reverse('api-v1:reports:dashboard', request=request, format=format),
            'inventory': reverse(
                'api-v1:reports:report', kwargs={'report_type': 'inventory'},
                request=request, format=format,
            ),
            'expiry': reverse(
                'api-v1:reports:report', kwargs={'report_type': 'expiry'},
                request=request, format=format,
            ),
            'assignments': reverse(
                'api-v1:reports:report', kwargs={'report_type': 'assignments'},
                request=request, format=format,
            ),
        },
    })


api_v1_patterns = [
    path('', api_root, name='api-root'),
    path('auth/', include('users.urls', namespace='auth')),
    path('users/', include('users.urls_users', namespace='users')),
    path('products/', include('inventory.urls', namespace='inventory')),
    path('clients/', include('clients.urls', namespace='clients')),
    path('pharmacies/', include('pharmacies.urls', namespace='pharmacies')),
    path('assignments/', include('assignments.urls', namespace='assignments')),
    path('billing/', include('billing.urls', namespace='billing')),
    path('activity/', include('core.urls', namespace='activity')),
    path('reports/', include('reports.urls', namespace='reports')),
]

urlpatterns = [
    path('admin/', admin.site.urls),

    # DRF session auth (powers the "Log in" button on the browsable API)
    path('api/auth/', include('rest_framework.urls', namespace='rest_framework')),

    # Versioned API
    path('api/v1/', include((api_v1_patterns, 'api-v1'))),
]
