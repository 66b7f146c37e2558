"""
Core — Views

Read-only listing of the activity log, newest first.

@file core/views.py
"""

from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated

from .models import ActivityLog
from .serializers import ActivityLogSerializer


class ActivityLogViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Activity feed. Filter with ?entity_type=product or ?actor=<user id>.
    Entries are written by the service layer, never through this API.
    """

    permission_classes = [IsAuthenticated]
    serializer_class = ActivityLogSerializer
    filterset_fields = ['entity_type', 'actor', 'action', 'entity_id']
    search_fields = ['details', 'action']
    ordering_fields = ['created_at']
    ordering = ['-created_at']

    def get_queryset(self):
        return ActivityLog.objects.select_related('actor')
