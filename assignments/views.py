"""
Assignments — Views

Assignments are created and deleted, never edited.

@file assignments/views.py
"""

from rest_framework import mixins, status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .models import Assignment
from .serializers import AssignmentReadSerializer, AssignmentWriteSerializer
from .services import AssignmentService


class AssignmentViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    permission_classes = [IsAuthenticated]
    serializer_class = AssignmentReadSerializer
    filterset_fields = ['product', 'client', 'assigned_by']
    search_fields = ['notes']
    ordering_fields = ['created_at', 'quantity']
    ordering = ['-created_at']

    def get_queryset(self):
        return (
            Assignment.objects
            .filter(is_deleted=False)
            .select_related('assigned_by')
        )

    def create(self, request, *args, **kwargs):
        ser = AssignmentWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        assignment = AssignmentService.create_assignment(actor=request.user, **ser.validated_data)
        return Response(
            {'success': True, 'data': AssignmentReadSerializer(assignment).data},
            status=status.HTTP_201_CREATED,
        )

    def perform_destroy(self, instance):
        AssignmentService.delete_assignment(assignment=instance, actor=self.request.user)
