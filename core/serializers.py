"""
Core — Serializers

@file core/serializers.py
"""

from rest_framework import serializers

from .models import ActivityLog


class ActivityLogSerializer(serializers.ModelSerializer):
    actor_name = serializers.CharField(source='actor.name', read_only=True, default=None)
    actor_email = serializers.CharField(source='actor.email', read_only=True, default=None)

    class Meta:
        model = ActivityLog
        fields = [
            'id', 'actor', 'actor_name', 'actor_email',
            'action', 'entity_type', 'entity_id', 'details',
            'created_at',
        ]
        read_only_fields = fields
