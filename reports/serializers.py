"""
Reports — Serializers

Query-parameter validation for the report endpoints.

@file reports/serializers.py
"""

from rest_framework import serializers

from clients.models import Client


class ReportFilterSerializer(serializers.Serializer):
    export = serializers.ChoiceField(choices=['pdf', 'xlsx'], required=False)
    category = serializers.CharField(required=False, allow_blank=True)
    days = serializers.IntegerField(required=False, min_value=0)
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)
    client = serializers.PrimaryKeyRelatedField(
        queryset=Client.objects.filter(is_deleted=False), required=False,
    )

    def validate(self, attrs):
        start, end = attrs.get('start_date'), attrs.get('end_date')
        if start and end and end < start:
            raise serializers.ValidationError({'end_date': 'End date cannot be before the start date.'})
        return attrs
