"""
Core — Activity Service

Writes activity log entries from any app and produces the plain-dict
snapshots stored on assignments and invoices.

@file core/services.py
"""

import logging
from decimal import Decimal
from typing import Any

from django.forms.models import model_to_dict

from core.models import ActivityLog

logger = logging.getLogger('medstock')


class ActivityService:
    """Centralised activity logging for every write operation."""

    @staticmethod
    def log(
        *,
        actor,
        action: str,
        entity_type: str,
        entity_id,
        details: str = '',
    ) -> ActivityLog:
        entry = ActivityLog.objects.create(
            actor=actor if getattr(actor, 'is_authenticated', False) else None,
            action=action,
            entity_type=entity_type,
            entity_id=str(entity_id) if entity_id is not None else '',
            details=details,
        )
        logger.debug('Activity %s %s:%s', action, entity_type, entry.entity_id)
        return entry

    @staticmethod
    def recent(limit: int = 5):
        return ActivityLog.objects.select_related('actor').order_by('-created_at')[:limit]

    @staticmethod
    def snapshot(instance, fields=None) -> dict[str, Any]:
        """
        Serialise a model instance to a plain dict suitable for JSON
        storage. Dates are ISO-formatted; UUIDs and Decimals stringified.
        """
        data = model_to_dict(instance, fields=fields)
        data['id'] = str(instance.pk)
        cleaned: dict[str, Any] = {}
        for key, value in data.items():
            if value is None:
                cleaned[key] = None
            elif isinstance(value, Decimal):
                cleaned[key] = str(value)
            elif hasattr(value, 'isoformat'):
                cleaned[key] = value.isoformat()
            elif hasattr(value, 'hex'):
                cleaned[key] = str(value)
            else:
                cleaned[key] = value
        return cleaned
