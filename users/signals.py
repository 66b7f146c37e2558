"""
Users — Signals

``session_changed`` is sent whenever an identity-provider session is
established, refreshed or ended. Receivers get ``user``, ``session``
(the provider session dict, or None on sign-out) and ``event``.

@file users/signals.py
"""

import logging

from django.dispatch import Signal, receiver
from django.utils import timezone

from core.constants import ACTIVITY_ACTION_SIGNED_IN, ACTIVITY_ACTION_SIGNED_OUT
from core.models import ActivityLog
from core.services import ActivityService

logger = logging.getLogger('medstock')

SIGNED_IN = 'SIGNED_IN'
SIGNED_OUT = 'SIGNED_OUT'
TOKEN_REFRESHED = 'TOKEN_REFRESHED'

session_changed = Signal()


@receiver(session_changed)
def log_session_change(sender, user, event, session=None, **kwargs):
    if user is None:
        return

    if event == SIGNED_IN:
        user.last_login = timezone.now()
        user.save(update_fields=['last_login'])
        ActivityService.log(
            actor=user,
            action=ACTIVITY_ACTION_SIGNED_IN,
            entity_type=ActivityLog.EntityType.USER,
            entity_id=user.pk,
            details=f'{user.email} signed in',
        )
    elif event == SIGNED_OUT:
        ActivityService.log(
            actor=user,
            action=ACTIVITY_ACTION_SIGNED_OUT,
            entity_type=ActivityLog.EntityType.USER,
            entity_id=user.pk,
            details=f'{user.email} signed out',
        )
    else:
        logger.debug('Session %s for %s', event, user.pk)
