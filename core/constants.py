"""
Core — Constants

Shared pagination limits and activity log vocabulary.

@file core/constants.py
"""

DEFAULT_PAGE_SIZE = 25
MAX_PAGE_SIZE = 200

# Activity actions (free-form in storage; these are the ones the services emit)
ACTIVITY_ACTION_CREATED = 'created'
ACTIVITY_ACTION_UPDATED = 'updated'
ACTIVITY_ACTION_DELETED = 'deleted'
ACTIVITY_ACTION_ASSIGNED = 'assigned'
ACTIVITY_ACTION_STOCK_ADDED = 'stock_added'
ACTIVITY_ACTION_STATUS_CHANGED = 'status_changed'
ACTIVITY_ACTION_PAYMENT_RECORDED = 'payment_recorded'
ACTIVITY_ACTION_SIGNED_IN = 'signed_in'
ACTIVITY_ACTION_SIGNED_OUT = 'signed_out'
ACTIVITY_ACTION_SIGNED_UP = 'signed_up'
