"""
Billing — Celery Tasks

@file billing/tasks.py
"""

import logging

from celery import shared_task

logger = logging.getLogger('medstock')


@shared_task(name='billing.mark_overdue_invoices')
def mark_overdue_invoices_task():
    """
    Daily task: issued and partially paid invoices past their due date
    become overdue. Registered with Celery Beat.
    """
    from .services import InvoiceService

    count = InvoiceService.mark_overdue()
    logger.info('mark_overdue_invoices_task completed: %d invoices overdue.', count)
    return {'overdue_count': count}
