"""
Notification fan-out.

Records one Notification per privileged account for every significant event.
Recipients are looked up on each call, so accounts promoted or deactivated a
moment ago are already taken into account.

Fan-out is best effort: any failure is logged and swallowed so the operation
that produced the event keeps its result.
"""

from typing import List

import structlog
from django.contrib.auth import get_user_model
from django.db import transaction

from apps.notifications.events import EventKind, describe
from apps.notifications.models import Notification

logger = structlog.get_logger(__name__)

User = get_user_model()


def notify(kind: EventKind, **payload) -> List[Notification]:
    """
    Record an event for every privileged account.

    Args:
        kind: The EventKind being reported
        **payload: Keyword arguments for the event's message builder
            (``actor`` is the account that caused the event, if any)

    Returns:
        The created notifications, or an empty list if fan-out failed
    """
    try:
        title, message, severity = describe(kind, **payload)
        recipients = list(User.objects.privileged().values_list('id', flat=True))
        with transaction.atomic():
            notifications = Notification.objects.bulk_create([
                Notification(
                    recipient_id=recipient_id,
                    event_kind=kind,
                    title=title,
                    message=message,
                    severity=severity,
                )
                for recipient_id in recipients
            ])
    except Exception as exc:
        logger.exception(
            "notification_fanout_failed",
            event_kind=str(kind),
            error=str(exc),
        )
        return []

    logger.info(
        "notification_fanout_completed",
        event_kind=str(kind),
        recipients=len(notifications),
    )
    return notifications
