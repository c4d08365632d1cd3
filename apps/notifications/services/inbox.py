"""Notification inbox queries for the receiving account."""

from uuid import UUID

from django.db.models import QuerySet

from apps.notifications.models import Notification

from .exceptions import NotificationNotFoundError


def list_notifications(*, account, unread_only: bool = False) -> QuerySet[Notification]:
    queryset = Notification.objects.filter(recipient=account)
    if unread_only:
        queryset = queryset.filter(is_read=False)
    return queryset.order_by('-created_at')


def unread_count(*, account) -> int:
    return Notification.objects.filter(recipient=account, is_read=False).count()


def mark_as_read(*, notification_id: UUID, account) -> Notification:
    """
    Mark one notification as read.

    Raises:
        NotificationNotFoundError: If it does not exist or belongs to someone else
    """
    try:
        notification = Notification.objects.get(id=notification_id, recipient=account)
    except Notification.DoesNotExist:
        raise NotificationNotFoundError(f"Notification {notification_id} not found")

    if not notification.is_read:
        notification.is_read = True
        notification.save(update_fields=['is_read'])
    return notification


def mark_all_as_read(*, account) -> int:
    """Returns the number of notifications that changed."""
    return Notification.objects.filter(recipient=account, is_read=False).update(is_read=True)
