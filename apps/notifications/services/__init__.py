"""Services for notification fan-out, the inbox and outgoing email."""

from .exceptions import (
    NotificationsServiceError,
    NotificationNotFoundError,
    DispatchError,
)
from .fanout import notify
from .email_dispatcher import send_email, send_welcome_email
from .inbox import list_notifications, unread_count, mark_as_read, mark_all_as_read

__all__ = [
    # Exceptions
    'NotificationsServiceError',
    'NotificationNotFoundError',
    'DispatchError',
    # Services
    'notify',
    'send_email',
    'send_welcome_email',
    'list_notifications',
    'unread_count',
    'mark_as_read',
    'mark_all_as_read',
]
