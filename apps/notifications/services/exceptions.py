"""Domain-specific exceptions for notifications services."""


class NotificationsServiceError(Exception):
    """Base exception for notifications services."""
    pass


class NotificationNotFoundError(NotificationsServiceError):
    """Raised when a notification does not exist for the requesting account."""
    pass


class DispatchError(NotificationsServiceError):
    """Raised when an outgoing email could not be handed to the mail backend."""
    pass
