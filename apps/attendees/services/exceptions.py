"""
Domain-specific exceptions for attendees app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""

from apps.common.compensation import CompensationFailureError  # noqa: F401


class AttendeesServiceError(Exception):
    """Base exception for all attendees service errors."""
    pass


class DuplicateEmailError(AttendeesServiceError):
    """Raised when an attendee with the same email already exists."""
    pass


class ProfileValidationError(AttendeesServiceError):
    """
    Raised when registration data fails static validation.

    ``errors`` maps field names to lists of messages.
    """

    def __init__(self, errors):
        self.errors = errors
        fields = ', '.join(sorted(errors)) if isinstance(errors, dict) else ''
        super().__init__(f"Invalid registration data: {fields}" if fields else "Invalid registration data")


class AttendeeNotFoundError(AttendeesServiceError):
    """Raised when attendee does not exist."""
    pass


class InsufficientPermissionsError(AttendeesServiceError):
    """Raised when a user lacks required permissions for an action."""
    pass
