"""
Domain-specific exceptions for invitations app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class InvitationsServiceError(Exception):
    """Base exception for all invitations service errors."""
    pass


class InvitationNotFoundError(InvitationsServiceError):
    """Raised when no invitation has the given code."""
    pass


class InvitationAlreadyUsedError(InvitationsServiceError):
    """Raised when the invitation has already been redeemed."""
    pass


class ConcurrentRedemptionError(InvitationAlreadyUsedError):
    """
    Raised when the invitation looked unused but another caller redeemed it
    between the lookup and the conditional update.
    """
    pass


class InvalidInvitationCodeError(InvitationsServiceError):
    """Raised when a code does not match the invitation code format."""
    pass


class DuplicateInvitationCodeError(InvitationsServiceError):
    """Raised when creating an invitation whose code already exists."""
    pass


class InsufficientPermissionsError(InvitationsServiceError):
    """Raised when a user lacks required permissions for an action."""
    pass
