"""
Domain-specific exceptions for slots app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class SlotsServiceError(Exception):
    """Base exception for all slots service errors."""
    pass


class InsufficientSlotsError(SlotsServiceError):
    """
    Raised when an account has fewer remaining slots than requested.

    ``shortfalls`` maps each offending category to ``(requested, remaining)``.
    """

    def __init__(self, shortfalls):
        self.shortfalls = dict(shortfalls)
        details = ', '.join(
            f"{category}: requested {requested}, remaining {remaining}"
            for category, (requested, remaining) in sorted(self.shortfalls.items())
        )
        super().__init__(f"No more slots available ({details})")


class InvalidSlotCountError(SlotsServiceError):
    """Raised when a slot count or category is not acceptable."""
    pass


class SlotTotalBelowUsageError(SlotsServiceError):
    """Raised when a new total would be lower than the slots already used."""
    pass


class SlotRequestNotFoundError(SlotsServiceError):
    """Raised when a slot request does not exist."""
    pass


class SlotRequestAlreadyDecidedError(SlotsServiceError):
    """Raised when deciding a slot request that is no longer pending."""
    pass


class InsufficientPermissionsError(SlotsServiceError):
    """Raised when a user lacks required permissions for an action."""
    pass
