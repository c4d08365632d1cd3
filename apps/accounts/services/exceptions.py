"""Domain-specific exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Raised when authentication credentials are invalid."""
    pass


class InactiveAccountError(AccountsServiceError):
    """Raised when account is deactivated."""
    pass


class AccountNotFoundError(AccountsServiceError):
    """Raised when account does not exist."""
    pass


class DuplicateAccountError(AccountsServiceError):
    """Raised when an account with the same email already exists."""
    pass


class InsufficientPermissionsError(AccountsServiceError):
    """Raised when the acting account may not manage accounts."""
    pass


class SelfDeletionError(AccountsServiceError):
    """Raised when an Admin tries to delete their own account."""
    pass
