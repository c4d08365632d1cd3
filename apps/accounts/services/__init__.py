"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    InvalidCredentialsError,
    InactiveAccountError,
    AccountNotFoundError,
    DuplicateAccountError,
    InsufficientPermissionsError,
    SelfDeletionError,
)
from .user_authentication import authenticate_user
from .account_management import (
    create_account,
    update_account,
    change_role,
    delete_account,
)

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'AccountNotFoundError',
    'DuplicateAccountError',
    'InsufficientPermissionsError',
    'SelfDeletionError',
    # Services
    'authenticate_user',
    'create_account',
    'update_account',
    'change_role',
    'delete_account',
]
