"""User authentication service."""

from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone

from apps.notifications.events import EventKind
from apps.notifications.services import notify

from .exceptions import InvalidCredentialsError, InactiveAccountError

User = get_user_model()


def authenticate_user(*, email: str, password: str) -> User:
    """
    Authenticate user with email and password.

    Uses select_for_update() to prevent race conditions when updating last_login.
    Logins of privileged accounts are reported to all privileged accounts.

    Args:
        email: User's email
        password: User's password

    Returns:
        Authenticated User instance

    Raises:
        InvalidCredentialsError: If credentials are invalid
        InactiveAccountError: If account is deactivated
    """
    with transaction.atomic():
        # Get user with lock to prevent race conditions on last_login
        try:
            user = (
                User.objects
                .select_for_update()
                .get(email=email.strip().lower())
            )
        except User.DoesNotExist:
            raise InvalidCredentialsError("Invalid email or password")

        # Check password
        if not user.check_password(password):
            raise InvalidCredentialsError("Invalid email or password")

        # Check if active
        if not user.is_active:
            raise InactiveAccountError("Account is deactivated")

        # Update last login
        user.last_login = timezone.now()
        user.save(update_fields=['last_login'])

    if user.privileges.is_privileged:
        notify(EventKind.LOGIN, account=user)

    return user
