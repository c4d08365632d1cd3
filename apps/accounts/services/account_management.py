"""
Account management service.

Only Admin accounts create, edit or re-role other accounts. Slot totals are
edited through the quota ledger so they can never drop below current usage.
"""

from typing import Mapping, Optional
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from apps.accounts.models import SystemRole
from apps.accounts.privileges import PrivilegeTier
from apps.notifications.events import EventKind
from apps.notifications.services import notify
from apps.slots.services import quota_ledger

from .exceptions import (
    AccountNotFoundError,
    DuplicateAccountError,
    InsufficientPermissionsError,
    SelfDeletionError,
)

User = get_user_model()

EDITABLE_FIELDS = ('full_name', 'company_name', 'is_active')


def _require_manager(actor) -> None:
    if not PrivilegeTier.for_account(actor).can_manage_accounts:
        raise InsufficientPermissionsError("Only administrators can manage accounts")


def _get_account(account_id: UUID, lock: bool = False) -> User:
    queryset = User.objects.select_for_update() if lock else User.objects
    try:
        return queryset.get(id=account_id)
    except User.DoesNotExist:
        raise AccountNotFoundError(f"Account {account_id} not found")


def create_account(
    *,
    created_by,
    email: str,
    password: str,
    full_name: str = '',
    company_name: str = '',
    role: str = SystemRole.USER,
    slot_totals: Optional[Mapping[str, int]] = None,
) -> User:
    """
    Create a staff account, optionally with initial slot totals.

    Raises:
        InsufficientPermissionsError: If ``created_by`` is not an Admin
        DuplicateAccountError: If the email is taken
    """
    _require_manager(created_by)

    email = email.strip().lower()
    if User.objects.filter(email=email).exists():
        raise DuplicateAccountError(f"An account with email {email} already exists")

    try:
        with transaction.atomic():
            account = User.objects.create_user(
                email=email,
                password=password,
                full_name=full_name,
                company_name=company_name,
                role=role,
            )
            if slot_totals:
                quota_ledger.set_totals(account, slot_totals)
    except IntegrityError:
        raise DuplicateAccountError(f"An account with email {email} already exists")

    notify(EventKind.ACCOUNT_CREATED, account=account, actor=created_by)
    return account


def update_account(
    *,
    account_id: UUID,
    updated_by,
    slot_totals: Optional[Mapping[str, int]] = None,
    **fields,
) -> User:
    """
    Update profile fields and/or slot totals of an account.

    Args:
        account_id: Account to update
        updated_by: Acting Admin
        slot_totals: New ``{category: total}`` values
        **fields: Any of ``full_name``, ``company_name``, ``is_active``

    Raises:
        InsufficientPermissionsError: If ``updated_by`` is not an Admin
        AccountNotFoundError: If the account does not exist
        SlotTotalBelowUsageError: If a total would drop below usage
    """
    _require_manager(updated_by)

    unknown = set(fields) - set(EDITABLE_FIELDS)
    if unknown:
        raise ValueError(f"Fields cannot be updated here: {', '.join(sorted(unknown))}")

    with transaction.atomic():
        account = _get_account(account_id, lock=True)
        for name, value in fields.items():
            setattr(account, name, value)
        if fields:
            account.save(update_fields=[*fields, 'updated_at'])
        if slot_totals:
            quota_ledger.set_totals(account, slot_totals)

    notify(EventKind.ACCOUNT_UPDATED, account=account, actor=updated_by)
    return account


def change_role(*, account_id: UUID, new_role: str, changed_by) -> User:
    """
    Change an account's system role.

    Raises:
        InsufficientPermissionsError: If ``changed_by`` is not an Admin
        AccountNotFoundError: If the account does not exist
        ValueError: If ``new_role`` is not a known role
    """
    _require_manager(changed_by)

    if new_role not in SystemRole.values:
        raise ValueError(f"Unknown role: {new_role}")

    with transaction.atomic():
        account = _get_account(account_id, lock=True)
        old_role = account.role
        if old_role == new_role:
            return account
        account.role = new_role
        account.save(update_fields=['role', 'updated_at'])

    notify(
        EventKind.ACCOUNT_ROLE_CHANGED,
        account=account,
        old_role=SystemRole(old_role).label,
        new_role=SystemRole(new_role).label,
        actor=changed_by,
    )
    return account


def delete_account(*, account_id: UUID, deleted_by) -> None:
    """
    Delete an account.

    Its slot allocations, slot requests and notifications go with it.
    Attendees it registered and invitations it created stay, with the
    reference cleared.

    Raises:
        InsufficientPermissionsError: If ``deleted_by`` is not an Admin
        SelfDeletionError: If an Admin tries to delete their own account
        AccountNotFoundError: If the account does not exist
    """
    _require_manager(deleted_by)

    if str(account_id) == str(deleted_by.pk):
        raise SelfDeletionError("Administrators cannot delete their own account")

    with transaction.atomic():
        account = _get_account(account_id, lock=True)
        account.delete()

    notify(EventKind.ACCOUNT_DELETED, account=account, actor=deleted_by)
