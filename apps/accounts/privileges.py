"""
Role-dependent capabilities.

Every decision that depends on an account's role goes through
``PrivilegeTier`` so call sites never compare role strings themselves.
"""

from dataclasses import dataclass

from apps.accounts.models import SystemRole


@dataclass(frozen=True)
class PrivilegeTier:
    role: str

    @classmethod
    def for_account(cls, account) -> 'PrivilegeTier':
        if account is None:
            return cls(role=SystemRole.USER)
        return cls(role=account.role)

    @property
    def quota_exempt(self) -> bool:
        """Admins register without consuming slots."""
        return self.role == SystemRole.ADMIN

    @property
    def is_privileged(self) -> bool:
        return self.role in (SystemRole.ADMIN, SystemRole.SUPER_USER)

    @property
    def can_manage_accounts(self) -> bool:
        return self.role == SystemRole.ADMIN

    @property
    def manual_registration_status(self) -> str:
        """Status given to attendees this account enters by hand."""
        from apps.attendees.models import AttendeeStatus

        if self.is_privileged:
            return AttendeeStatus.PENDING
        return AttendeeStatus.APPROVED
