"""
Invitations app services layer.
"""

from .exceptions import (
    InvitationsServiceError,
    InvitationNotFoundError,
    InvitationAlreadyUsedError,
    ConcurrentRedemptionError,
    InvalidInvitationCodeError,
    DuplicateInvitationCodeError,
    InsufficientPermissionsError,
)
from .invitation_ledger import (
    generate_code,
    create_invitation,
    generate_invitations,
    validate_invitation,
    redeem_invitation,
)

__all__ = [
    # Exceptions
    'InvitationsServiceError',
    'InvitationNotFoundError',
    'InvitationAlreadyUsedError',
    'ConcurrentRedemptionError',
    'InvalidInvitationCodeError',
    'DuplicateInvitationCodeError',
    'InsufficientPermissionsError',

    # Ledger
    'generate_code',
    'create_invitation',
    'generate_invitations',
    'validate_invitation',
    'redeem_invitation',
]
