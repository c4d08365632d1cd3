"""
Invitation ledger service.

Owns the unused -> used lifecycle of invitation codes. Redemption is a
single conditional UPDATE on ``is_used=False``; whichever caller's update
matches the row wins and every other caller sees the code as used.
"""

import secrets
from typing import List

import structlog
from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.accounts.privileges import PrivilegeTier
from apps.common.choices import AttendeeCategory
from apps.common.persistence import update_if
from apps.invitations.models import CODE_ALPHABET, CODE_LENGTH, Invitation
from apps.notifications.events import EventKind
from apps.notifications.services import notify

from .exceptions import (
    ConcurrentRedemptionError,
    DuplicateInvitationCodeError,
    InsufficientPermissionsError,
    InvalidInvitationCodeError,
    InvitationAlreadyUsedError,
    InvitationNotFoundError,
)

logger = structlog.get_logger(__name__)

MAX_GENERATE = 500


def generate_code() -> str:
    """Random code of CODE_LENGTH characters from CODE_ALPHABET."""
    return ''.join(secrets.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))


def normalize_code(code: str) -> str:
    return (code or '').strip().upper()


def _check_code(code: str) -> None:
    if len(code) != CODE_LENGTH or any(char not in CODE_ALPHABET for char in code):
        raise InvalidInvitationCodeError(
            f"Invitation codes are {CODE_LENGTH} characters from A-Z and 0-9"
        )


def _check_category(category: str) -> None:
    if category not in AttendeeCategory.values:
        raise InvalidInvitationCodeError(f"Unknown attendee category: {category}")


def create_invitation(*, code: str, category: str, created_by=None) -> Invitation:
    """
    Store an invitation with a caller-supplied code.

    Raises:
        InvalidInvitationCodeError: If the code or category is malformed
        DuplicateInvitationCodeError: If the code already exists
    """
    code = normalize_code(code)
    _check_code(code)
    _check_category(category)

    try:
        with transaction.atomic():
            return Invitation.objects.create(
                code=code,
                attendee_category=category,
                created_by=created_by,
            )
    except IntegrityError:
        raise DuplicateInvitationCodeError(f"Invitation code {code} already exists")


def generate_invitations(*, account, category: str, count: int, max_retries: int = 5) -> List[Invitation]:
    """
    Generate ``count`` invitations with random codes (privileged only).

    Each code is retried on a unique collision, up to ``max_retries`` times.

    Raises:
        InsufficientPermissionsError: If ``account`` is not privileged
        InvalidInvitationCodeError: If the category is unknown
        ValueError: If ``count`` is out of range
        RuntimeError: If a unique code could not be generated
    """
    if not PrivilegeTier.for_account(account).is_privileged:
        raise InsufficientPermissionsError("Only administrators can generate invitations")
    _check_category(category)
    if not isinstance(count, int) or not 1 <= count <= MAX_GENERATE:
        raise ValueError(f"Invitation count must be between 1 and {MAX_GENERATE}")

    invitations = []
    with transaction.atomic():
        for _ in range(count):
            for attempt in range(max_retries):
                try:
                    invitations.append(
                        create_invitation(code=generate_code(), category=category, created_by=account)
                    )
                    break
                except DuplicateInvitationCodeError:
                    # Code collision (very rare)
                    if attempt == max_retries - 1:
                        raise RuntimeError(
                            f"Failed to generate unique invitation code after {max_retries} attempts"
                        )

    logger.info(
        "invitations_generated",
        count=len(invitations),
        category=category,
        account_id=str(account.id),
    )
    notify(EventKind.INVITATIONS_GENERATED, count=len(invitations), category=category, actor=account)
    return invitations


def validate_invitation(code: str) -> Invitation:
    """
    Look up an invitation that can still be redeemed.

    Raises:
        InvitationNotFoundError: If no invitation has this code
        InvitationAlreadyUsedError: If the invitation was redeemed
    """
    code = normalize_code(code)
    try:
        invitation = Invitation.objects.get(code=code)
    except Invitation.DoesNotExist:
        raise InvitationNotFoundError("Invalid invitation code")

    if invitation.is_used:
        raise InvitationAlreadyUsedError("Invitation code has already been used")

    return invitation


def redeem_invitation(code: str, used_by_identifier: str) -> Invitation:
    """
    Mark an invitation as used by ``used_by_identifier``.

    At most one call per code succeeds, however many run concurrently.

    Raises:
        InvitationNotFoundError: If no invitation has this code
        InvitationAlreadyUsedError: If the invitation was already redeemed
        ConcurrentRedemptionError: If another caller redeemed it first
    """
    invitation = validate_invitation(code)
    used_at = timezone.now()

    redeemed = update_if(
        Invitation,
        invitation.pk,
        {'is_used': False},
        is_used=True,
        used_by_identifier=used_by_identifier,
        used_at=used_at,
    )
    if not redeemed:
        logger.info("invitation_redemption_lost", code=invitation.code)
        raise ConcurrentRedemptionError("Invitation code has already been used")

    invitation.is_used = True
    invitation.used_by_identifier = used_by_identifier
    invitation.used_at = used_at
    return invitation
