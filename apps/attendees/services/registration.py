"""
Registration orchestrator.

Two entry points create attendees:

- ``register_via_invitation``: public flow, consumes an invitation code.
- ``register_manually``: staff flow, consumes one slot of the account's
  quota (Admin accounts are exempt).

Notifications and welcome emails go out only after the registration is
stored and never affect its outcome.
"""

from typing import Mapping

import structlog
from django.db import IntegrityError, transaction

from apps.accounts.privileges import PrivilegeTier
from apps.attendees.models import Attendee, AttendeeStatus, RegistrationMethod
from apps.common.choices import AttendeeCategory
from apps.invitations.services import redeem_invitation, validate_invitation
from apps.notifications.events import EventKind
from apps.notifications.services import notify, send_welcome_email
from apps.slots.services import quota_ledger

from .exceptions import DuplicateEmailError, ProfileValidationError
from .profile_validation import validate_profile

logger = structlog.get_logger(__name__)


def email_taken(email: str) -> bool:
    return Attendee.objects.filter(email=email.strip().lower()).exists()


def create_attendee(**fields) -> Attendee:
    """
    Insert one attendee.

    Runs in its own savepoint so a unique-email clash leaves any surrounding
    transaction usable.

    Raises:
        DuplicateEmailError: If the email is already registered
    """
    try:
        with transaction.atomic():
            return Attendee.objects.create(**fields)
    except IntegrityError:
        raise DuplicateEmailError(
            f"An attendee with email {fields.get('email')} is already registered"
        )


def register_via_invitation(code: str, profile_data: Mapping) -> Attendee:
    """
    Register an attendee with an invitation code.

    The invitation is redeemed first and the attendee created in the same
    transaction; if creation fails the redemption is rolled back with it.

    Args:
        code: Invitation code
        profile_data: Raw registration fields

    Returns:
        Created Attendee (status pending)

    Raises:
        InvitationNotFoundError: If the code does not exist
        InvitationAlreadyUsedError: If the code was already redeemed
            (ConcurrentRedemptionError when another caller won the race)
        ProfileValidationError: If the profile fails static validation
        DuplicateEmailError: If the email is already registered
    """
    validate_invitation(code)
    profile = validate_profile(profile_data)

    if email_taken(profile['email']):
        raise DuplicateEmailError(f"An attendee with email {profile['email']} is already registered")

    with transaction.atomic():
        invitation = redeem_invitation(code, profile['email'])
        attendee = create_attendee(
            category=invitation.attendee_category,
            status=AttendeeStatus.PENDING,
            registration_method=RegistrationMethod.INVITATION,
            invitation=invitation,
            **profile,
        )

    logger.info(
        "attendee_registered",
        attendee_id=str(attendee.id),
        method=RegistrationMethod.INVITATION,
        category=attendee.category,
    )
    notify(EventKind.INVITATION_REDEEMED, invitation=invitation, attendee=attendee)
    return attendee


def register_manually(*, account, category: str, profile_data: Mapping) -> Attendee:
    """
    Register an attendee on behalf of a staff account.

    One slot of ``category`` is reserved before the insert and released
    again if the insert fails. Privileged accounts create pending
    attendees; regular accounts create approved ones, who also receive a
    welcome email.

    Raises:
        ProfileValidationError: If the category or profile is invalid
        DuplicateEmailError: If the email is already registered
        InsufficientSlotsError: If the account has no slot left
    """
    if category not in AttendeeCategory.values:
        raise ProfileValidationError({'category': [f"Unknown attendee category: {category}"]})
    profile = validate_profile(profile_data)

    if email_taken(profile['email']):
        raise DuplicateEmailError(f"An attendee with email {profile['email']} is already registered")

    tier = PrivilegeTier.for_account(account)
    quota_ledger.reserve(account, category, 1)
    try:
        attendee = create_attendee(
            category=category,
            status=tier.manual_registration_status,
            registration_method=RegistrationMethod.MANUAL,
            registered_by=account,
            **profile,
        )
    except Exception:
        quota_ledger.release(account, category, 1)
        raise

    logger.info(
        "attendee_registered",
        attendee_id=str(attendee.id),
        method=RegistrationMethod.MANUAL,
        category=category,
        account_id=str(account.id),
    )
    notify(EventKind.ATTENDEE_REGISTERED, attendee=attendee, actor=account)
    if attendee.status == AttendeeStatus.APPROVED:
        send_welcome_email(attendee)
    return attendee
