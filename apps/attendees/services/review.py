"""Attendee review: privileged accounts move attendees between statuses."""

from uuid import UUID

from django.db import transaction

from apps.accounts.privileges import PrivilegeTier
from apps.attendees.models import Attendee, AttendeeStatus
from apps.notifications.events import EventKind
from apps.notifications.services import notify, send_welcome_email

from .exceptions import AttendeeNotFoundError, InsufficientPermissionsError, ProfileValidationError


def change_attendee_status(*, attendee_id: UUID, new_status: str, changed_by) -> Attendee:
    """
    Set an attendee's review status.

    A transition into ``approved`` sends the welcome email.

    Raises:
        InsufficientPermissionsError: If ``changed_by`` is not privileged
        AttendeeNotFoundError: If the attendee does not exist
        ProfileValidationError: If ``new_status`` is unknown
    """
    if not PrivilegeTier.for_account(changed_by).is_privileged:
        raise InsufficientPermissionsError("Only administrators can review attendees")
    if new_status not in AttendeeStatus.values:
        raise ProfileValidationError({'status': [f"Unknown status: {new_status}"]})

    with transaction.atomic():
        try:
            attendee = Attendee.objects.select_for_update().get(id=attendee_id)
        except Attendee.DoesNotExist:
            raise AttendeeNotFoundError(f"Attendee {attendee_id} not found")

        old_status = attendee.status
        if old_status == new_status:
            return attendee

        attendee.status = new_status
        attendee.save(update_fields=['status', 'updated_at'])

    notify(
        EventKind.ATTENDEE_STATUS_CHANGED,
        attendee=attendee,
        old_status=old_status,
        new_status=new_status,
        actor=changed_by,
    )
    if new_status == AttendeeStatus.APPROVED:
        send_welcome_email(attendee)
    return attendee


def get_attendees(*, account, category: str = None, status: str = None):
    """Privileged accounts see all attendees, others those they registered."""
    queryset = Attendee.objects.select_related('registered_by', 'invitation')
    if not PrivilegeTier.for_account(account).is_privileged:
        queryset = queryset.filter(registered_by=account)
    if category:
        queryset = queryset.filter(category=category)
    if status:
        queryset = queryset.filter(status=status)
    return queryset.order_by('-created_at')
