"""
Slot request service.

Accounts ask for additional slots; a privileged account approves (granting
the requested counts) or declines the request.
"""

from typing import Mapping
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from apps.accounts.privileges import PrivilegeTier
from apps.common.choices import AttendeeCategory
from apps.notifications.events import EventKind
from apps.notifications.services import notify
from apps.slots.models import SlotRequest, SlotRequestStatus

from . import quota_ledger
from .exceptions import (
    InsufficientPermissionsError,
    InvalidSlotCountError,
    SlotRequestAlreadyDecidedError,
    SlotRequestNotFoundError,
)


def create_slot_request(*, account, requested_slots: Mapping[str, int], reason: str = '') -> SlotRequest:
    """
    Submit a request for additional slots.

    Args:
        account: Requesting account
        requested_slots: ``{category: count}``; zero counts are dropped
        reason: Free-text justification

    Returns:
        Created SlotRequest

    Raises:
        InvalidSlotCountError: If a category is unknown, a count is negative,
            or nothing is requested
    """
    cleaned = {}
    for category, count in requested_slots.items():
        if category not in AttendeeCategory.values:
            raise InvalidSlotCountError(f"Unknown attendee category: {category}")
        if not isinstance(count, int) or isinstance(count, bool) or count < 0:
            raise InvalidSlotCountError(f"Requested slots must be non-negative integers, got {count!r}")
        if count:
            cleaned[category] = count

    if not cleaned:
        raise InvalidSlotCountError("At least one slot must be requested")

    slot_request = SlotRequest.objects.create(
        account=account,
        requested_slots=cleaned,
        reason=reason,
    )

    notify(EventKind.SLOT_REQUEST_CREATED, slot_request=slot_request, actor=account)
    return slot_request


def decide_slot_request(*, request_id: UUID, decided_by, approve: bool) -> SlotRequest:
    """
    Approve or decline a pending slot request.

    Approval adds the requested counts to the requester's totals in the
    same transaction as the status change.

    Raises:
        InsufficientPermissionsError: If ``decided_by`` is not privileged
        SlotRequestNotFoundError: If the request does not exist
        SlotRequestAlreadyDecidedError: If the request is not pending
    """
    if not PrivilegeTier.for_account(decided_by).is_privileged:
        raise InsufficientPermissionsError("Only administrators can decide slot requests")

    with transaction.atomic():
        try:
            slot_request = (
                SlotRequest.objects
                .select_for_update()
                .select_related('account')
                .get(id=request_id)
            )
        except SlotRequest.DoesNotExist:
            raise SlotRequestNotFoundError(f"Slot request {request_id} not found")

        if slot_request.status != SlotRequestStatus.PENDING:
            raise SlotRequestAlreadyDecidedError(
                f"Slot request is already {slot_request.status}"
            )

        old_status = slot_request.status
        if approve:
            quota_ledger.grant(slot_request.account, slot_request.requested_slots)
            slot_request.status = SlotRequestStatus.APPROVED
        else:
            slot_request.status = SlotRequestStatus.DECLINED

        slot_request.decided_by = decided_by
        slot_request.decided_at = timezone.now()
        slot_request.save(update_fields=['status', 'decided_by', 'decided_at'])

    notify(
        EventKind.SLOT_REQUEST_STATUS_CHANGED,
        slot_request=slot_request,
        old_status=old_status,
        new_status=slot_request.status,
        actor=decided_by,
    )
    return slot_request


def get_slot_requests(*, account, status: str = None) -> QuerySet[SlotRequest]:
    """Privileged accounts see every request, others only their own."""
    queryset = SlotRequest.objects.select_related('account', 'decided_by')
    if not PrivilegeTier.for_account(account).is_privileged:
        queryset = queryset.filter(account=account)
    if status:
        queryset = queryset.filter(status=status)
    return queryset.order_by('-created_at')
