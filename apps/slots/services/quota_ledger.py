"""
Quota ledger service.

Tracks how many registrations each account may still create per attendee
category. Admin accounts are exempt: they always have unbounded remaining
slots and reserve/release are no-ops for them.

Every change to ``used`` is a single conditional ``UPDATE`` evaluated by the
database (``used + count <= total``), so concurrent reservations against the
same allocation row serialise on the row and cannot overcommit it. No
in-process locks are involved.
"""

import math
from typing import Dict, List, Mapping

from django.db import transaction
from django.db.models import F, IntegerField, Value
from django.db.models.functions import Greatest
from django.utils import timezone

from apps.accounts.privileges import PrivilegeTier
from apps.common.choices import AttendeeCategory
from apps.slots.models import SlotAllocation

from .exceptions import (
    InsufficientSlotsError,
    InvalidSlotCountError,
    SlotTotalBelowUsageError,
)

UNBOUNDED = math.inf


def _check_category(category: str) -> None:
    if category not in AttendeeCategory.values:
        raise InvalidSlotCountError(f"Unknown attendee category: {category}")


def _check_count(count: int) -> None:
    if not isinstance(count, int) or isinstance(count, bool) or count < 1:
        raise InvalidSlotCountError(f"Slot count must be a positive integer, got {count!r}")


def remaining(account, category: str):
    """
    Remaining slots of ``account`` for ``category``.

    Returns:
        int, or UNBOUNDED for quota-exempt accounts
    """
    if PrivilegeTier.for_account(account).quota_exempt:
        return UNBOUNDED

    allocation = SlotAllocation.objects.filter(account=account, category=category).first()
    if allocation is None:
        return 0
    return allocation.remaining


def reserve(account, category: str, count: int = 1):
    """
    Consume ``count`` slots of ``category``.

    The availability check is part of the UPDATE itself, not a separate read.

    Args:
        account: Account whose slots are consumed
        category: Attendee category
        count: Number of slots

    Returns:
        The account

    Raises:
        InvalidSlotCountError: If category or count is invalid
        InsufficientSlotsError: If fewer than ``count`` slots remain
    """
    _check_category(category)
    _check_count(count)

    if PrivilegeTier.for_account(account).quota_exempt:
        return account

    updated = (
        SlotAllocation.objects
        .filter(account=account, category=category, used__lte=F('total') - count)
        .update(used=F('used') + count, updated_at=timezone.now())
    )
    if not updated:
        raise InsufficientSlotsError({category: (count, remaining(account, category))})

    return account


def release(account, category: str, count: int = 1) -> None:
    """
    Give back ``count`` slots of ``category``.

    Inverse of ``reserve``. ``used`` is floored at zero, so calling this for
    a reservation that never applied (or twice) cannot drive it negative.
    """
    _check_category(category)
    _check_count(count)

    if PrivilegeTier.for_account(account).quota_exempt:
        return

    (
        SlotAllocation.objects
        .filter(account=account, category=category)
        .update(
            used=Greatest(F('used') - count, Value(0), output_field=IntegerField()),
            updated_at=timezone.now(),
        )
    )


def ensure_available(account, tally: Mapping[str, int]) -> None:
    """
    Check a whole tally of ``{category: count}`` against remaining slots.

    Raises:
        InsufficientSlotsError: Listing every category that falls short
    """
    for category, count in tally.items():
        _check_category(category)
        _check_count(count)

    if PrivilegeTier.for_account(account).quota_exempt:
        return

    shortfalls = {}
    for category, count in tally.items():
        available = remaining(account, category)
        if available < count:
            shortfalls[category] = (count, available)

    if shortfalls:
        raise InsufficientSlotsError(shortfalls)


@transaction.atomic
def consume_batch(account, tally: Mapping[str, int]) -> None:
    """
    Reserve every category in ``tally`` or none of them.

    Categories are applied in sorted order so concurrent batches lock
    allocation rows in the same order.

    Raises:
        InsufficientSlotsError: If any category falls short (nothing applied)
    """
    for category in sorted(tally):
        reserve(account, category, tally[category])


@transaction.atomic
def grant(account, slots: Mapping[str, int]) -> None:
    """Add ``{category: count}`` to the account's totals."""
    for category, count in slots.items():
        _check_category(category)
        if count == 0:
            continue
        _check_count(count)

        allocation, _ = SlotAllocation.objects.get_or_create(account=account, category=category)
        (
            SlotAllocation.objects
            .filter(pk=allocation.pk)
            .update(total=F('total') + count, updated_at=timezone.now())
        )


@transaction.atomic
def set_totals(account, totals: Mapping[str, int]) -> None:
    """
    Overwrite the account's totals for the given categories.

    Raises:
        SlotTotalBelowUsageError: If a new total is below the slots already used
    """
    for category, total in totals.items():
        _check_category(category)
        if not isinstance(total, int) or isinstance(total, bool) or total < 0:
            raise InvalidSlotCountError(f"Slot total must be a non-negative integer, got {total!r}")

        allocation, _ = SlotAllocation.objects.get_or_create(account=account, category=category)
        updated = (
            SlotAllocation.objects
            .filter(pk=allocation.pk, used__lte=total)
            .update(total=total, updated_at=timezone.now())
        )
        if not updated:
            raise SlotTotalBelowUsageError(
                f"{category} total cannot be set to {total}: slots already in use"
            )


def slot_summary(account) -> List[Dict]:
    """Per-category totals, usage and remaining slots for display."""
    exempt = PrivilegeTier.for_account(account).quota_exempt
    allocations = {a.category: a for a in SlotAllocation.objects.filter(account=account)}

    summary = []
    for category in AttendeeCategory.values:
        allocation = allocations.get(category)
        summary.append({
            'category': category,
            'total': allocation.total if allocation else 0,
            'used': allocation.used if allocation else 0,
            'remaining': None if exempt else (allocation.remaining if allocation else 0),
            'unbounded': exempt,
        })
    return summary
