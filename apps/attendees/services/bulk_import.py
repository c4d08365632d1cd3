"""
Bulk import coordinator.

A batch is all-or-nothing:

1. Every row passes static validation, or the batch is rejected with the
   reasons of all failing rows and nothing is created.
2. The category tally fits the account's remaining slots, or the batch is
   rejected before anything is created.
3. Rows are created one after another. The first row that cannot be
   created makes every attendee created so far in the batch be deleted
   again, and the batch is reported as rejected.
4. Only after all rows exist is the tally charged to the quota, in one
   transaction, and a single bulk notification emitted.

If a compensating delete fails, CompensationFailureError is raised with the
attendees that are still stored; it is never turned into a rejection.
"""

from collections import Counter
from dataclasses import dataclass, field
from functools import partial
from typing import Dict, List, Mapping, Sequence

import structlog
from django.conf import settings
from django.db import transaction

from apps.accounts.privileges import PrivilegeTier
from apps.attendees.models import Attendee, AttendeeStatus, RegistrationMethod
from apps.common.compensation import CompensatingBatch, CompensationFailureError
from apps.common.persistence import gateway_deadline
from apps.notifications.events import EventKind
from apps.notifications.services import notify, send_welcome_email
from apps.slots.services import quota_ledger

from .exceptions import DuplicateEmailError, ProfileValidationError
from .profile_validation import BulkRowSerializer, validate_profile
from .registration import create_attendee

logger = structlog.get_logger(__name__)


@dataclass
class RejectedRow:
    row_index: int
    reason: str
    errors: Dict[str, List[str]] = field(default_factory=dict)


@dataclass
class BatchResult:
    created: List[Attendee] = field(default_factory=list)
    rejected: List[RejectedRow] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.rejected


class RowCreationError(Exception):
    """A row passed validation but could not be stored."""

    def __init__(self, row_index: int, reason: str):
        self.row_index = row_index
        self.reason = reason
        super().__init__(f"Row {row_index}: {reason}")


def _validate_rows(rows: Sequence[Mapping]):
    cleaned_rows = []
    rejected = []
    seen_emails = {}

    for index, row in enumerate(rows):
        try:
            cleaned = validate_profile(row, serializer_class=BulkRowSerializer)
        except ProfileValidationError as exc:
            rejected.append(RejectedRow(index, str(exc), exc.errors))
            continue

        email = cleaned['email']
        if email in seen_emails:
            message = f"Duplicate email in batch (same as row {seen_emails[email]})"
            rejected.append(RejectedRow(index, message, {'email': [message]}))
            continue
        seen_emails[email] = index
        cleaned_rows.append(cleaned)

    return cleaned_rows, rejected


def _delete_attendee(attendee: Attendee, timeout) -> None:
    # The savepoint statements stay outside the deadline so a cancelled
    # delete can still be rolled back.
    with transaction.atomic(), gateway_deadline(timeout):
        Attendee.objects.filter(pk=attendee.pk).delete()


def import_batch(*, account, rows: Sequence[Mapping], timeout: float = None) -> BatchResult:
    """
    Register every row of ``rows`` on behalf of ``account``, or none of them.

    Args:
        account: Staff account the registrations are charged to
        rows: Raw row mappings, each including a ``category``
        timeout: Seconds allowed per compensating delete; defaults to
            ``settings.REGISTRATION_GATEWAY_TIMEOUT``

    Returns:
        BatchResult with either all created attendees or the rejected rows
        (``row_index`` is 0-based)

    Raises:
        InsufficientSlotsError: If the tally exceeds remaining slots
        CompensationFailureError: If created rows could not be removed again
    """
    if timeout is None:
        timeout = settings.REGISTRATION_GATEWAY_TIMEOUT

    if not rows:
        return BatchResult()

    cleaned_rows, rejected = _validate_rows(rows)
    if rejected:
        logger.info(
            "bulk_import_rejected",
            account_id=str(account.id),
            rows=len(rows),
            invalid_rows=len(rejected),
        )
        return BatchResult(rejected=rejected)

    tally = Counter(row['category'] for row in cleaned_rows)
    quota_ledger.ensure_available(account, tally)

    status = PrivilegeTier.for_account(account).manual_registration_status
    undo = partial(_delete_attendee, timeout=timeout)

    try:
        with CompensatingBatch(undo, operation='bulk_import') as batch:
            for index, row in enumerate(cleaned_rows):
                try:
                    attendee = create_attendee(
                        status=status,
                        registration_method=RegistrationMethod.MANUAL,
                        registered_by=account,
                        **row,
                    )
                except DuplicateEmailError as exc:
                    raise RowCreationError(index, str(exc)) from exc
                batch.track(attendee)

            quota_ledger.consume_batch(account, tally)
            created = batch.applied
    except RowCreationError as exc:
        logger.warning(
            "bulk_import_rolled_back",
            account_id=str(account.id),
            row_index=exc.row_index,
            reason=exc.reason,
        )
        return BatchResult(rejected=[RejectedRow(exc.row_index, exc.reason, {'email': [exc.reason]})])
    except CompensationFailureError as exc:
        logger.error(
            "bulk_import_compensation_failed",
            account_id=str(account.id),
            unreverted=[str(attendee.pk) for attendee in exc.unreverted],
        )
        notify(
            EventKind.SYSTEM_ERROR,
            error=str(exc),
            context='bulk_import',
            actor=account,
        )
        raise

    logger.info(
        "bulk_import_completed",
        account_id=str(account.id),
        created=len(created),
        tally=dict(tally),
    )
    notify(
        EventKind.BULK_OPERATION,
        operation='Upload',
        count=len(created),
        entity='attendee',
        actor=account,
    )
    if status == AttendeeStatus.APPROVED:
        for attendee in created:
            send_welcome_email(attendee)

    return BatchResult(created=created)
