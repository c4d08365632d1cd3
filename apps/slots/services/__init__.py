"""
Slots app services layer.

The quota ledger owns per-account, per-category slot counts; slot requests
let accounts ask for more.
"""

from .exceptions import (
    SlotsServiceError,
    InsufficientSlotsError,
    InvalidSlotCountError,
    SlotTotalBelowUsageError,
    SlotRequestNotFoundError,
    SlotRequestAlreadyDecidedError,
    InsufficientPermissionsError,
)
from . import quota_ledger
from .quota_ledger import UNBOUNDED, slot_summary
from .slot_requests import (
    create_slot_request,
    decide_slot_request,
    get_slot_requests,
)

__all__ = [
    # Exceptions
    'SlotsServiceError',
    'InsufficientSlotsError',
    'InvalidSlotCountError',
    'SlotTotalBelowUsageError',
    'SlotRequestNotFoundError',
    'SlotRequestAlreadyDecidedError',
    'InsufficientPermissionsError',

    # Quota ledger
    'quota_ledger',
    'UNBOUNDED',
    'slot_summary',

    # Slot requests
    'create_slot_request',
    'decide_slot_request',
    'get_slot_requests',
]
