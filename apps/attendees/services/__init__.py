"""
Attendees app services layer.

Registration (invitation and manual), all-or-nothing bulk import, the
review workflow and CSV export.
"""

from .exceptions import (
    AttendeesServiceError,
    DuplicateEmailError,
    ProfileValidationError,
    AttendeeNotFoundError,
    InsufficientPermissionsError,
    CompensationFailureError,
)
from .profile_validation import validate_profile
from .registration import (
    create_attendee,
    register_via_invitation,
    register_manually,
)
from .bulk_import import BatchResult, RejectedRow, import_batch
from .export import EXPORT_COLUMNS, export_filename, write_attendees_csv
from .review import change_attendee_status, get_attendees

__all__ = [
    # Exceptions
    'AttendeesServiceError',
    'DuplicateEmailError',
    'ProfileValidationError',
    'AttendeeNotFoundError',
    'InsufficientPermissionsError',
    'CompensationFailureError',

    # Registration
    'validate_profile',
    'create_attendee',
    'register_via_invitation',
    'register_manually',

    # Bulk import
    'BatchResult',
    'RejectedRow',
    'import_batch',

    # Review
    'change_attendee_status',
    'get_attendees',

    # Export
    'EXPORT_COLUMNS',
    'export_filename',
    'write_attendees_csv',
]
