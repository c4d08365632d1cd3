"""
Event kinds and the human-readable text recorded for each of them.

Every builder receives the payload passed to ``notify`` and returns a
``(title, message, severity)`` triple.
"""

from django.db.models import TextChoices

from .models import Severity


class EventKind(TextChoices):
    ATTENDEE_REGISTERED = 'attendee_registered'
    ATTENDEE_STATUS_CHANGED = 'attendee_status_changed'
    INVITATION_REDEEMED = 'invitation_redeemed'
    INVITATIONS_GENERATED = 'invitations_generated'
    ACCOUNT_CREATED = 'account_created'
    ACCOUNT_UPDATED = 'account_updated'
    ACCOUNT_ROLE_CHANGED = 'account_role_changed'
    ACCOUNT_DELETED = 'account_deleted'
    SLOT_REQUEST_CREATED = 'slot_request_created'
    SLOT_REQUEST_STATUS_CHANGED = 'slot_request_status_changed'
    BULK_OPERATION = 'bulk_operation'
    LOGIN = 'login'
    SYSTEM_ERROR = 'system_error'


STATUS_SEVERITY = {
    'approved': Severity.SUCCESS,
    'declined': Severity.ERROR,
    'change_requested': Severity.WARNING,
    'pending': Severity.INFO,
}


def _name(account, default='System'):
    if account is None:
        return default
    return account.full_name or account.email


def _attendee_registered(attendee, actor=None):
    return (
        'New Attendee Registration',
        f"{attendee.first_name} {attendee.last_name} ({attendee.email}) registered as "
        f"{attendee.category}. Registered by: {_name(actor)}",
        Severity.INFO,
    )


def _attendee_status_changed(attendee, old_status, new_status, actor=None):
    return (
        'Attendee Status Updated',
        f'{attendee.first_name} {attendee.last_name}\'s status changed from "{old_status}" '
        f'to "{new_status}" by {_name(actor)}',
        STATUS_SEVERITY.get(new_status, Severity.INFO),
    )


def _invitation_redeemed(invitation, attendee, actor=None):
    return (
        'Invitation Used',
        f"{attendee.first_name} {attendee.last_name} used invitation code {invitation.code} "
        f"for {invitation.attendee_category} registration",
        Severity.INFO,
    )


def _invitations_generated(count, category, actor=None):
    return (
        'Invitations Generated',
        f"{count} {category} invitations were generated by {_name(actor)}",
        Severity.SUCCESS,
    )


def _account_created(account, actor=None):
    return (
        'New User Account Created',
        f"User account created for {_name(account)} ({account.get_role_display()}) by {_name(actor)}",
        Severity.SUCCESS,
    )


def _account_updated(account, actor=None):
    return (
        'User Account Updated',
        f"User {_name(account)} was updated by {_name(actor)}",
        Severity.INFO,
    )


def _account_role_changed(account, old_role, new_role, actor=None):
    return (
        'User Role Changed',
        f'{_name(account)}\'s role changed from "{old_role}" to "{new_role}" by {_name(actor)}',
        Severity.WARNING,
    )


def _account_deleted(account, actor=None):
    return (
        'User Account Deleted',
        f"User account of {_name(account)} ({account.email}) was deleted by {_name(actor)}",
        Severity.WARNING,
    )


def _slot_request_created(slot_request, actor=None):
    slots = ', '.join(
        f"{count} {category}"
        for category, count in slot_request.requested_slots.items()
        if count > 0
    )
    return (
        'Slot Request Submitted',
        f"{_name(actor, 'Unknown User')} requested additional slots: {slots}",
        Severity.INFO,
    )


def _slot_request_status_changed(slot_request, old_status, new_status, actor=None):
    return (
        'Slot Request Status Updated',
        f'Slot request status changed from "{old_status}" to "{new_status}" by {_name(actor)}',
        STATUS_SEVERITY.get(new_status, Severity.INFO),
    )


def _bulk_operation(operation, count, entity, actor=None):
    return (
        f"Bulk {operation}",
        f"{operation} of {count} {entity} records by {_name(actor)}",
        Severity.INFO,
    )


def _login(account, actor=None):
    return (
        'Admin User Login',
        f"{_name(account)} logged in",
        Severity.INFO,
    )


def _system_error(error, context=None, actor=None):
    context_info = f" (Context: {context})" if context else ''
    user_info = f" - User: {_name(actor)}" if actor is not None else ''
    return (
        'System Error Occurred',
        f"Error: {error}{context_info}{user_info}",
        Severity.ERROR,
    )


BUILDERS = {
    EventKind.ATTENDEE_REGISTERED: _attendee_registered,
    EventKind.ATTENDEE_STATUS_CHANGED: _attendee_status_changed,
    EventKind.INVITATION_REDEEMED: _invitation_redeemed,
    EventKind.INVITATIONS_GENERATED: _invitations_generated,
    EventKind.ACCOUNT_CREATED: _account_created,
    EventKind.ACCOUNT_UPDATED: _account_updated,
    EventKind.ACCOUNT_ROLE_CHANGED: _account_role_changed,
    EventKind.ACCOUNT_DELETED: _account_deleted,
    EventKind.SLOT_REQUEST_CREATED: _slot_request_created,
    EventKind.SLOT_REQUEST_STATUS_CHANGED: _slot_request_status_changed,
    EventKind.BULK_OPERATION: _bulk_operation,
    EventKind.LOGIN: _login,
    EventKind.SYSTEM_ERROR: _system_error,
}


def describe(kind, **payload):
    """Return ``(title, message, severity)`` for an event."""
    return BUILDERS[EventKind(kind)](**payload)
