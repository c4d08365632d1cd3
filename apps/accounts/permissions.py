from rest_framework import permissions


class IsPrivileged(permissions.BasePermission):
    """Admin and Super User accounts."""

    message = 'Only administrators can perform this action.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.privileges.is_privileged)


class IsAccountAdmin(permissions.BasePermission):
    """Admin accounts only (account management)."""

    message = 'Only Admin accounts can manage accounts.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.privileges.can_manage_accounts)
