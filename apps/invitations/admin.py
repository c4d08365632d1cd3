from django.contrib import admin
from apps.invitations.models import Invitation


@admin.register(Invitation)
class InvitationAdmin(admin.ModelAdmin):
    """Admin interface for invitations. Redemption fields are read-only."""

    list_display = ['code', 'attendee_category', 'is_used', 'used_by_identifier', 'used_at', 'created_by', 'created_at']
    list_filter = ['attendee_category', 'is_used', 'created_at']
    search_fields = ['code', 'used_by_identifier']
    readonly_fields = ['is_used', 'used_by_identifier', 'used_at', 'created_by', 'created_at']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def has_delete_permission(self, request, obj=None):
        return False
