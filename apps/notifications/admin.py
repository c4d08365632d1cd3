from django.contrib import admin
from apps.notifications.models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    """Admin interface for Notifications."""

    list_display = ['title', 'recipient', 'event_kind', 'severity', 'is_read', 'created_at']
    list_filter = ['event_kind', 'severity', 'is_read', 'created_at']
    search_fields = ['title', 'message', 'recipient__email']
    readonly_fields = ['recipient', 'event_kind', 'title', 'message', 'severity', 'created_at']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('recipient')
