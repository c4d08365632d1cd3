from django.contrib import admin
from apps.slots.models import SlotAllocation, SlotRequest


@admin.register(SlotAllocation)
class SlotAllocationAdmin(admin.ModelAdmin):
    """Admin interface for slot allocations."""

    list_display = ['account', 'category', 'total', 'used', 'remaining', 'updated_at']
    list_filter = ['category']
    search_fields = ['account__email', 'account__company_name']
    readonly_fields = ['used', 'updated_at']
    ordering = ['account__email', 'category']

    def remaining(self, obj):
        return obj.remaining
    remaining.short_description = 'Remaining'

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('account')


@admin.register(SlotRequest)
class SlotRequestAdmin(admin.ModelAdmin):
    """Admin interface for slot requests."""

    list_display = ['account', 'status', 'created_at', 'decided_by', 'decided_at']
    list_filter = ['status', 'created_at']
    search_fields = ['account__email', 'reason']
    readonly_fields = ['account', 'requested_slots', 'decided_by', 'decided_at', 'created_at']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']
