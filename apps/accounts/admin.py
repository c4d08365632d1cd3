from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from apps.slots.models import SlotAllocation
from .models import User, SystemRole


ROLE_COLOURS = {
    SystemRole.ADMIN: '#B85C5C',
    SystemRole.SUPER_USER: '#A47449',
    SystemRole.USER: '#6B8E5E',
}


class SlotAllocationInline(admin.TabularInline):
    model = SlotAllocation
    extra = 0
    fields = ['category', 'total', 'used']
    readonly_fields = ['used']


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for staff accounts.

    Slot totals are edited inline; ``used`` is only changed by registrations.
    """

    list_display = [
        'email',
        'full_name',
        'company_name',
        'role_badge',
        'is_active',
        'created_at',
        'last_login',
    ]

    list_filter = ['role', 'is_active', 'created_at']
    search_fields = ['email', 'full_name', 'company_name']
    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'full_name', 'company_name', 'password')
        }),
        ('Permissions', {
            'fields': ('role', 'is_active', 'is_staff', 'is_superuser'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create Account', {
            'classes': ('wide',),
            'fields': ('email', 'full_name', 'company_name', 'role', 'password1', 'password2'),
        }),
    )

    readonly_fields = ['created_at', 'last_login']
    filter_horizontal = []
    inlines = [SlotAllocationInline]

    def role_badge(self, obj):
        """Display role as colored badge."""
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            ROLE_COLOURS.get(obj.role, '#ccc'),
            obj.get_role_display(),
        )
    role_badge.short_description = 'Role'
    role_badge.admin_order_field = 'role'

    actions = ['activate_users', 'deactivate_users']

    @admin.action(description='Activate selected accounts')
    def activate_users(self, request, queryset):
        count = queryset.update(is_active=True)
        self.message_user(request, f'Activated {count} account(s).')

    @admin.action(description='Deactivate selected accounts')
    def deactivate_users(self, request, queryset):
        """Deactivate selected accounts (Admin accounts are skipped)."""
        safe_queryset = queryset.exclude(role=SystemRole.ADMIN)
        count = safe_queryset.update(is_active=False)
        skipped = queryset.count() - count
        msg = f'Deactivated {count} account(s).'
        if skipped:
            msg += f' Skipped {skipped} admin account(s).'
        self.message_user(request, msg)
