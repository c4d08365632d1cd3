from django.contrib import admin
from apps.attendees.models import Attendee


@admin.register(Attendee)
class AttendeeAdmin(admin.ModelAdmin):
    """Admin interface for attendees."""

    list_display = [
        'email',
        'first_name',
        'last_name',
        'category',
        'status',
        'registration_method',
        'registered_by',
        'created_at',
    ]
    list_filter = ['category', 'status', 'registration_method', 'created_at']
    search_fields = ['email', 'first_name', 'last_name', 'organization']
    readonly_fields = ['registration_method', 'registered_by', 'invitation', 'created_at', 'updated_at']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    fieldsets = (
        ('Registration', {
            'fields': ('category', 'status', 'registration_method', 'registered_by', 'invitation')
        }),
        ('Personal', {
            'fields': (
                'title', 'first_name', 'last_name', 'email', 'mobile_number', 'country_code',
                'nationality', 'country_of_residence', 'date_of_birth', 'religion', 'linkedin_account',
            )
        }),
        ('Professional', {
            'fields': (
                'organization', 'job_title', 'level', 'level_specify', 'work_address', 'work_city',
                'work_country', 'primary_nature_of_business', 'areas_of_interest',
            )
        }),
        ('Identification', {
            'fields': (
                'id_type', 'id_number', 'issue_date', 'expiry_date', 'issue_place', 'need_visa',
                'face_photo_url', 'id_photo_url',
            ),
            'classes': ('collapse',),
        }),
        ('History', {
            'fields': ('previous_attendance', 'previous_years', 'created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('registered_by', 'invitation')
