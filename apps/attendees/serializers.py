from rest_framework import serializers
from apps.accounts.serializers import UserMinimalSerializer
from apps.common.choices import AttendeeCategory
from .models import Attendee, AttendeeStatus


class AttendeeSerializer(serializers.ModelSerializer):
    """Attendee record as shown to staff."""

    registered_by = UserMinimalSerializer(read_only=True)
    invitation_code = serializers.CharField(source='invitation.code', read_only=True, default=None)

    class Meta:
        model = Attendee
        fields = [
            'id',
            'category',
            'status',
            'registration_method',
            'registered_by',
            'invitation_code',
            'title',
            'first_name',
            'last_name',
            'email',
            'mobile_number',
            'country_code',
            'nationality',
            'country_of_residence',
            'date_of_birth',
            'organization',
            'job_title',
            'level',
            'level_specify',
            'work_address',
            'work_city',
            'work_country',
            'primary_nature_of_business',
            'areas_of_interest',
            'id_type',
            'id_number',
            'issue_date',
            'expiry_date',
            'issue_place',
            'need_visa',
            'previous_attendance',
            'previous_years',
            'created_at',
        ]
        read_only_fields = fields


class ManualRegistrationSerializer(serializers.Serializer):
    """Envelope for a staff registration; the profile is validated by the service."""

    category = serializers.ChoiceField(choices=AttendeeCategory.choices)
    profile = serializers.DictField()


class BulkImportSerializer(serializers.Serializer):
    rows = serializers.ListField(child=serializers.DictField(), allow_empty=False, max_length=1000)


class RejectedRowSerializer(serializers.Serializer):
    row_index = serializers.IntegerField()
    reason = serializers.CharField()
    errors = serializers.DictField(child=serializers.ListField(child=serializers.CharField()))


class BatchResultSerializer(serializers.Serializer):
    created = AttendeeSerializer(many=True)
    rejected = RejectedRowSerializer(many=True)


class StatusChangeSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=AttendeeStatus.choices)
