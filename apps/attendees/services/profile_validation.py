"""
Static checks applied to every registration before anything is stored.

The same rules serve public invitation registrations, manual entries and
each row of a bulk import.
"""

from django.core.validators import RegexValidator
from django.utils import timezone
from rest_framework import serializers

from apps.attendees.models import IdType
from apps.common.choices import AttendeeCategory

from .exceptions import ProfileValidationError

MINIMUM_AGE = 18

english_only = RegexValidator(
    r'^[A-Za-z0-9\s&.\-,()/]*$',
    message='Please use English characters only.',
)


def age_on(born, today) -> int:
    return today.year - born.year - ((today.month, today.day) < (born.month, born.day))


class AttendeeProfileSerializer(serializers.Serializer):
    # Personal
    title = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    first_name = serializers.CharField(max_length=100, validators=[english_only])
    last_name = serializers.CharField(max_length=100, validators=[english_only])
    email = serializers.EmailField(max_length=255)
    confirm_email = serializers.EmailField(required=False, write_only=True)
    mobile_number = serializers.CharField(max_length=30)
    country_code = serializers.CharField(max_length=10, required=False, allow_blank=True, default='')
    nationality = serializers.CharField(max_length=100)
    country_of_residence = serializers.CharField(max_length=100)
    date_of_birth = serializers.DateField()
    religion = serializers.CharField(max_length=50, required=False, allow_blank=True, default='')
    linkedin_account = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')

    # Professional
    organization = serializers.CharField(max_length=200, validators=[english_only])
    job_title = serializers.CharField(max_length=200, validators=[english_only])
    level = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    level_specify = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    work_address = serializers.CharField(
        max_length=255, required=False, allow_blank=True, default='', validators=[english_only]
    )
    work_city = serializers.CharField(
        max_length=100, required=False, allow_blank=True, default='', validators=[english_only]
    )
    work_country = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    primary_nature_of_business = serializers.CharField(
        max_length=200, required=False, allow_blank=True, default=''
    )
    areas_of_interest = serializers.ListField(
        child=serializers.CharField(max_length=100), required=False, default=list
    )

    # Identification
    id_type = serializers.ChoiceField(choices=IdType.choices)
    id_number = serializers.CharField(max_length=50)
    issue_date = serializers.DateField(required=False, allow_null=True, default=None)
    expiry_date = serializers.DateField(required=False, allow_null=True, default=None)
    issue_place = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    need_visa = serializers.BooleanField(required=False, default=False)
    face_photo_url = serializers.URLField(max_length=500, required=False, allow_blank=True, default='')
    id_photo_url = serializers.URLField(max_length=500, required=False, allow_blank=True, default='')

    # History
    previous_attendance = serializers.BooleanField(required=False, default=False)
    previous_years = serializers.ListField(
        child=serializers.CharField(max_length=10), required=False, default=list
    )

    def validate_email(self, value):
        return value.strip().lower()

    def validate_date_of_birth(self, value):
        if age_on(value, timezone.localdate()) < MINIMUM_AGE:
            raise serializers.ValidationError(f"Attendees must be at least {MINIMUM_AGE} years old.")
        return value

    def validate(self, attrs):
        errors = {}

        confirm_email = attrs.pop('confirm_email', None)
        if confirm_email is not None and confirm_email.strip().lower() != attrs['email']:
            errors['confirm_email'] = 'Email addresses do not match.'

        if attrs.get('level') == 'Other' and not attrs.get('level_specify'):
            errors['level_specify'] = "Please specify your level if you selected 'Other'."

        if attrs.get('previous_attendance') and not attrs.get('previous_years'):
            errors['previous_years'] = 'Please select which years you attended previously.'

        if attrs.get('id_type') == IdType.PASSPORT and attrs.get('need_visa'):
            if not attrs.get('expiry_date'):
                errors['expiry_date'] = 'Passport expiry date is required for visa application.'
            if not attrs.get('issue_place'):
                errors['issue_place'] = 'Passport issue place is required for visa application.'

        if errors:
            raise serializers.ValidationError(errors)
        return attrs


class BulkRowSerializer(AttendeeProfileSerializer):
    """A bulk import row carries its own category."""

    category = serializers.ChoiceField(choices=AttendeeCategory.choices)


def _flatten(errors) -> dict:
    return {
        field: [str(message) for message in (messages if isinstance(messages, list) else [messages])]
        for field, messages in errors.items()
    }


def validate_profile(data, serializer_class=AttendeeProfileSerializer) -> dict:
    """
    Run the static registration checks.

    Returns:
        Cleaned profile fields, ready to be stored on an Attendee

    Raises:
        ProfileValidationError: With ``errors`` mapping field -> messages
    """
    serializer = serializer_class(data=data)
    if not serializer.is_valid():
        raise ProfileValidationError(_flatten(serializer.errors))
    return dict(serializer.validated_data)
