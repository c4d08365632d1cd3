from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from apps.common.choices import AttendeeCategory
from apps.slots.services import slot_summary
from .models import User, SystemRole


class UserSerializer(serializers.ModelSerializer):
    """Account serializer with slot overview."""

    slots = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'full_name',
            'company_name',
            'role',
            'is_active',
            'created_at',
            'last_login',
            'slots',
        ]
        read_only_fields = fields

    def get_slots(self, obj):
        return slot_summary(obj)


class UserMinimalSerializer(serializers.ModelSerializer):
    """Minimal account info for nesting."""

    display_name = serializers.CharField(source='get_display_name', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'email', 'full_name', 'display_name']
        read_only_fields = fields


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class SlotTotalsField(serializers.DictField):
    child = serializers.IntegerField(min_value=0)

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        unknown = [category for category in value if category not in AttendeeCategory.values]
        if unknown:
            raise serializers.ValidationError(f"Unknown categories: {', '.join(unknown)}")
        return value


class AccountCreateSerializer(serializers.Serializer):
    """Serializer for creating a staff account."""

    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    full_name = serializers.CharField(max_length=150, required=False, allow_blank=True, default='')
    company_name = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    role = serializers.ChoiceField(choices=SystemRole.choices, default=SystemRole.USER)
    slot_totals = SlotTotalsField(required=False)


class AccountUpdateSerializer(serializers.Serializer):
    """Serializer for partial account updates."""

    full_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    company_name = serializers.CharField(max_length=200, required=False, allow_blank=True)
    is_active = serializers.BooleanField(required=False)
    slot_totals = SlotTotalsField(required=False)


class RoleChangeSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=SystemRole.choices)
