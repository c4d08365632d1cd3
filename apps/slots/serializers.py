from rest_framework import serializers
from apps.accounts.serializers import UserMinimalSerializer
from apps.common.choices import AttendeeCategory
from .models import SlotRequest


class SlotSummarySerializer(serializers.Serializer):
    """One category line of an account's slot overview."""

    category = serializers.CharField()
    total = serializers.IntegerField()
    used = serializers.IntegerField()
    remaining = serializers.IntegerField(allow_null=True)
    unbounded = serializers.BooleanField()


class SlotRequestSerializer(serializers.ModelSerializer):
    """Serializer for slot requests."""

    account = UserMinimalSerializer(read_only=True)
    decided_by = UserMinimalSerializer(read_only=True)

    class Meta:
        model = SlotRequest
        fields = [
            'id',
            'account',
            'requested_slots',
            'reason',
            'status',
            'decided_by',
            'decided_at',
            'created_at',
        ]
        read_only_fields = fields


class SlotRequestCreateSerializer(serializers.Serializer):
    """Serializer for submitting a slot request."""

    requested_slots = serializers.DictField(
        child=serializers.IntegerField(min_value=0),
        allow_empty=False,
    )
    reason = serializers.CharField(required=False, allow_blank=True, default='')

    def validate_requested_slots(self, value):
        unknown = [category for category in value if category not in AttendeeCategory.values]
        if unknown:
            raise serializers.ValidationError(f"Unknown categories: {', '.join(unknown)}")
        return value


class SlotRequestDecisionSerializer(serializers.Serializer):
    """Serializer for approving or declining a slot request."""

    approve = serializers.BooleanField(required=True)
