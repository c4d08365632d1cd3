from rest_framework import serializers
from apps.common.choices import AttendeeCategory
from .models import Invitation
from .services.invitation_ledger import MAX_GENERATE


class InvitationSerializer(serializers.ModelSerializer):
    """Full invitation info for staff."""

    created_by_email = serializers.EmailField(source='created_by.email', read_only=True, default=None)

    class Meta:
        model = Invitation
        fields = [
            'id',
            'code',
            'attendee_category',
            'is_used',
            'used_by_identifier',
            'used_at',
            'created_by_email',
            'created_at',
        ]
        read_only_fields = fields


class InvitationPublicSerializer(serializers.ModelSerializer):
    """What an invitee may see about their code."""

    class Meta:
        model = Invitation
        fields = ['code', 'attendee_category']
        read_only_fields = fields


class InvitationGenerateSerializer(serializers.Serializer):
    attendee_category = serializers.ChoiceField(choices=AttendeeCategory.choices)
    count = serializers.IntegerField(min_value=1, max_value=MAX_GENERATE)


class InvitationRegisterSerializer(serializers.Serializer):
    """Envelope for a public registration; the profile is validated by the attendees service."""

    invitation_code = serializers.CharField(max_length=20)
    profile = serializers.DictField()
