from rest_framework import serializers
from .models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    """Notification as shown in the inbox."""

    class Meta:
        model = Notification
        fields = ['id', 'event_kind', 'title', 'message', 'severity', 'is_read', 'created_at']
        read_only_fields = fields
