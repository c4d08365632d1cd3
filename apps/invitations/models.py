from django.db import models
import uuid

from apps.common.choices import AttendeeCategory

CODE_ALPHABET = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789'
CODE_LENGTH = 8


class Invitation(models.Model):
    """
    Single-use code that lets one attendee register in a fixed category.

    Only the redemption fields change after creation, and only once.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    code = models.CharField(max_length=CODE_LENGTH, unique=True)
    attendee_category = models.CharField(max_length=20, choices=AttendeeCategory.choices)

    # Redemption
    is_used = models.BooleanField(default=False, db_index=True)
    used_by_identifier = models.CharField(max_length=255, null=True, blank=True)
    used_at = models.DateTimeField(null=True, blank=True)

    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        related_name='created_invitations',
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'invitations'
        indexes = [
            models.Index(fields=['attendee_category', 'is_used'], name='invitations_attende_0a7c3f_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        state = 'used' if self.is_used else 'unused'
        return f"{self.code} ({self.attendee_category}, {state})"
