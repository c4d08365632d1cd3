from django.db import models
from django.db.models import F, Q
import uuid

from apps.common.choices import AttendeeCategory


class SlotAllocation(models.Model):
    """Registration slots of one account for one attendee category."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    account = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='slot_allocations')
    category = models.CharField(max_length=20, choices=AttendeeCategory.choices)
    total = models.PositiveIntegerField(default=0)
    used = models.PositiveIntegerField(default=0)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'slot_allocations'
        unique_together = [['account', 'category']]
        constraints = [
            models.CheckConstraint(condition=Q(used__gte=0), name='slot_used_non_negative'),
            models.CheckConstraint(condition=Q(used__lte=F('total')), name='slot_used_within_total'),
        ]
        ordering = ['category']

    def __str__(self):
        return f"{self.account} {self.category}: {self.used}/{self.total}"

    @property
    def remaining(self):
        return self.total - self.used


class SlotRequestStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    APPROVED = 'approved', 'Approved'
    DECLINED = 'declined', 'Declined'


class SlotRequest(models.Model):
    """An account asking staff for additional registration slots."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    account = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='slot_requests')
    requested_slots = models.JSONField(default=dict)
    reason = models.TextField(blank=True)
    status = models.CharField(max_length=20, choices=SlotRequestStatus.choices, default=SlotRequestStatus.PENDING)
    decided_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='decided_slot_requests',
    )
    decided_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'slot_requests'
        indexes = [
            models.Index(fields=['status', 'created_at'], name='slot_reques_status_5e9b21_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"Slot request by {self.account} ({self.status})"
