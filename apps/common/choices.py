from django.db import models


class AttendeeCategory(models.TextChoices):
    """Registration categories shared by invitations, slots and attendees."""

    VIP = 'VIP', 'VIP'
    PREMIER = 'Premier', 'Premier'
    PARTNER = 'Partner', 'Partner'
    EXHIBITOR = 'Exhibitor', 'Exhibitor'
    MEDIA = 'Media', 'Media'
    OTHER = 'Other', 'Other'
