from django.db import models
import uuid

from apps.common.choices import AttendeeCategory


class AttendeeStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    APPROVED = 'approved', 'Approved'
    DECLINED = 'declined', 'Declined'
    CHANGE_REQUESTED = 'change_requested', 'Change Requested'


class RegistrationMethod(models.TextChoices):
    INVITATION = 'invitation', 'Invitation'
    MANUAL = 'manual', 'Manual'


class IdType(models.TextChoices):
    NATIONAL_ID = 'National ID', 'National ID'
    IQAMA = 'Iqama', 'Iqama'
    PASSPORT = 'Passport', 'Passport'


class Attendee(models.Model):
    """
    A registration record.

    Created by invitation redemption or by a staff account (manually or in a
    bulk import). Email is unique and stored lower-cased.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Registration
    category = models.CharField(max_length=20, choices=AttendeeCategory.choices)
    status = models.CharField(max_length=20, choices=AttendeeStatus.choices, default=AttendeeStatus.PENDING)
    registration_method = models.CharField(max_length=20, choices=RegistrationMethod.choices)
    registered_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='registered_attendees',
    )
    invitation = models.OneToOneField(
        'invitations.Invitation',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='attendee',
    )

    # Personal
    title = models.CharField(max_length=20, blank=True)
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    email = models.EmailField(max_length=255, unique=True)
    mobile_number = models.CharField(max_length=30)
    country_code = models.CharField(max_length=10, blank=True)
    nationality = models.CharField(max_length=100)
    country_of_residence = models.CharField(max_length=100)
    date_of_birth = models.DateField()
    religion = models.CharField(max_length=50, blank=True)
    linkedin_account = models.CharField(max_length=255, blank=True)

    # Professional
    organization = models.CharField(max_length=200)
    job_title = models.CharField(max_length=200)
    level = models.CharField(max_length=100, blank=True)
    level_specify = models.CharField(max_length=200, blank=True)
    work_address = models.CharField(max_length=255, blank=True)
    work_city = models.CharField(max_length=100, blank=True)
    work_country = models.CharField(max_length=100, blank=True)
    primary_nature_of_business = models.CharField(max_length=200, blank=True)
    areas_of_interest = models.JSONField(default=list, blank=True)

    # Identification
    id_type = models.CharField(max_length=20, choices=IdType.choices)
    id_number = models.CharField(max_length=50)
    issue_date = models.DateField(null=True, blank=True)
    expiry_date = models.DateField(null=True, blank=True)
    issue_place = models.CharField(max_length=100, blank=True)
    need_visa = models.BooleanField(default=False)
    face_photo_url = models.URLField(max_length=500, blank=True)
    id_photo_url = models.URLField(max_length=500, blank=True)

    # History
    previous_attendance = models.BooleanField(default=False)
    previous_years = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'attendees'
        indexes = [
            models.Index(fields=['category', 'status'], name='attendees_categor_4b7e2d_idx'),
            models.Index(fields=['registered_by', 'created_at'], name='attendees_registe_9c1f5a_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.first_name} {self.last_name} <{self.email}>"

    def save(self, *args, **kwargs):
        self.email = self.email.strip().lower()
        super().save(*args, **kwargs)

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"
