from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
import uuid


class SystemRole(models.TextChoices):
    ADMIN = 'admin', 'Admin'
    SUPER_USER = 'super_user', 'Super User'
    USER = 'user', 'User'


class UserManager(BaseUserManager):
    """Custom user manager for email-based authentication."""

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Email is required')

        email = self.normalize_email(email).lower()
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('role', SystemRole.ADMIN)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(email, password, **extra_fields)

    def privileged(self):
        """Active accounts that receive every administrative notification."""
        return self.filter(
            is_active=True,
            role__in=[SystemRole.ADMIN, SystemRole.SUPER_USER],
        )


class User(AbstractBaseUser, PermissionsMixin):
    """Staff account; holds registration slots unless it is an Admin."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, max_length=255, db_index=True)
    full_name = models.CharField(max_length=150, blank=True)
    company_name = models.CharField(max_length=200, blank=True)

    role = models.CharField(max_length=20, choices=SystemRole.choices, default=SystemRole.USER)

    # Permissions
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    last_login = models.DateTimeField(null=True, blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['role', 'is_active'], name='users_role_6c1a1e_idx'),
            models.Index(fields=['created_at'], name='users_created_3f2b8d_idx'),
        ]

    def __str__(self):
        return self.email

    def get_display_name(self):
        """Return full name or email prefix."""
        return self.full_name or self.email.split('@')[0]

    @property
    def privileges(self):
        from apps.accounts.privileges import PrivilegeTier
        return PrivilegeTier.for_account(self)

    @property
    def category_totals(self):
        return {a.category: a.total for a in self.slot_allocations.all()}

    @property
    def category_used(self):
        return {a.category: a.used for a in self.slot_allocations.all()}
