import itertools
from datetime import date

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User, SystemRole
from apps.common.choices import AttendeeCategory
from apps.slots.models import SlotAllocation

PASSWORD = 'TestPass123!'


def authenticate(client, account):
    """Attach a JWT for ``account`` to ``client``."""
    refresh = RefreshToken.for_user(account)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def admin_account(db):
    """Admin: quota exempt, manages accounts."""
    return User.objects.create_user(
        email='admin@forum.example',
        password=PASSWORD,
        full_name='Admin Person',
        role=SystemRole.ADMIN,
    )


@pytest.fixture
def superuser_account(db):
    """Super User: privileged but still bound by slots."""
    return User.objects.create_user(
        email='super@forum.example',
        password=PASSWORD,
        full_name='Super Person',
        role=SystemRole.SUPER_USER,
    )


@pytest.fixture
def partner_account(db):
    """Regular account with 2 Partner slots and 1 Exhibitor slot, none used."""
    account = User.objects.create_user(
        email='partner@company.example',
        password=PASSWORD,
        full_name='Partner Person',
        company_name='Partner Co',
        role=SystemRole.USER,
    )
    SlotAllocation.objects.create(account=account, category=AttendeeCategory.PARTNER, total=2)
    SlotAllocation.objects.create(account=account, category=AttendeeCategory.EXHIBITOR, total=1)
    return account


@pytest.fixture
def admin_api_client(admin_account):
    return authenticate(APIClient(), admin_account)


@pytest.fixture
def superuser_api_client(superuser_account):
    return authenticate(APIClient(), superuser_account)


@pytest.fixture
def partner_api_client(partner_account):
    return authenticate(APIClient(), partner_account)


@pytest.fixture
def make_profile():
    """
    Factory for valid registration profiles.

    Every call gets a fresh email unless one is passed; keyword arguments
    override any field.
    """
    counter = itertools.count(1)

    def factory(**overrides):
        number = next(counter)
        profile = {
            'title': 'Mr',
            'first_name': 'Test',
            'last_name': f'Attendee{number}',
            'email': f'attendee{number}@example.com',
            'mobile_number': '500000000',
            'country_code': '+966',
            'nationality': 'Saudi Arabia',
            'country_of_residence': 'Saudi Arabia',
            'date_of_birth': date(1985, 5, 20).isoformat(),
            'organization': 'Mining Co',
            'job_title': 'Geologist',
            'level': 'Manager',
            'work_city': 'Riyadh',
            'id_type': 'National ID',
            'id_number': f'10{number:08d}',
        }
        profile.update(overrides)
        return profile

    return factory
