import pytest

from apps.accounts.models import User, SystemRole
from apps.common.choices import AttendeeCategory
from apps.slots.models import SlotAllocation

PASSWORD = 'TestPass123!'


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
