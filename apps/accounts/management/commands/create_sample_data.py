"""
Management command to create sample data for trying out the API.

Usage:
    python manage.py create_sample_data

This creates:
- 4 accounts (admin, super user, two partners with slot allocations)
- Pending slot requests from both partners
- Unused invitation codes for a few attendee categories
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.accounts.models import User, SystemRole
from apps.accounts.services import create_account
from apps.attendees.models import Attendee
from apps.invitations.models import Invitation
from apps.invitations.services import generate_invitations
from apps.notifications.models import Notification
from apps.slots.models import SlotAllocation, SlotRequest
from apps.slots.services import create_slot_request

SAMPLE_DOMAIN = 'forum.example'

PARTNERS = [
    {
        'email': f'partner.one@{SAMPLE_DOMAIN}',
        'full_name': 'Layla Haddad',
        'company_name': 'Desert Mining Co',
        'slot_totals': {'Partner': 10, 'Exhibitor': 5, 'Media': 2},
        'request': ({'Partner': 5}, 'Board members confirmed attendance'),
    },
    {
        'email': f'partner.two@{SAMPLE_DOMAIN}',
        'full_name': 'Omar Nasser',
        'company_name': 'Red Sea Metals',
        'slot_totals': {'Exhibitor': 8, 'Other': 3},
        'request': ({'Exhibitor': 4, 'VIP': 1}, 'Larger booth team this year'),
    },
]

INVITATIONS = {
    'VIP': 5,
    'Premier': 5,
    'Media': 3,
}


class Command(BaseCommand):
    help = 'Create sample data for testing the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating new sample data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        admin = self.create_admin()
        self.create_super_user(admin)
        partners = self.create_partners(admin)
        self.create_slot_requests(partners)
        self.create_invitations(admin)

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write(f'  admin@{SAMPLE_DOMAIN} / admin123 (admin)')
        self.stdout.write(f'  super@{SAMPLE_DOMAIN} / password123 (super user)')
        for partner in PARTNERS:
            self.stdout.write(f"  {partner['email']} / password123")

    def clear_data(self):
        """Clear registration data and the sample accounts."""
        Notification.objects.all().delete()
        Attendee.objects.all().delete()
        Invitation.objects.all().delete()
        SlotRequest.objects.all().delete()
        SlotAllocation.objects.all().delete()
        User.objects.filter(email__endswith=f'@{SAMPLE_DOMAIN}').delete()

    def create_admin(self):
        self.stdout.write('  Creating admin...')

        admin = User.objects.filter(email=f'admin@{SAMPLE_DOMAIN}').first()
        if admin is None:
            admin = User.objects.create_superuser(
                email=f'admin@{SAMPLE_DOMAIN}',
                password='admin123',
                full_name='Forum Admin',
            )
        return admin

    def create_super_user(self, admin):
        self.stdout.write('  Creating super user...')

        existing = User.objects.filter(email=f'super@{SAMPLE_DOMAIN}').first()
        if existing is not None:
            return existing

        return create_account(
            created_by=admin,
            email=f'super@{SAMPLE_DOMAIN}',
            password='password123',
            full_name='Registration Lead',
            role=SystemRole.SUPER_USER,
            slot_totals={'VIP': 20, 'Premier': 20},
        )

    def create_partners(self, admin):
        """Create partner accounts with their slot allocations."""
        self.stdout.write('  Creating partners...')

        partners = []
        for data in PARTNERS:
            account = User.objects.filter(email=data['email']).first()
            if account is None:
                account = create_account(
                    created_by=admin,
                    email=data['email'],
                    password='password123',
                    full_name=data['full_name'],
                    company_name=data['company_name'],
                    slot_totals=data['slot_totals'],
                )
            partners.append((account, data['request']))
        return partners

    def create_slot_requests(self, partners):
        self.stdout.write('  Creating slot requests...')

        for account, (requested_slots, reason) in partners:
            if SlotRequest.objects.filter(account=account).exists():
                continue
            create_slot_request(account=account, requested_slots=requested_slots, reason=reason)

    def create_invitations(self, admin):
        self.stdout.write('  Creating invitations...')

        for category, count in INVITATIONS.items():
            invitations = generate_invitations(account=admin, category=category, count=count)
            self.stdout.write(
                f"    {category}: {', '.join(invitation.code for invitation in invitations)}"
            )
