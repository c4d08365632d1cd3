import pytest
from django.urls import reverse
from rest_framework import status

from apps.attendees.models import Attendee, AttendeeStatus, RegistrationMethod
from apps.invitations.models import Invitation


@pytest.fixture
def invitation(admin_account):
    return Invitation.objects.create(code='ABC12345', attendee_category='VIP', created_by=admin_account)


@pytest.mark.django_db
class TestInvitationList:
    """Tests for /api/invitations/"""

    def test_generate(self, admin_api_client):
        response = admin_api_client.post(
            reverse('invitations:invitation-list'),
            {'attendee_category': 'Media', 'count': 4},
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert len(response.data) == 4
        assert Invitation.objects.filter(attendee_category='Media').count() == 4

    def test_generate_forbidden_for_regular_account(self, partner_api_client):
        response = partner_api_client.post(
            reverse('invitations:invitation-list'),
            {'attendee_category': 'Media', 'count': 4},
            format='json',
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_list_filters(self, superuser_api_client, invitation, admin_account):
        Invitation.objects.create(code='USED0001', attendee_category='VIP', is_used=True, created_by=admin_account)

        response = superuser_api_client.get(reverse('invitations:invitation-list'), {'is_used': 'false'})

        assert response.status_code == status.HTTP_200_OK
        assert [row['code'] for row in response.data['results']] == ['ABC12345']


@pytest.mark.django_db
class TestValidateEndpoint:
    """Tests for GET /api/invitations/validate/{code}/"""

    def test_valid_code(self, api_client, invitation):
        response = api_client.get(reverse('invitations:validate', kwargs={'code': 'abc12345'}))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'code': 'ABC12345', 'attendee_category': 'VIP'}

    def test_unknown_code(self, api_client, db):
        response = api_client.get(reverse('invitations:validate', kwargs={'code': 'NOPE0000'}))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_used_code(self, api_client, invitation):
        Invitation.objects.filter(pk=invitation.pk).update(is_used=True)

        response = api_client.get(reverse('invitations:validate', kwargs={'code': 'ABC12345'}))

        assert response.status_code == status.HTTP_409_CONFLICT


@pytest.mark.django_db
class TestRegisterEndpoint:
    """Tests for POST /api/invitations/register/"""

    def test_register(self, api_client, invitation, make_profile):
        response = api_client.post(reverse('invitations:register'), {
            'invitation_code': 'ABC12345',
            'profile': make_profile(email='guest@example.com'),
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        attendee = Attendee.objects.get(email='guest@example.com')
        assert attendee.category == 'VIP'
        assert attendee.status == AttendeeStatus.PENDING
        assert attendee.registration_method == RegistrationMethod.INVITATION
        assert response.data['invitation_code'] == 'ABC12345'

    def test_invalid_profile(self, api_client, invitation, make_profile):
        response = api_client.post(reverse('invitations:register'), {
            'invitation_code': 'ABC12345',
            'profile': make_profile(first_name=''),
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'first_name' in response.data['fields']
        assert Invitation.objects.get(code='ABC12345').is_used is False

    def test_code_used_twice(self, api_client, invitation, make_profile):
        first = api_client.post(reverse('invitations:register'), {
            'invitation_code': 'ABC12345', 'profile': make_profile(),
        }, format='json')
        second = api_client.post(reverse('invitations:register'), {
            'invitation_code': 'ABC12345', 'profile': make_profile(),
        }, format='json')

        assert first.status_code == status.HTTP_201_CREATED
        assert second.status_code == status.HTTP_409_CONFLICT
        assert Attendee.objects.count() == 1
