"""
Tests for the all-or-nothing bulk import.
"""

from unittest.mock import patch

import pytest
from django.core import mail
from django.db import connection

from apps.attendees.models import Attendee, AttendeeStatus
from apps.attendees.services import (
    import_batch,
    register_manually,
    CompensationFailureError,
)
from apps.attendees.services import bulk_import
from apps.common.persistence import GatewayTimeoutError
from apps.notifications.models import Notification
from apps.slots.models import SlotAllocation
from apps.slots.services import InsufficientSlotsError


@pytest.fixture
def make_row(make_profile):
    def factory(category='Partner', **overrides):
        return make_profile(category=category, **overrides)
    return factory


SLOW_QUERY = (
    "WITH RECURSIVE counter(n) AS (SELECT 1 UNION ALL SELECT n + 1 FROM counter WHERE n < 100000000) "
    "SELECT count(*) FROM counter"
)


def usage(account):
    return dict(SlotAllocation.objects.filter(account=account).values_list('category', 'used'))


@pytest.mark.django_db
class TestSuccessfulImport:

    def test_all_rows_created_and_charged(self, partner_account, make_row):
        rows = [make_row('Partner'), make_row('Partner'), make_row('Exhibitor')]

        result = import_batch(account=partner_account, rows=rows)

        assert result.succeeded
        assert [a.email for a in result.created] == [row['email'] for row in rows]
        assert usage(partner_account) == {'Partner': 2, 'Exhibitor': 1}
        assert all(a.status == AttendeeStatus.APPROVED for a in result.created)

    def test_emits_one_bulk_notification(self, partner_account, admin_account, superuser_account, make_row):
        import_batch(account=partner_account, rows=[make_row(), make_row()])

        bulk = Notification.objects.filter(event_kind='bulk_operation')
        assert bulk.count() == 2  # one per privileged account
        assert 'Upload of 2 attendee records' in bulk.first().message
        assert not Notification.objects.filter(event_kind='attendee_registered').exists()

    def test_welcome_emails_for_approved_rows(self, partner_account, make_row):
        import_batch(account=partner_account, rows=[make_row(), make_row()])

        assert len(mail.outbox) == 2

    def test_mail_backend_error_keeps_batch(self, partner_account, make_row):
        with patch('apps.notifications.services.email_dispatcher.EmailMultiAlternatives.send',
                   side_effect=RuntimeError('api 502')):
            result = import_batch(account=partner_account, rows=[make_row(), make_row()])

        assert len(result.created) == 2
        assert Attendee.objects.count() == 2
        assert usage(partner_account)['Partner'] == 2

    def test_admin_import_is_exempt_and_pending(self, admin_account, make_row):
        result = import_batch(account=admin_account, rows=[make_row('VIP') for _ in range(5)])

        assert len(result.created) == 5
        assert all(a.status == AttendeeStatus.PENDING for a in result.created)
        assert not SlotAllocation.objects.filter(account=admin_account).exists()
        assert len(mail.outbox) == 0

    def test_empty_batch(self, partner_account):
        result = import_batch(account=partner_account, rows=[])

        assert result.created == []
        assert result.rejected == []


@pytest.mark.django_db
class TestStaticValidation:

    def test_any_invalid_row_rejects_whole_batch(self, partner_account, make_row):
        rows = [make_row(), make_row(first_name=''), make_row(), make_row(category='Gold')]

        result = import_batch(account=partner_account, rows=rows)

        assert result.created == []
        assert [r.row_index for r in result.rejected] == [1, 3]
        assert 'first_name' in result.rejected[0].errors
        assert 'category' in result.rejected[1].errors
        assert Attendee.objects.count() == 0
        assert usage(partner_account) == {'Partner': 0, 'Exhibitor': 0}

    def test_duplicate_email_within_batch(self, partner_account, make_row):
        rows = [make_row(email='same@example.com'), make_row(email='SAME@example.com')]

        result = import_batch(account=partner_account, rows=rows)

        assert [r.row_index for r in result.rejected] == [1]
        assert 'row 0' in result.rejected[0].reason
        assert Attendee.objects.count() == 0


@pytest.mark.django_db
class TestQuotaPreCheck:

    def test_tally_over_quota_rejects_before_creating(self, partner_account, make_row):
        rows = [make_row('Partner'), make_row('Partner'), make_row('Partner')]

        with pytest.raises(InsufficientSlotsError) as exc_info:
            import_batch(account=partner_account, rows=rows)

        assert exc_info.value.shortfalls == {'Partner': (3, 2)}
        assert Attendee.objects.count() == 0
        assert usage(partner_account)['Partner'] == 0

    def test_quota_lost_after_creation_compensates(self, partner_account, make_row):
        rows = [make_row('Partner'), make_row('Partner')]

        with patch('apps.slots.services.quota_ledger.ensure_available'):
            SlotAllocation.objects.filter(account=partner_account, category='Partner').update(used=1)
            with pytest.raises(InsufficientSlotsError):
                import_batch(account=partner_account, rows=rows)

        assert Attendee.objects.count() == 0
        assert usage(partner_account)['Partner'] == 1


@pytest.mark.django_db
class TestCompensation:

    def test_row_two_duplicate_rolls_back_batch(self, partner_account, admin_account, make_row, make_profile):
        """Row 2 collides with a stored attendee: nothing from the batch survives."""
        SlotAllocation.objects.filter(account=partner_account, category='Partner').update(total=5)
        register_manually(account=admin_account, category='VIP', profile_data=make_profile(email='existing@example.com'))
        Notification.objects.all().delete()

        rows = [make_row(), make_row(email='existing@example.com'), make_row()]
        result = import_batch(account=partner_account, rows=rows)

        assert result.created == []
        assert len(result.rejected) == 1
        assert result.rejected[0].row_index == 1
        assert 'existing@example.com' in result.rejected[0].reason
        assert list(Attendee.objects.values_list('email', flat=True)) == ['existing@example.com']
        assert usage(partner_account)['Partner'] == 0
        assert not Notification.objects.filter(event_kind='bulk_operation').exists()

    @pytest.mark.parametrize('failing_row', [0, 1, 2, 3])
    def test_first_failing_row_leaves_nothing(self, partner_account, make_row, failing_row):
        SlotAllocation.objects.filter(account=partner_account, category='Partner').update(total=10)
        rows = [make_row() for _ in range(4)]
        real_create = bulk_import.create_attendee
        calls = []
        deleted = []

        def create(**fields):
            calls.append(fields['email'])
            if len(calls) - 1 == failing_row:
                raise bulk_import.DuplicateEmailError('taken')
            return real_create(**fields)

        real_delete = bulk_import._delete_attendee

        def delete(attendee, timeout):
            deleted.append(attendee.email)
            real_delete(attendee, timeout)

        with patch.object(bulk_import, 'create_attendee', side_effect=create), \
                patch.object(bulk_import, '_delete_attendee', side_effect=delete):
            result = import_batch(account=partner_account, rows=rows)

        # Rows before the failing one were created, then removed again
        assert len(deleted) == failing_row
        assert result.rejected[0].row_index == failing_row
        assert Attendee.objects.count() == 0
        assert usage(partner_account)['Partner'] == 0

    def test_failed_compensation_is_reported(self, partner_account, admin_account, make_row, make_profile):
        SlotAllocation.objects.filter(account=partner_account, category='Partner').update(total=5)
        register_manually(account=admin_account, category='VIP', profile_data=make_profile(email='existing@example.com'))

        rows = [make_row(email='first@example.com'), make_row(email='second@example.com'),
                make_row(email='existing@example.com')]

        def flaky_delete(attendee, timeout):
            if attendee.email == 'second@example.com':
                raise GatewayTimeoutError('store unavailable')
            Attendee.objects.filter(pk=attendee.pk).delete()

        with patch.object(bulk_import, '_delete_attendee', side_effect=flaky_delete):
            with pytest.raises(CompensationFailureError) as exc_info:
                import_batch(account=partner_account, rows=rows)

        assert [a.email for a in exc_info.value.unreverted] == ['second@example.com']
        assert set(Attendee.objects.values_list('email', flat=True)) == {
            'existing@example.com', 'second@example.com',
        }
        assert usage(partner_account)['Partner'] == 0

        error = Notification.objects.get(event_kind='system_error', recipient=admin_account)
        assert 'bulk_import' in error.message

    def test_compensating_delete_runs_under_deadline(self, partner_account, make_row, make_profile, admin_account):
        register_manually(account=admin_account, category='VIP', profile_data=make_profile(email='existing@example.com'))
        rows = [make_row(), make_row(email='existing@example.com')]

        with patch.object(bulk_import, 'gateway_deadline', wraps=bulk_import.gateway_deadline) as deadline:
            import_batch(account=partner_account, rows=rows, timeout=7.5)

        deadline.assert_called_once_with(7.5)

    def test_hung_compensating_delete_is_cancelled_and_reported(
        self, partner_account, make_row, make_profile, admin_account,
    ):
        register_manually(account=admin_account, category='VIP', profile_data=make_profile(email='existing@example.com'))
        rows = [make_row(email='first@example.com'), make_row(email='existing@example.com')]

        def slow_attendee_deletes(execute, sql, params, many, context):
            if sql.startswith('DELETE') and 'attendees' in sql:
                execute(SLOW_QUERY, (), False, context)
            return execute(sql, params, many, context)

        with connection.execute_wrapper(slow_attendee_deletes):
            with pytest.raises(CompensationFailureError) as exc_info:
                import_batch(account=partner_account, rows=rows, timeout=0.05)

        assert [a.email for a in exc_info.value.unreverted] == ['first@example.com']
        assert isinstance(exc_info.value.failures[0][1], GatewayTimeoutError)
        assert Attendee.objects.filter(email='first@example.com').exists()
        assert usage(partner_account)['Partner'] == 0
