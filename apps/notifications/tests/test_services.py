"""
Tests for notification fan-out, the inbox and outgoing email.
"""

from smtplib import SMTPException
from types import SimpleNamespace
from unittest.mock import patch

import pytest
from django.core import mail

from apps.accounts.models import SystemRole
from apps.notifications.events import EventKind, describe
from apps.notifications.models import Notification, Severity
from apps.notifications.services import (
    notify,
    list_notifications,
    unread_count,
    mark_as_read,
    mark_all_as_read,
    send_email,
    send_welcome_email,
    DispatchError,
    NotificationNotFoundError,
)


@pytest.mark.django_db
class TestFanout:

    def test_one_notification_per_privileged_account(self, admin_account, superuser_account, partner_account, inactive_account):
        created = notify(EventKind.INVITATIONS_GENERATED, count=5, category='VIP', actor=admin_account)

        assert len(created) == 2
        assert set(Notification.objects.values_list('recipient', flat=True)) == {
            admin_account.id, superuser_account.id,
        }

    def test_recipients_resolved_per_call(self, admin_account, partner_account):
        notify(EventKind.LOGIN, account=admin_account)
        partner_account.role = SystemRole.SUPER_USER
        partner_account.save()
        notify(EventKind.LOGIN, account=admin_account)

        assert Notification.objects.filter(recipient=partner_account).count() == 1
        assert Notification.objects.filter(recipient=admin_account).count() == 2

    def test_no_privileged_accounts(self, partner_account):
        assert notify(EventKind.LOGIN, account=partner_account) == []

    def test_store_failure_is_swallowed(self, admin_account):
        with patch('apps.notifications.services.fanout.Notification.objects.bulk_create',
                   side_effect=RuntimeError('store down')):
            result = notify(EventKind.LOGIN, account=admin_account)

        assert result == []
        assert not Notification.objects.exists()

    def test_bad_payload_is_swallowed(self, admin_account):
        assert notify(EventKind.LOGIN) == []

    def test_records_kind_title_and_severity(self, admin_account):
        notify(EventKind.SYSTEM_ERROR, error='disk full', context='bulk_import', actor=admin_account)

        notification = Notification.objects.get()
        assert notification.event_kind == 'system_error'
        assert notification.title == 'System Error Occurred'
        assert notification.severity == Severity.ERROR
        assert 'disk full (Context: bulk_import)' in notification.message


class TestDescribe:

    def test_slot_request_lists_nonzero_categories(self):
        slot_request = SimpleNamespace(requested_slots={'VIP': 2, 'Media': 0})
        actor = SimpleNamespace(full_name='Pat', email='pat@example.com')

        title, message, severity = describe(EventKind.SLOT_REQUEST_CREATED, slot_request=slot_request, actor=actor)

        assert title == 'Slot Request Submitted'
        assert message == 'Pat requested additional slots: 2 VIP'
        assert severity == Severity.INFO

    def test_status_change_severity(self):
        attendee = SimpleNamespace(first_name='A', last_name='B')

        _, _, severity = describe(
            'attendee_status_changed', attendee=attendee,
            old_status='pending', new_status='change_requested', actor=None,
        )

        assert severity == Severity.WARNING

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            describe('unknown_kind')


@pytest.mark.django_db
class TestInbox:

    @pytest.fixture
    def inbox(self, admin_account, superuser_account):
        notify(EventKind.LOGIN, account=admin_account)
        notify(EventKind.LOGIN, account=superuser_account)
        return list_notifications(account=admin_account)

    def test_list_is_scoped_to_recipient(self, inbox, admin_account):
        assert inbox.count() == 2
        assert all(n.recipient == admin_account for n in inbox)

    def test_mark_one(self, inbox, admin_account):
        mark_as_read(notification_id=inbox.first().id, account=admin_account)

        assert unread_count(account=admin_account) == 1
        assert list_notifications(account=admin_account, unread_only=True).count() == 1

    def test_cannot_mark_someone_elses(self, inbox, superuser_account):
        with pytest.raises(NotificationNotFoundError):
            mark_as_read(notification_id=inbox.first().id, account=superuser_account)

    def test_mark_all(self, inbox, admin_account, superuser_account):
        assert mark_all_as_read(account=admin_account) == 2
        assert unread_count(account=admin_account) == 0
        assert unread_count(account=superuser_account) == 2


class TestEmail:

    def test_send_email(self):
        send_email(to='a@example.com', subject='Hello', html='<p>Hi</p>', bcc=['b@example.com'])

        message = mail.outbox[0]
        assert message.to == ['a@example.com']
        assert message.bcc == ['b@example.com']
        assert message.body == 'Hi'
        assert message.alternatives[0][0] == '<p>Hi</p>'

    def test_backend_failure_raises_dispatch_error(self):
        with patch('apps.notifications.services.email_dispatcher.EmailMultiAlternatives.send',
                   side_effect=SMTPException('rejected')):
            with pytest.raises(DispatchError):
                send_email(to=['a@example.com'], subject='Hello', html='<p>Hi</p>')

    def test_welcome_email(self, settings):
        settings.EVENT_NAME = 'Minerals Forum'
        attendee = SimpleNamespace(id='1', email='guest@example.com', first_name='Guest', last_name='One', category='VIP')

        assert send_welcome_email(attendee) is True
        assert mail.outbox[0].subject == 'Welcome to Minerals Forum'
        assert 'Guest' in mail.outbox[0].body

    def test_welcome_email_failure_is_swallowed(self):
        attendee = SimpleNamespace(id='1', email='guest@example.com', first_name='Guest', last_name='One', category='VIP')

        with patch('apps.notifications.services.email_dispatcher.EmailMultiAlternatives.send',
                   side_effect=OSError('connection refused')):
            assert send_welcome_email(attendee) is False

    def test_api_backend_error_raises_dispatch_error(self):
        with patch('apps.notifications.services.email_dispatcher.EmailMultiAlternatives.send',
                   side_effect=RuntimeError('api 502')):
            with pytest.raises(DispatchError):
                send_email(to='a@example.com', subject='Hello', html='<p>Hi</p>')

    def test_welcome_template_error_is_swallowed(self):
        attendee = SimpleNamespace(id='1', email='guest@example.com', first_name='Guest', last_name='One', category='VIP')

        with patch('apps.notifications.services.email_dispatcher.render_to_string',
                   side_effect=RuntimeError('template missing')):
            assert send_welcome_email(attendee) is False
