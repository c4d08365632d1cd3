"""Tests for the ORM persistence helpers."""

import time

import pytest
from django.db import connection

from apps.accounts.models import User, SystemRole
from apps.common.persistence import GatewayTimeoutError, gateway_deadline, update_if

# Counts to a hundred million; takes far longer than any deadline below.
SLOW_QUERY = (
    "WITH RECURSIVE counter(n) AS (SELECT 1 UNION ALL SELECT n + 1 FROM counter WHERE n < 100000000) "
    "SELECT count(*) FROM counter"
)


@pytest.mark.django_db
class TestUpdateIf:

    def test_updates_when_predicate_matches(self, partner_account):
        updated = update_if(
            User, partner_account.pk, {'role': SystemRole.USER},
            company_name='Renamed Co',
        )

        partner_account.refresh_from_db()
        assert updated is True
        assert partner_account.company_name == 'Renamed Co'

    def test_not_matched_leaves_row_untouched(self, partner_account):
        updated = update_if(
            User, partner_account.pk, {'role': SystemRole.ADMIN},
            company_name='Renamed Co',
        )

        partner_account.refresh_from_db()
        assert updated is False
        assert partner_account.company_name != 'Renamed Co'


@pytest.mark.django_db
class TestGatewayDeadline:

    def test_queries_within_budget_run(self, partner_account):
        with gateway_deadline(30):
            assert User.objects.filter(pk=partner_account.pk).exists()

    def test_query_after_deadline_raises(self, partner_account):
        with pytest.raises(GatewayTimeoutError):
            with gateway_deadline(0.001):
                time.sleep(0.01)
                User.objects.filter(pk=partner_account.pk).exists()

    def test_none_disables_deadline(self, partner_account):
        with gateway_deadline(None):
            assert User.objects.count() >= 1

    def test_single_slow_query_is_cancelled(self, db):
        started = time.monotonic()

        with pytest.raises(GatewayTimeoutError):
            with gateway_deadline(0.05):
                with connection.cursor() as cursor:
                    cursor.execute(SLOW_QUERY)

        assert time.monotonic() - started < 5

    def test_connection_usable_after_cancel(self, partner_account):
        with pytest.raises(GatewayTimeoutError):
            with gateway_deadline(0.05):
                with connection.cursor() as cursor:
                    cursor.execute(SLOW_QUERY)

        assert User.objects.filter(pk=partner_account.pk).exists()

    def test_limit_lifted_after_block(self, db):
        with gateway_deadline(0.05):
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
        time.sleep(0.1)

        with connection.cursor() as cursor:
            cursor.execute(SLOW_QUERY.replace("100000000", "100000"))
            assert cursor.fetchone()[0] == 100000
