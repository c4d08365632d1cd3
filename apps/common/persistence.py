"""
Persistence helpers layered on the Django ORM.

The ORM already covers get/create/update/delete/filter. This module adds the
two primitives the registration services rely on:

- ``update_if``: a conditional single-row update executed as one
  ``UPDATE ... WHERE`` statement, so the predicate is evaluated by the
  database at write time instead of in Python after a read.
- ``gateway_deadline``: a time budget for the queries issued inside a block,
  enforced through ``connection.execute_wrapper``. PostgreSQL and SQLite
  also cancel a statement that is still running when the budget runs out.
"""

import time
from contextlib import contextmanager

from django.db import DEFAULT_DB_ALIAS, DatabaseError, connections

SQLITE_PROGRESS_STEPS = 1000


class GatewayTimeoutError(Exception):
    """Raised when a query runs past its deadline."""
    pass


def update_if(model, pk, predicate: dict, **changes) -> bool:
    """
    Update one row only if it still matches ``predicate``.

    Args:
        model: Django model class (or a manager/queryset to narrow further)
        pk: Primary key of the row
        predicate: Extra filter lookups the row must satisfy at write time
        **changes: Field values (or F() expressions) to write

    Returns:
        True if the row was updated, False if it did not match
    """
    queryset = model.objects.all() if hasattr(model, 'objects') else model
    return queryset.filter(pk=pk, **predicate).update(**changes) == 1


@contextmanager
def _postgresql_timeout(connection, deadline):
    remaining_ms = max(1, int((deadline - time.monotonic()) * 1000))
    with connection.connection.cursor() as cursor:
        cursor.execute("SELECT current_setting('statement_timeout')")
        previous = cursor.fetchone()[0]
        cursor.execute("SELECT set_config('statement_timeout', %s, false)", [str(remaining_ms)])

    def restore():
        with connection.connection.cursor() as cursor:
            cursor.execute("SELECT set_config('statement_timeout', %s, false)", [previous])

    try:
        yield
    except Exception:
        # Inside a transaction the failed statement aborts it and the
        # rollback undoes the SET as well.
        if not connection.in_atomic_block:
            restore()
        raise
    restore()


@contextmanager
def _sqlite_timeout(connection, deadline):
    raw = connection.connection
    raw.set_progress_handler(lambda: time.monotonic() > deadline, SQLITE_PROGRESS_STEPS)
    try:
        yield
    finally:
        raw.set_progress_handler(None, 0)


@contextmanager
def _no_backend_timeout(connection, deadline):
    yield


BACKEND_TIMEOUTS = {
    'postgresql': _postgresql_timeout,
    'sqlite': _sqlite_timeout,
}


@contextmanager
def gateway_deadline(timeout, using=DEFAULT_DB_ALIAS):
    """
    Bound the queries issued inside the block to ``timeout`` seconds in total.

    No query is started once the deadline has passed. On PostgreSQL
    (``statement_timeout``) and SQLite (progress handler) a statement still
    running at the deadline is cancelled by the database. Other backends
    only get the check before each query.

    A ``timeout`` of None disables the deadline.

    Raises:
        GatewayTimeoutError: From the query that started or ran past the deadline
    """
    if timeout is None:
        yield
        return

    deadline = time.monotonic() + timeout

    def guard(execute, sql, params, many, context):
        if time.monotonic() > deadline:
            raise GatewayTimeoutError(
                f"Persistence call exceeded its {timeout}s budget"
            )

        connection = context['connection']
        backend_timeout = BACKEND_TIMEOUTS.get(connection.vendor, _no_backend_timeout)
        try:
            with backend_timeout(connection, deadline):
                return execute(sql, params, many, context)
        except DatabaseError as exc:
            if time.monotonic() >= deadline:
                raise GatewayTimeoutError(
                    f"Persistence call cancelled after its {timeout}s budget"
                ) from exc
            raise

    with connections[using].execute_wrapper(guard):
        yield
