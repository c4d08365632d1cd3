"""
Create-or-compensate helper.

Multi-step operations that cannot rely on a single database transaction
record every side effect they apply. If a later step fails, the recorded
effects are undone in reverse order before the failure propagates.

Example::

    with CompensatingBatch(delete_attendee) as batch:
        for row in rows:
            batch.track(create_attendee(row))
"""

import structlog

logger = structlog.get_logger(__name__)


class CompensationFailureError(Exception):
    """
    Raised when one or more applied effects could not be undone.

    The store may now violate the all-or-nothing invariant of the operation;
    ``unreverted`` lists the items an operator has to reconcile by hand.
    """

    def __init__(self, failures, operation='batch'):
        self.failures = list(failures)
        self.operation = operation
        items = ', '.join(str(item) for item, _ in self.failures)
        super().__init__(
            f"Rollback of {operation} incomplete: "
            f"{len(self.failures)} item(s) could not be reverted ({items})"
        )

    @property
    def unreverted(self):
        return [item for item, _ in self.failures]


class CompensatingBatch:
    """
    Track applied items and undo them when the surrounding block fails.

    Args:
        undo: Callable receiving one tracked item and reverting it
        operation: Label used in logs and in CompensationFailureError
    """

    def __init__(self, undo, operation='batch'):
        self._undo = undo
        self._applied = []
        self.operation = operation

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is not None:
            self.compensate()
        return False

    def track(self, item):
        """Record an applied item; returns it for chaining."""
        self._applied.append(item)
        return item

    @property
    def applied(self):
        return list(self._applied)

    def compensate(self):
        """
        Undo every tracked item, newest first.

        All items are attempted even if some fail.

        Raises:
            CompensationFailureError: If any undo raised
        """
        failures = []
        for item in reversed(self._applied):
            try:
                self._undo(item)
            except Exception as exc:
                logger.error(
                    "compensation_step_failed",
                    operation=self.operation,
                    item=str(item),
                    error=str(exc),
                )
                failures.append((item, exc))

        reverted = len(self._applied) - len(failures)
        self._applied = []
        logger.info(
            "compensation_finished",
            operation=self.operation,
            reverted=reverted,
            failed=len(failures),
        )

        if failures:
            raise CompensationFailureError(failures, operation=self.operation)
