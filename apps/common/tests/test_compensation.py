"""Tests for the create-or-compensate helper."""

import pytest

from apps.common.compensation import CompensatingBatch, CompensationFailureError


class TestCompensatingBatch:

    def test_successful_block_keeps_items(self):
        undone = []

        with CompensatingBatch(undone.append) as batch:
            batch.track('a')
            batch.track('b')

        assert batch.applied == ['a', 'b']
        assert undone == []

    def test_failure_undoes_in_reverse_order(self):
        undone = []

        with pytest.raises(RuntimeError, match='boom'):
            with CompensatingBatch(undone.append) as batch:
                batch.track('a')
                batch.track('b')
                raise RuntimeError('boom')

        assert undone == ['b', 'a']
        assert batch.applied == []

    def test_undo_failure_reports_unreverted_items(self):
        def undo(item):
            if item == 'b':
                raise OSError('store unavailable')

        with pytest.raises(CompensationFailureError) as exc_info:
            with CompensatingBatch(undo, operation='import') as batch:
                for item in ('a', 'b', 'c'):
                    batch.track(item)
                raise ValueError('row failed')

        error = exc_info.value
        assert error.unreverted == ['b']
        assert error.operation == 'import'
        # Original failure stays attached for operators
        assert isinstance(error.__context__, ValueError)

    def test_all_items_attempted_when_some_fail(self):
        attempted = []

        def undo(item):
            attempted.append(item)
            raise OSError('down')

        batch = CompensatingBatch(undo)
        batch.track(1)
        batch.track(2)

        with pytest.raises(CompensationFailureError) as exc_info:
            batch.compensate()

        assert attempted == [2, 1]
        assert exc_info.value.unreverted == [2, 1]
