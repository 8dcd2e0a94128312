"""
Unit tests for timer state derivation and transitions.
"""
from unittest.mock import AsyncMock

import pytest

from time_ledger.services.config_cache import ConfigCache
from time_ledger.services.errors import NoActiveTimerError, TimerAlreadyRunningError
from time_ledger.services.segment_provisioner import SegmentProvisioner
from time_ledger.services.segment_resolver import SegmentResolver
from time_ledger.services.timer_state_machine import (
    OpenEntry,
    TimerState,
    TimerStateMachine,
    derive_timer_state,
)


class TestDeriveTimerState:
    """Test suite for derive_timer_state."""

    def test_no_rows(self):
        assert derive_timer_state([]) == (TimerState.IDLE, None)

    def test_last_row_open(self):
        # Arrange
        rows = [
            ['2024-01-15', '9:00:00 AM', '10:00:00 AM'],
            ['2024-01-15', '11:00:00 AM'],
        ]

        # Act
        state, entry = derive_timer_state(rows)

        # Assert
        assert state is TimerState.RUNNING
        assert entry == OpenEntry(row_number=7, date='2024-01-15', start='11:00:00 AM')

    def test_last_row_closed(self):
        rows = [['2024-01-15', '9:00:00 AM', '10:00:00 AM']]
        assert derive_timer_state(rows) == (TimerState.IDLE, None)

    def test_open_row_above_last_is_ignored(self):
        rows = [
            ['2024-01-15', '9:00:00 AM'],
            ['2024-01-15', '11:00:00 AM', '12:00:00 PM'],
        ]
        assert derive_timer_state(rows)[0] is TimerState.IDLE

    def test_row_without_start_is_idle(self):
        assert derive_timer_state([['2024-01-15']])[0] is TimerState.IDLE

    def test_blank_row_numbering(self):
        # Arrange
        rows = [['2024-01-15', '9:00:00 AM', '10:00:00 AM'], [], ['2024-01-16', '8:00:00 AM']]

        # Act
        state, entry = derive_timer_state(rows)

        # Assert
        assert state is TimerState.RUNNING
        assert entry.row_number == 8


class TestTimerStateMachine:
    """Test suite for TimerStateMachine transitions."""

    @pytest.fixture
    def machine(self, store, clock, monotonic):
        config_cache = ConfigCache(store, clock=monotonic)
        return TimerStateMachine(
            store,
            config_cache,
            SegmentResolver(store),
            SegmentProvisioner(store, config_cache, clock=clock),
            clock=clock
        )

    @pytest.mark.asyncio
    async def test_current_state_without_segment(self, machine, document_id):
        assert await machine.current_state(document_id, None) == (TimerState.IDLE, None)

    @pytest.mark.asyncio
    async def test_start_then_stop(self, machine, clock, document_id):
        # Act
        started = await machine.start(document_id)
        clock.advance(hours=1, minutes=2, seconds=3)
        stopped = await machine.stop(document_id)

        # Assert
        assert started.start == '9:00:00 AM'
        assert stopped.end_time == '10:02:03 AM'
        assert stopped.duration == '01:02:03'
        assert await machine.current_state(document_id, started.segment) == (TimerState.IDLE, None)

    @pytest.mark.asyncio
    async def test_start_rejected_without_writing(self, machine, store, document_id):
        # Arrange
        await machine.start(document_id)
        store.append_row = AsyncMock()

        # Act & Assert
        with pytest.raises(TimerAlreadyRunningError):
            await machine.start(document_id)

        store.append_row.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_stop_rejected_without_writing(self, machine, store, document_id):
        # Arrange
        await machine.start(document_id)
        await machine.stop(document_id)
        store.update_cell = AsyncMock()

        # Act & Assert
        with pytest.raises(NoActiveTimerError):
            await machine.stop(document_id)

        store.update_cell.assert_not_awaited()
