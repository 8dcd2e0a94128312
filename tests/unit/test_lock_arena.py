"""
Unit tests for LockArena.
"""
import asyncio

import pytest

from time_ledger.services.lock_arena import LockArena


class TestLockArena:
    """Test suite for LockArena."""

    def test_same_key_same_lock(self):
        # Arrange
        arena = LockArena()

        # Act & Assert
        assert arena.lock_for('doc-a') is arena.lock_for('doc-a')
        assert arena.lock_for('doc-a') is not arena.lock_for('doc-b')
        assert len(arena) == 2
        assert 'doc-a' in arena

    @pytest.mark.asyncio
    async def test_same_key_serialized(self):
        # Arrange
        arena = LockArena()
        events = []

        async def worker(name):
            async with arena.hold('doc-a'):
                events.append(f'{name}-in')
                await asyncio.sleep(0)
                events.append(f'{name}-out')

        # Act
        await asyncio.gather(worker('first'), worker('second'))

        # Assert
        assert events == ['first-in', 'first-out', 'second-in', 'second-out']

    @pytest.mark.asyncio
    async def test_different_keys_interleave(self):
        # Arrange
        arena = LockArena()
        events = []

        async def worker(key):
            async with arena.hold(key):
                events.append(f'{key}-in')
                await asyncio.sleep(0)
                events.append(f'{key}-out')

        # Act
        await asyncio.gather(worker('a'), worker('b'))

        # Assert
        assert events == ['a-in', 'b-in', 'a-out', 'b-out']

    @pytest.mark.asyncio
    async def test_released_on_error(self):
        # Arrange
        arena = LockArena()

        # Act
        with pytest.raises(RuntimeError):
            async with arena.hold('doc-a'):
                raise RuntimeError('boom')

        # Assert
        assert not arena.lock_for('doc-a').locked()
