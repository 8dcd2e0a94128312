"""
Unit tests for period segment creation.
"""
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from time_ledger.data_access.exceptions import DocumentStoreError
from time_ledger.services.config_cache import ConfigCache
from time_ledger.services.errors import SegmentCreationFailedError
from time_ledger.services.segment_provisioner import SegmentProvisioner


@pytest.fixture
def provisioner(store, clock, monotonic):
    return SegmentProvisioner(store, ConfigCache(store, clock=monotonic), clock=clock)


class TestCreatePeriodSegment:
    """Test suite for SegmentProvisioner.create_period_segment."""

    @pytest.mark.asyncio
    async def test_named_after_today(self, provisioner, store, document_id):
        # Act
        name = await provisioner.create_period_segment(document_id)

        # Assert
        assert name == '2024-01-15'
        assert '2024-01-15' in await store.list_segments(document_id)

    @pytest.mark.asyncio
    async def test_date_follows_timezone(self, provisioner, clock, document_id):
        # Arrange
        clock.now = datetime(2024, 1, 15, 23, 30, 0, tzinfo=timezone.utc)

        # Act
        name = await provisioner.create_period_segment(document_id, 'Asia/Tokyo')

        # Assert
        assert name == '2024-01-16'

    @pytest.mark.asyncio
    async def test_config_segment_created_first(self, provisioner, store, document_id):
        # Act
        await provisioner.create_period_segment(document_id)

        # Assert
        assert await store.list_segments(document_id) == ['Config', '2024-01-15']

    @pytest.mark.asyncio
    async def test_layout_applied_to_new_segment_only(self, provisioner, store, clock, document_id):
        # Arrange
        await provisioner.create_period_segment(document_id)
        before = store.segment_cells(document_id, '2024-01-15')
        clock.advance(days=1)

        # Act
        await provisioner.create_period_segment(document_id)

        # Assert
        assert store.segment_cells(document_id, '2024-01-15') == before
        assert store.segment_cells(document_id, '2024-01-16')[(5, 1)] == 'Date'
        assert len(store.segment_formats(document_id, '2024-01-15')) == 6
        assert len(store.segment_formats(document_id, '2024-01-16')) == 6

    @pytest.mark.asyncio
    async def test_name_collision_fails(self, provisioner, document_id):
        # Arrange
        await provisioner.create_period_segment(document_id)

        # Act & Assert
        with pytest.raises(SegmentCreationFailedError) as exc_info:
            await provisioner.create_period_segment(document_id)

        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_store_rejection_fails(self, provisioner, store, document_id):
        # Arrange
        await provisioner.config_cache.ensure_config_segment(document_id)
        store.create_segment = AsyncMock(side_effect=DocumentStoreError('permission denied'))

        # Act & Assert
        with pytest.raises(SegmentCreationFailedError) as exc_info:
            await provisioner.create_period_segment(document_id)

        assert 'permission denied' in exc_info.value.message
