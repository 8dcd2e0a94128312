"""
Unit tests for InMemoryDocumentStore.
"""
import pytest

from time_ledger.data_access.exceptions import (
    DocumentNotFoundError,
    DocumentStoreError,
    SegmentAlreadyExistsError,
    SegmentNotFoundError,
)
from time_ledger.data_access.memory_store import InMemoryDocumentStore

DOC = 'doc-1234567890'


@pytest.fixture
def memory_store():
    store = InMemoryDocumentStore()
    store.create_document(DOC)
    return store


class TestSegments:
    """Test suite for segment listing and creation."""

    @pytest.mark.asyncio
    async def test_create_and_list(self, memory_store):
        # Act
        first = await memory_store.create_segment(DOC, 'Config')
        second = await memory_store.create_segment(DOC, '2024-01-15')

        # Assert
        assert first.sheet_id != second.sheet_id
        assert second.title == '2024-01-15'
        assert await memory_store.list_segments(DOC) == ['Config', '2024-01-15']

    @pytest.mark.asyncio
    async def test_duplicate_name(self, memory_store):
        # Arrange
        await memory_store.create_segment(DOC, 'Config')

        # Act & Assert
        with pytest.raises(SegmentAlreadyExistsError):
            await memory_store.create_segment(DOC, 'Config')

    @pytest.mark.asyncio
    async def test_unknown_document(self, memory_store):
        with pytest.raises(DocumentNotFoundError):
            await memory_store.list_segments('missing-document')

    @pytest.mark.asyncio
    async def test_unknown_segment(self, memory_store):
        with pytest.raises(SegmentNotFoundError):
            await memory_store.read_range(DOC, 'Config', 'A1:B10')


class TestReadRange:
    """Test suite for read_range."""

    @pytest.mark.asyncio
    async def test_trailing_blanks_trimmed(self, memory_store):
        # Arrange
        await memory_store.create_segment(DOC, 'Sheet')
        await memory_store.update_cell(DOC, 'Sheet', 'A1', 'x')
        await memory_store.update_cell(DOC, 'Sheet', 'A3', 'y')

        # Act
        rows = await memory_store.read_range(DOC, 'Sheet', 'A1:C10')

        # Assert
        assert rows == [['x'], [], ['y']]

    @pytest.mark.asyncio
    async def test_open_ended_range_stops_at_last_used_row(self, memory_store):
        # Arrange
        await memory_store.create_segment(DOC, 'Sheet')
        await memory_store.update_cell(DOC, 'Sheet', 'A2', 'above')
        await memory_store.update_cell(DOC, 'Sheet', 'B7', 'b7')

        # Act
        rows = await memory_store.read_range(DOC, 'Sheet', 'A6:C')

        # Assert
        assert rows == [[], ['', 'b7']]

    @pytest.mark.asyncio
    async def test_values_read_back_as_text(self, memory_store):
        # Arrange
        await memory_store.create_segment(DOC, 'Sheet')
        await memory_store.update_cell(DOC, 'Sheet', 'A1', True)
        await memory_store.update_cell(DOC, 'Sheet', 'B1', 100.0)

        # Act & Assert
        assert await memory_store.read_range(DOC, 'Sheet', 'A1:B1') == [['TRUE', '100']]


class TestAppendRow:
    """Test suite for append_row."""

    @pytest.mark.asyncio
    async def test_appends_after_last_key_row(self, memory_store):
        # Arrange
        await memory_store.create_segment(DOC, 'Sheet')
        await memory_store.update_cell(DOC, 'Sheet', 'A5', 'Date')

        # Act
        await memory_store.append_row(DOC, 'Sheet', ['d1', 's1'])
        await memory_store.append_row(DOC, 'Sheet', ['d2', 's2'])

        # Assert
        assert await memory_store.read_range(DOC, 'Sheet', 'A6:B') == [['d1', 's1'], ['d2', 's2']]

    @pytest.mark.asyncio
    async def test_none_cells_keep_and_extend_formulas(self, memory_store):
        # Arrange
        await memory_store.create_segment(DOC, 'Sheet')
        await memory_store.update_cell(DOC, 'Sheet', 'C6', '=A6*2')

        # Act
        await memory_store.append_row(DOC, 'Sheet', ['a', 'b', None])
        await memory_store.append_row(DOC, 'Sheet', ['c', 'd', None])

        # Assert
        cells = memory_store.segment_cells(DOC, 'Sheet')
        assert cells[(6, 3)] == '=A6*2'
        assert cells[(7, 3)] == '=A7*2'


class TestBatchMutate:
    """Test suite for batch_mutate."""

    @pytest.mark.asyncio
    async def test_requests_apply_to_their_own_sheet(self, memory_store):
        # Arrange
        first = await memory_store.create_segment(DOC, 'One')
        await memory_store.create_segment(DOC, 'Two')

        # Act
        await memory_store.batch_mutate(DOC, [
            {
                'updateCells': {
                    'rows': [{'values': [{'userEnteredValue': {'stringValue': 'hello'}}]}],
                    'fields': 'userEnteredValue',
                    'start': {'sheetId': first.sheet_id, 'rowIndex': 1, 'columnIndex': 1},
                },
            },
            {
                'repeatCell': {
                    'range': {'sheetId': first.sheet_id, 'startColumnIndex': 0, 'endColumnIndex': 1},
                    'cell': {'userEnteredFormat': {'numberFormat': {'type': 'DATE'}}},
                    'fields': 'userEnteredFormat.numberFormat',
                },
            },
        ])

        # Assert
        assert memory_store.segment_cells(DOC, 'One') == {(2, 2): 'hello'}
        assert memory_store.segment_cells(DOC, 'Two') == {}
        assert len(memory_store.segment_formats(DOC, 'One')) == 1
        assert memory_store.segment_formats(DOC, 'Two') == []

    @pytest.mark.asyncio
    async def test_unsupported_request(self, memory_store):
        with pytest.raises(DocumentStoreError):
            await memory_store.batch_mutate(DOC, [{'deleteSheet': {'sheetId': 1}}])

    @pytest.mark.asyncio
    async def test_unknown_sheet_id(self, memory_store):
        with pytest.raises(DocumentStoreError):
            await memory_store.batch_mutate(DOC, [
                {'repeatCell': {'range': {'sheetId': 99}}}
            ])
