"""
In-process document store.

Emulates the parts of spreadsheet behaviour the ledger engine depends on:
formatted string reads with trailing blanks trimmed, append after the last
data row of a table, formulas extended down to appended rows, and None cells
skipped on write. Used for local runs and tests.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .document_store import DocumentStore, SegmentHandle
from .exceptions import (
    DocumentNotFoundError,
    DocumentStoreError,
    SegmentAlreadyExistsError,
    SegmentNotFoundError,
)
from ..utils.a1_notation import parse_cell, parse_range, shift_formula_rows

logger = logging.getLogger(__name__)

# (row, column), both 1-based
Cell = Tuple[int, int]


@dataclass
class _Segment:
    sheet_id: int
    title: str
    cells: Dict[Cell, str] = field(default_factory=dict)
    validations: Dict[Cell, Dict[str, Any]] = field(default_factory=dict)
    formats: List[Dict[str, Any]] = field(default_factory=list)
    dimensions: List[Dict[str, Any]] = field(default_factory=list)

    def value(self, row: int, column: int) -> str:
        return self.cells.get((row, column), '')

    def set_value(self, row: int, column: int, value: Any) -> None:
        text = _to_text(value)
        if text == '':
            self.cells.pop((row, column), None)
        else:
            self.cells[(row, column)] = text


def _to_text(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'TRUE' if value else 'FALSE'
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class InMemoryDocumentStore(DocumentStore):
    """
    Dictionary-backed DocumentStore.

    Every coroutine yields to the event loop once before touching state so
    concurrent callers interleave the way they would against a remote store.
    """

    def __init__(self):
        self._documents: Dict[str, Dict[str, _Segment]] = {}
        self._next_sheet_id = 1
        self.call_log: List[Tuple[str, str]] = []

    def create_document(self, document_id: str) -> None:
        """Register an empty document."""
        self._documents.setdefault(document_id, {})

    def segment_cells(self, document_id: str, segment_name: str) -> Dict[Cell, str]:
        """Raw cell contents of a segment, including formulas."""
        return dict(self._segment(document_id, segment_name).cells)

    def segment_formats(self, document_id: str, segment_name: str) -> List[Dict[str, Any]]:
        """Number format requests applied to a segment."""
        return list(self._segment(document_id, segment_name).formats)

    def _document(self, document_id: str) -> Dict[str, _Segment]:
        try:
            return self._documents[document_id]
        except KeyError:
            raise DocumentNotFoundError(f"Document {document_id} not found")

    def _segment(self, document_id: str, segment_name: str) -> _Segment:
        segments = self._document(document_id)
        try:
            return segments[segment_name]
        except KeyError:
            raise SegmentNotFoundError(
                f"Unable to parse range: segment {segment_name!r} not found"
            )

    def _segment_by_id(self, document_id: str, sheet_id: int) -> _Segment:
        for segment in self._document(document_id).values():
            if segment.sheet_id == sheet_id:
                return segment
        raise DocumentStoreError(f"No segment with sheetId {sheet_id}")

    async def _enter(self, operation: str, document_id: str) -> None:
        await asyncio.sleep(0)
        self.call_log.append((operation, document_id))

    async def list_segments(self, document_id: str) -> List[str]:
        await self._enter('list_segments', document_id)
        return list(self._document(document_id))

    async def create_segment(self, document_id: str, name: str) -> SegmentHandle:
        await self._enter('create_segment', document_id)
        segments = self._document(document_id)
        if name in segments:
            raise SegmentAlreadyExistsError(
                f'A sheet with the name "{name}" already exists.'
            )
        segment = _Segment(sheet_id=self._next_sheet_id, title=name)
        self._next_sheet_id += 1
        segments[name] = segment
        logger.debug(f"Created segment {name} ({segment.sheet_id}) in {document_id}")
        return SegmentHandle(sheet_id=segment.sheet_id, title=name)

    async def read_range(
        self,
        document_id: str,
        segment_name: str,
        cell_range: str
    ) -> List[List[str]]:
        await self._enter('read_range', document_id)
        segment = self._segment(document_id, segment_name)
        start_col, start_row, end_col, end_row = parse_range(cell_range)

        if end_row is None:
            used_rows = [
                row for (row, col) in segment.cells
                if start_col <= col <= end_col and row >= start_row
            ]
            end_row = max(used_rows, default=start_row - 1)

        rows = []
        for row in range(start_row, end_row + 1):
            values = [segment.value(row, col) for col in range(start_col, end_col + 1)]
            while values and values[-1] == '':
                values.pop()
            rows.append(values)

        while rows and not rows[-1]:
            rows.pop()
        return rows

    async def append_row(
        self,
        document_id: str,
        segment_name: str,
        values: Sequence[Optional[Any]],
        anchor: str = 'A6'
    ) -> None:
        await self._enter('append_row', document_id)
        segment = self._segment(document_id, segment_name)
        anchor_col, anchor_row = parse_cell(anchor)
        anchor_row = anchor_row or 1

        # The table is keyed by its first column: append after its last value.
        key_rows = [
            row for (row, col) in segment.cells
            if col == anchor_col and row >= anchor_row
        ]
        target = max(key_rows) + 1 if key_rows else anchor_row

        for offset, value in enumerate(values):
            column = anchor_col + offset
            if value is not None:
                segment.set_value(target, column, value)
                continue
            if (target, column) in segment.cells:
                continue
            above = segment.cells.get((target - 1, column), '')
            if target > anchor_row and above.startswith('='):
                segment.cells[(target, column)] = shift_formula_rows(above, 1)

    async def update_cell(
        self,
        document_id: str,
        segment_name: str,
        cell: str,
        value: Any
    ) -> None:
        await self._enter('update_cell', document_id)
        segment = self._segment(document_id, segment_name)
        column, row = parse_cell(cell)
        if row is None:
            raise DocumentStoreError(f"Invalid cell reference: {cell!r}")
        segment.set_value(row, column, value)

    async def batch_mutate(
        self,
        document_id: str,
        requests: List[Dict[str, Any]]
    ) -> None:
        await self._enter('batch_mutate', document_id)
        for request in requests:
            if 'updateCells' in request:
                self._apply_update_cells(document_id, request['updateCells'])
            elif 'repeatCell' in request:
                body = request['repeatCell']
                segment = self._segment_by_id(document_id, body['range']['sheetId'])
                segment.formats.append(body)
            elif 'updateDimensionProperties' in request:
                body = request['updateDimensionProperties']
                segment = self._segment_by_id(document_id, body['range']['sheetId'])
                segment.dimensions.append(body)
            else:
                raise DocumentStoreError(f"Unsupported request: {sorted(request)}")

    def _apply_update_cells(self, document_id: str, body: Dict[str, Any]) -> None:
        start = body['start']
        segment = self._segment_by_id(document_id, start['sheetId'])
        fields = body.get('fields', '')

        for row_offset, row in enumerate(body.get('rows', [])):
            for col_offset, cell in enumerate(row.get('values', [])):
                position = (
                    start.get('rowIndex', 0) + row_offset + 1,
                    start.get('columnIndex', 0) + col_offset + 1,
                )
                if 'dataValidation' in fields and 'dataValidation' in cell:
                    segment.validations[position] = cell['dataValidation']
                if 'userEnteredValue' in fields and 'userEnteredValue' in cell:
                    entered = cell['userEnteredValue']
                    value = next(iter(entered.values()), None)
                    segment.set_value(position[0], position[1], value)

    async def check_connection(self) -> None:
        await asyncio.sleep(0)
