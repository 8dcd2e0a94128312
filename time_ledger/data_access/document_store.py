"""
Abstract document store interface consumed by the ledger engine.

A document is a spreadsheet-like container of named segments (worksheets).
Every operation is a coroutine because every real backend is a remote call.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence


@dataclass(frozen=True)
class SegmentHandle:
    """
    Identity of a segment as assigned by the store.

    Attributes:
        sheet_id: Numeric identifier used by structural mutations
        title: Segment name
    """

    sheet_id: int
    title: str


class DocumentStore(ABC):
    """
    Row-level API over an external tabular document store.

    Implementations raise subclasses of DocumentStoreError on failure.
    """

    @abstractmethod
    async def list_segments(self, document_id: str) -> List[str]:
        """
        List segment names in document order.

        Raises:
            DocumentNotFoundError: If the document does not exist
        """

    @abstractmethod
    async def create_segment(self, document_id: str, name: str) -> SegmentHandle:
        """
        Create an empty segment.

        Raises:
            SegmentAlreadyExistsError: If a segment with this name exists
        """

    @abstractmethod
    async def read_range(
        self,
        document_id: str,
        segment_name: str,
        cell_range: str
    ) -> List[List[str]]:
        """
        Read a rectangular range as formatted strings.

        Trailing empty rows and trailing empty cells are omitted, so an empty
        range reads as an empty list.

        Raises:
            SegmentNotFoundError: If the segment does not exist
        """

    @abstractmethod
    async def append_row(
        self,
        document_id: str,
        segment_name: str,
        values: Sequence[Optional[Any]],
        anchor: str = 'A6'
    ) -> None:
        """
        Append a row after the last data row of the table starting at anchor.

        None values leave the target cell untouched.
        """

    @abstractmethod
    async def update_cell(
        self,
        document_id: str,
        segment_name: str,
        cell: str,
        value: Any
    ) -> None:
        """Write a single cell, parsed as if typed by a user."""

    @abstractmethod
    async def batch_mutate(
        self,
        document_id: str,
        requests: List[Dict[str, Any]]
    ) -> None:
        """Apply structural requests (formats, validation, formulas) atomically."""

    @abstractmethod
    async def check_connection(self) -> None:
        """
        Verify the store is reachable.

        Raises:
            DocumentStoreError: If the store cannot be reached
        """
