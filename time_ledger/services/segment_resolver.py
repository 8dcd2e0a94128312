"""
Resolution of a document's current period segment.
"""
import logging
from typing import List, Optional

from ..data_access.document_store import DocumentStore
from ..models.segment_layout import (
    CLOSED_SENTINEL,
    SEGMENT_LAYOUT,
    SegmentLayout,
    is_period_segment_name,
)

logger = logging.getLogger(__name__)


def candidate_segments(names: List[str]) -> List[str]:
    """
    Period segment names, newest first.

    YYYY-MM-DD names sort lexicographically in date order, so a reverse
    string sort is a reverse chronological sort.
    """
    return sorted((name for name in names if is_period_segment_name(name)), reverse=True)


class SegmentResolver:
    """Finds the newest period segment that has not been closed."""

    def __init__(self, store: DocumentStore, layout: SegmentLayout = SEGMENT_LAYOUT):
        self.store = store
        self.layout = layout

    async def get_current_segment(self, document_id: str) -> Optional[str]:
        """
        Name of the current period segment, or None if every one is closed.
        """
        names = await self.store.list_segments(document_id)

        for name in candidate_segments(names):
            flag = await self.store.read_range(document_id, name, self.layout.closed_flag_cell)
            if not flag or not flag[0] or flag[0][0] != CLOSED_SENTINEL:
                return name
            logger.debug(f"Skipping closed segment {name} in {document_id}")

        return None
