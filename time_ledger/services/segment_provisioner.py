"""
Creation of new period segments.
"""
import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from ..data_access.document_store import DocumentStore
from ..data_access.exceptions import DocumentStoreError
from ..models.segment_layout import SEGMENT_LAYOUT, SegmentLayout
from .config_cache import ConfigCache
from .errors import SegmentCreationFailedError
from .timestamp_codec import apply_timezone, calendar_date

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SegmentProvisioner:
    """
    Creates a period segment named after today's date and lays it out.
    """

    def __init__(
        self,
        store: DocumentStore,
        config_cache: ConfigCache,
        layout: SegmentLayout = SEGMENT_LAYOUT,
        clock: Callable[[], datetime] = utc_now
    ):
        """
        Initialize provisioner.

        Args:
            store: Document store
            config_cache: Used to make sure the Config segment exists first
            layout: Period segment layout
            clock: Source of the current UTC instant
        """
        self.store = store
        self.config_cache = config_cache
        self.layout = layout
        self.clock = clock

    async def create_period_segment(
        self,
        document_id: str,
        timezone_name: Optional[str] = None
    ) -> str:
        """
        Create and lay out a new period segment.

        Args:
            document_id: Document to extend
            timezone_name: Timezone deciding which date names the segment

        Returns:
            Name of the new segment

        Raises:
            SegmentCreationFailedError: If the store refuses to create it
        """
        name = calendar_date(apply_timezone(self.clock(), timezone_name))

        # Billable formulas reference Config!$B$1
        await self.config_cache.ensure_config_segment(document_id)

        try:
            handle = await self.store.create_segment(document_id, name)
        except DocumentStoreError as e:
            logger.error(f"Failed to create segment {name} in {document_id}: {e}")
            raise SegmentCreationFailedError(f"Failed to create sheet {name}: {e}") from e

        await self.store.batch_mutate(document_id, self.layout.build_requests(handle.sheet_id))

        logger.info(
            f"Created period segment {name} in {document_id} "
            f"(layout v{self.layout.version})"
        )
        return name
