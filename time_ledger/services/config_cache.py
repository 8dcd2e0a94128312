"""
Per-document configuration cache.

Settings live in each document's Config segment. Snapshots are cached per
document for a TTL and refreshed lazily on the first access past it.
"""

import logging
import time
from typing import Callable, Dict, List

from ..data_access.document_store import DocumentStore
from ..data_access.exceptions import DocumentStoreError, SegmentAlreadyExistsError
from ..models.cache import ConfigCacheEntry
from ..models.segment_layout import (
    CONFIG_RANGE,
    CONFIG_SEGMENT_NAME,
    build_config_requests,
    default_config_snapshot,
)
from .errors import ConfigNotFoundError
from .lock_arena import LockArena

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_TTL_SECONDS = 300


class ConfigCache:
    """
    TTL cache of Config segment snapshots keyed by document ID.

    Attributes:
        store: Document store holding the Config segments
        ttl_seconds: Snapshot lifetime
        clock: Monotonic time source in seconds
    """

    def __init__(
        self,
        store: DocumentStore,
        ttl_seconds: float = DEFAULT_CONFIG_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic
    ):
        """
        Initialize config cache.

        Args:
            store: Document store
            ttl_seconds: Time-to-live for cached snapshots
            clock: Time source, injectable for tests
        """
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")

        self.store = store
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._entries: Dict[str, ConfigCacheEntry] = {}
        self._locks = LockArena('config')

    async def get_config(self, document_id: str) -> Dict[str, str]:
        """
        Return the document's settings.

        A fresh cached snapshot is returned as the same object. Otherwise the
        Config segment is read. If the read fails and the segment is missing,
        it is provisioned and the defaults are returned. If the segment exists,
        the read error propagates and nothing is cached.

        Raises:
            ConfigNotFoundError: If the Config segment exists but is empty
            DocumentStoreError: If Config cannot be read or provisioned
        """
        async with self._locks.hold(document_id):
            entry = self._entries.get(document_id)
            if entry and not entry.is_expired(self.clock()):
                return entry.config

            if entry:
                del self._entries[document_id]
                logger.debug(f"Config cache expired for {document_id}")

            try:
                rows = await self.store.read_range(document_id, CONFIG_SEGMENT_NAME, CONFIG_RANGE)
            except DocumentStoreError as e:
                if await self._provision(document_id):
                    logger.info(f"Config missing for {document_id}, provisioned defaults: {e}")
                    return self._remember(document_id, default_config_snapshot())
                logger.warning(f"Config exists but could not be read for {document_id}: {e}")
                raise

            if not rows:
                raise ConfigNotFoundError()

            return self._remember(document_id, fold_config_rows(rows))

    async def ensure_config_segment(self, document_id: str) -> None:
        """Provision the Config segment if the document lacks one."""
        async with self._locks.hold(document_id):
            await self._provision(document_id)

    def invalidate(self, document_id: str) -> None:
        self._entries.pop(document_id, None)

    def _remember(self, document_id: str, config: Dict[str, str]) -> Dict[str, str]:
        self._entries[document_id] = ConfigCacheEntry(
            config=config,
            cached_at=self.clock(),
            ttl_seconds=self.ttl_seconds
        )
        return config

    async def _provision(self, document_id: str) -> bool:
        """
        Create and seed the Config segment unless it already exists.

        Caller must hold the document's config lock. Losing a creation race
        to another process surfaces as SegmentAlreadyExistsError and is ignored.

        Returns:
            True if this call created the segment
        """
        segments = await self.store.list_segments(document_id)
        if CONFIG_SEGMENT_NAME in segments:
            return False

        try:
            handle = await self.store.create_segment(document_id, CONFIG_SEGMENT_NAME)
        except SegmentAlreadyExistsError:
            logger.info(f"Config segment for {document_id} created concurrently")
            return False

        await self.store.batch_mutate(document_id, build_config_requests(handle.sheet_id))
        logger.info(f"Provisioned Config segment for {document_id}")
        return True


def fold_config_rows(rows: List[List[str]]) -> Dict[str, str]:
    """Fold two-column rows into a mapping, skipping incomplete rows."""
    config = {}
    for row in rows:
        if len(row) >= 2 and row[0] and row[1]:
            config[row[0]] = row[1]
    return config
