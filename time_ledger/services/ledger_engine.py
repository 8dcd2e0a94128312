"""
Ledger engine: the public start/stop operations.

Each operation holds the document's lock across the whole
resolve-check-mutate sequence, so two requests against one document can
never both observe an idle timer and both append an open entry.
"""
import time
from datetime import datetime
from typing import Callable, Optional

from ..data_access.document_store import DocumentStore
from ..data_access.exceptions import DocumentStoreError
from ..models.segment_layout import SEGMENT_LAYOUT, SegmentLayout
from ..models.timer_results import StartResult, StopResult
from ..utils.structured_logger import LoggingContext, get_structured_logger
from .config_cache import DEFAULT_CONFIG_TTL_SECONDS, ConfigCache
from .errors import StoreUnavailableError
from .lock_arena import LockArena
from .segment_provisioner import SegmentProvisioner, utc_now
from .segment_resolver import SegmentResolver
from .timer_state_machine import TimerStateMachine


class LedgerEngine:
    """
    Start/stop time tracking on a document store.
    """

    def __init__(
        self,
        store: DocumentStore,
        config_ttl_seconds: float = DEFAULT_CONFIG_TTL_SECONDS,
        clock: Callable[[], datetime] = utc_now,
        monotonic: Callable[[], float] = time.monotonic,
        layout: SegmentLayout = SEGMENT_LAYOUT
    ):
        """
        Initialize the engine and its components.

        Args:
            store: Document store
            config_ttl_seconds: Config cache TTL
            clock: Source of the current UTC instant
            monotonic: Clock driving config cache expiry
            layout: Period segment layout
        """
        self.store = store
        self.config_cache = ConfigCache(store, ttl_seconds=config_ttl_seconds, clock=monotonic)
        self.resolver = SegmentResolver(store, layout)
        self.provisioner = SegmentProvisioner(store, self.config_cache, layout, clock)
        self.timer = TimerStateMachine(
            store,
            self.config_cache,
            self.resolver,
            self.provisioner,
            layout,
            clock
        )
        self.locks = LockArena('document')
        self.logger = get_structured_logger('LedgerEngine')

    async def start_timer(
        self,
        document_id: str,
        description: Optional[str] = None,
        request_id: Optional[str] = None
    ) -> StartResult:
        """
        Start a timer on the document's current period segment.

        Raises:
            TimerAlreadyRunningError: If a timer is already running
            ConfigNotFoundError: If the Config segment is empty
            SegmentCreationFailedError: If a needed segment cannot be created
            StoreUnavailableError: On any other store failure
        """
        logger = self.logger.bind(document_id=document_id, request_id=request_id)

        async with self.locks.hold(document_id):
            async with LoggingContext(logger, 'start_timer'):
                try:
                    result = await self.timer.start(document_id, description)
                except DocumentStoreError as e:
                    logger.error('Store failure while starting timer', operation='start_timer', error=e)
                    raise StoreUnavailableError(f"Failed to start timer: {e}") from e

        logger.log_state_change('timerState', 'idle', 'running')
        logger.info(
            'Timer started',
            operation='start_timer',
            segment=result.segment,
            start=result.start
        )
        return result

    async def stop_timer(
        self,
        document_id: str,
        end_time: Optional[datetime] = None,
        request_id: Optional[str] = None
    ) -> StopResult:
        """
        Stop the running timer of the document.

        Args:
            document_id: Document identifier
            end_time: End instant; defaults to now

        Raises:
            NoActiveTimerError: If no timer is running
            ConfigNotFoundError: If the Config segment is empty
            StoreUnavailableError: On any other store failure
        """
        logger = self.logger.bind(document_id=document_id, request_id=request_id)

        async with self.locks.hold(document_id):
            async with LoggingContext(logger, 'stop_timer'):
                try:
                    result = await self.timer.stop(document_id, end_time)
                except DocumentStoreError as e:
                    logger.error('Store failure while stopping timer', operation='stop_timer', error=e)
                    raise StoreUnavailableError(f"Failed to stop timer: {e}") from e

        logger.log_state_change('timerState', 'running', 'idle')
        logger.info(
            'Timer stopped',
            operation='stop_timer',
            segment=result.segment,
            duration=result.duration
        )
        return result

    async def check_health(self) -> None:
        """
        Raises:
            StoreUnavailableError: If the store is unreachable
        """
        try:
            await self.store.check_connection()
        except DocumentStoreError as e:
            raise StoreUnavailableError(f"Store health check failed: {e}") from e
