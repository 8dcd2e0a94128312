"""
Timer state derived from the rows of the current period segment.

Nothing records whether a timer runs. The state is recomputed from the last
entry row on every call: Start set and End empty means running. An open row
anywhere but last is ignored; entries are appended and closed
top to bottom.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional, Tuple

from ..data_access.document_store import DocumentStore
from ..models.segment_layout import SEGMENT_LAYOUT, SegmentLayout, TIMEZONE_KEY
from ..models.timer_results import StartResult, StopResult
from .config_cache import ConfigCache
from .errors import MalformedEntryError, NoActiveTimerError, TimerAlreadyRunningError
from .segment_provisioner import SegmentProvisioner, utc_now
from .segment_resolver import SegmentResolver
from .timestamp_codec import (
    TimestampFormatError,
    apply_timezone,
    calendar_date,
    duration_between,
    format_instant,
)

logger = logging.getLogger(__name__)


class TimerState(str, Enum):
    IDLE = 'idle'
    RUNNING = 'running'


@dataclass(frozen=True)
class OpenEntry:
    """
    The entry a running timer writes into.

    Attributes:
        row_number: 1-based segment row
        date: Date cell as stored
        start: Start cell as stored
    """

    row_number: int
    date: str
    start: str


def _cell(row: List[str], column: int) -> str:
    return row[column - 1] if len(row) >= column else ''


def derive_timer_state(
    rows: List[List[str]],
    layout: SegmentLayout = SEGMENT_LAYOUT
) -> Tuple[TimerState, Optional[OpenEntry]]:
    """
    Derive the timer state from the entry rows of a segment.

    Args:
        rows: Values of the layout's entry range, first row at data_start_row
        layout: Segment layout

    Returns:
        (state, open entry or None)
    """
    if not rows or not rows[-1]:
        return TimerState.IDLE, None

    last = rows[-1]
    start = _cell(last, layout.start_column)
    end = _cell(last, layout.end_column)
    if not start or end:
        return TimerState.IDLE, None

    entry = OpenEntry(
        row_number=layout.data_start_row + len(rows) - 1,
        date=_cell(last, layout.date_column),
        start=start,
    )
    return TimerState.RUNNING, entry


class TimerStateMachine:
    """
    Start and stop transitions over a document's current period segment.

    Callers must serialize transitions per document; see LedgerEngine.
    """

    def __init__(
        self,
        store: DocumentStore,
        config_cache: ConfigCache,
        resolver: SegmentResolver,
        provisioner: SegmentProvisioner,
        layout: SegmentLayout = SEGMENT_LAYOUT,
        clock: Callable[[], datetime] = utc_now
    ):
        self.store = store
        self.config_cache = config_cache
        self.resolver = resolver
        self.provisioner = provisioner
        self.layout = layout
        self.clock = clock

    async def current_state(
        self,
        document_id: str,
        segment: Optional[str]
    ) -> Tuple[TimerState, Optional[OpenEntry]]:
        if segment is None:
            return TimerState.IDLE, None
        rows = await self.store.read_range(document_id, segment, self.layout.entry_range)
        return derive_timer_state(rows, self.layout)

    async def _timezone(self, document_id: str) -> str:
        config = await self.config_cache.get_config(document_id)
        return config.get(TIMEZONE_KEY) or 'UTC'

    async def start(self, document_id: str, description: Optional[str] = None) -> StartResult:
        """
        Idle -> Running: append an open entry to the current segment.

        Raises:
            TimerAlreadyRunningError: If the last entry is still open
        """
        timezone_name = await self._timezone(document_id)

        segment = await self.resolver.get_current_segment(document_id)
        if segment is None:
            segment = await self.provisioner.create_period_segment(document_id, timezone_name)

        state, _ = await self.current_state(document_id, segment)
        if state is TimerState.RUNNING:
            raise TimerAlreadyRunningError()

        now = apply_timezone(self.clock(), timezone_name)
        date = calendar_date(now)
        start = format_instant(now)

        await self.store.append_row(
            document_id,
            segment,
            self.layout.entry_row(date, start, description),
            anchor=self.layout.append_anchor
        )

        logger.info(f"Timer started in {document_id}/{segment} at {date} {start}")
        return StartResult(segment=segment, date=date, start=start, description=description)

    async def stop(self, document_id: str, end_instant: Optional[datetime] = None) -> StopResult:
        """
        Running -> Idle: write End into the open entry.

        Raises:
            NoActiveTimerError: If there is no current segment or no open entry
            MalformedEntryError: If the stored Start cannot be parsed
        """
        timezone_name = await self._timezone(document_id)

        segment = await self.resolver.get_current_segment(document_id)
        if segment is None:
            raise NoActiveTimerError()

        state, entry = await self.current_state(document_id, segment)
        if state is TimerState.IDLE:
            raise NoActiveTimerError()

        end = apply_timezone(end_instant or self.clock(), timezone_name)
        end_time = format_instant(end)

        try:
            duration = duration_between(entry.start, end_time)
        except TimestampFormatError as e:
            raise MalformedEntryError(
                f"Row {entry.row_number} of {segment} has an unreadable start time"
            ) from e

        await self.store.update_cell(
            document_id,
            segment,
            self.layout.end_cell(entry.row_number),
            end_time
        )

        logger.info(
            f"Timer stopped in {document_id}/{segment} row {entry.row_number} "
            f"after {duration}"
        )
        return StopResult(
            segment=segment,
            end=end,
            end_time=end_time,
            duration=str(duration),
            row_number=entry.row_number,
        )
