"""
Business logic services of the time ledger.

This module provides the timestamp codec, the configuration cache, segment
resolution and provisioning, the timer state machine and the engine that
composes them.
"""

from .errors import (
    LedgerError,
    TimerAlreadyRunningError,
    NoActiveTimerError,
    ConfigNotFoundError,
    SegmentCreationFailedError,
    MalformedEntryError,
    StoreUnavailableError,
)
from .lock_arena import LockArena
from .config_cache import ConfigCache
from .segment_resolver import SegmentResolver
from .segment_provisioner import SegmentProvisioner
from .timer_state_machine import TimerStateMachine, TimerState, OpenEntry, derive_timer_state
from .ledger_engine import LedgerEngine

__all__ = [
    'LedgerError',
    'TimerAlreadyRunningError',
    'NoActiveTimerError',
    'ConfigNotFoundError',
    'SegmentCreationFailedError',
    'MalformedEntryError',
    'StoreUnavailableError',
    'LockArena',
    'ConfigCache',
    'SegmentResolver',
    'SegmentProvisioner',
    'TimerStateMachine',
    'TimerState',
    'OpenEntry',
    'derive_timer_state',
    'LedgerEngine',
]
