"""
Errors raised by the ledger engine.

TimerAlreadyRunningError and NoActiveTimerError are expected outcomes of
normal use; the rest signal that the document or the store is unhealthy.
"""
from ..utils.error_codes import ErrorCode


class LedgerError(Exception):
    """Base exception for ledger operations."""

    error_code = ErrorCode.INTERNAL_SERVER_ERROR
    status_code = 500
    default_message = 'Ledger operation failed.'

    def __init__(self, message: str = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class TimerAlreadyRunningError(LedgerError):
    """A start was attempted while an entry is open."""

    error_code = ErrorCode.TIMER_ALREADY_RUNNING
    status_code = 409
    default_message = 'A timer is already running.'


class NoActiveTimerError(LedgerError):
    """A stop was attempted with no open entry."""

    error_code = ErrorCode.NO_ACTIVE_TIMER
    status_code = 404
    default_message = 'No active timer found to stop.'


class ConfigNotFoundError(LedgerError):
    """The Config segment exists but holds no settings."""

    error_code = ErrorCode.CONFIG_NOT_FOUND
    status_code = 500
    default_message = 'Config sheet not found or is empty.'


class SegmentCreationFailedError(LedgerError):
    """The store rejected creation of a segment."""

    error_code = ErrorCode.SEGMENT_CREATION_FAILED
    status_code = 500
    default_message = 'Failed to create new sheet.'


class MalformedEntryError(LedgerError):
    """A stored entry cannot be interpreted."""

    error_code = ErrorCode.MALFORMED_ENTRY
    status_code = 500
    default_message = 'Stored time entry is malformed.'


class StoreUnavailableError(LedgerError):
    """The document store failed underneath an operation."""

    error_code = ErrorCode.STORE_UNAVAILABLE
    status_code = 503
    default_message = 'Document store is unavailable.'
