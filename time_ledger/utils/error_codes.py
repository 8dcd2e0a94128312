"""
Standardized error codes returned by the timer API.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """
    Enumeration of all error codes used in the system.

    Error codes are organized by category:
    - Timer state (TIMER_*, NO_ACTIVE_TIMER)
    - Document configuration and layout (CONFIG_*, SEGMENT_*, MALFORMED_*)
    - Validation (VALIDATION_*)
    - Internal Errors
    """

    # Timer state
    TIMER_ALREADY_RUNNING = 'TIMER_ALREADY_RUNNING'
    NO_ACTIVE_TIMER = 'NO_ACTIVE_TIMER'

    # Document configuration and layout
    CONFIG_NOT_FOUND = 'CONFIG_NOT_FOUND'
    SEGMENT_CREATION_FAILED = 'SEGMENT_CREATION_FAILED'
    MALFORMED_ENTRY = 'MALFORMED_ENTRY'

    # Store
    STORE_UNAVAILABLE = 'STORE_UNAVAILABLE'

    # Validation Errors
    VALIDATION_MISSING_PARAMETER = 'VALIDATION_MISSING_PARAMETER'
    VALIDATION_INVALID_PARAMETER = 'VALIDATION_INVALID_PARAMETER'
    VALIDATION_INVALID_MESSAGE_FORMAT = 'VALIDATION_INVALID_MESSAGE_FORMAT'

    # Routing and internal errors
    NOT_FOUND = 'NOT_FOUND'
    INTERNAL_SERVER_ERROR = 'INTERNAL_SERVER_ERROR'
