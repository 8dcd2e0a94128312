"""
Utility functions and helpers.
"""

from .error_codes import ErrorCode
from .response_builder import success_response, error_response
from .structured_logger import (
    StructuredLogger,
    LoggingContext,
    get_structured_logger,
    configure_lambda_logging,
)
from .validators import (
    ValidationError,
    validate_document_id,
    validate_description,
    parse_end_time,
)

__all__ = [
    'ErrorCode',
    'success_response',
    'error_response',
    'StructuredLogger',
    'LoggingContext',
    'get_structured_logger',
    'configure_lambda_logging',
    'ValidationError',
    'validate_document_id',
    'validate_description',
    'parse_end_time',
]
