"""
Structured JSON logging.

This module provides a structured logger that outputs JSON-formatted
logs with correlation IDs, context, and standardized fields for
CloudWatch Logs Insights queries.
"""

import json
import logging
import os
import time
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Optional


class LogEncoder(json.JSONEncoder):
    """JSON encoder that handles datetimes and enums."""
    def default(self, obj):
        if isinstance(obj, (datetime, date)):
            return obj.isoformat()
        if isinstance(obj, Enum):
            return obj.value
        return super().default(obj)


class StructuredLogger:
    """
    Structured JSON logger.

    Outputs logs in JSON format with:
    - Timestamp (ISO 8601)
    - Log level
    - Correlation IDs (documentId, requestId)
    - Component and operation
    - Message and additional context
    """

    def __init__(
        self,
        component: str,
        document_id: Optional[str] = None,
        request_id: Optional[str] = None
    ):
        """
        Initialize structured logger.

        Args:
            component: Component name (e.g., 'LedgerEngine', 'TimerHandler')
            document_id: Document identifier for correlation
            request_id: Request identifier from Lambda context
        """
        self.component = component
        self.document_id = document_id
        self.request_id = request_id
        self.logger = logging.getLogger(component)

        log_level = os.getenv('LOG_LEVEL', 'INFO')
        self.logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    def bind(self, document_id: Optional[str] = None, request_id: Optional[str] = None) -> 'StructuredLogger':
        """Return a logger for the same component with extra correlation IDs."""
        return StructuredLogger(
            component=self.component,
            document_id=document_id or self.document_id,
            request_id=request_id or self.request_id
        )

    def _format_log(
        self,
        level: str,
        message: str,
        operation: Optional[str] = None,
        **kwargs
    ) -> str:
        """
        Format log entry as JSON.

        Args:
            level: Log level (DEBUG, INFO, WARNING, ERROR)
            message: Log message
            operation: Operation being performed
            **kwargs: Additional context fields

        Returns:
            JSON-formatted log string
        """
        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': level,
            'component': self.component,
            'message': message
        }

        if self.document_id:
            log_entry['documentId'] = self.document_id
        if self.request_id:
            log_entry['requestId'] = self.request_id

        if operation:
            log_entry['operation'] = operation

        if kwargs:
            log_entry['context'] = kwargs

        return json.dumps(log_entry, cls=LogEncoder)

    def debug(self, message: str, operation: Optional[str] = None, **kwargs) -> None:
        self.logger.debug(self._format_log('DEBUG', message, operation, **kwargs))

    def info(self, message: str, operation: Optional[str] = None, **kwargs) -> None:
        self.logger.info(self._format_log('INFO', message, operation, **kwargs))

    def warning(self, message: str, operation: Optional[str] = None, **kwargs) -> None:
        self.logger.warning(self._format_log('WARNING', message, operation, **kwargs))

    def error(
        self,
        message: str,
        operation: Optional[str] = None,
        error: Optional[Exception] = None,
        **kwargs
    ) -> None:
        """
        Log error message.

        Args:
            message: Log message
            operation: Operation being performed
            error: Exception object if available
            **kwargs: Additional context
        """
        if error:
            kwargs['error_type'] = type(error).__name__
            kwargs['error_message'] = str(error)

        self.logger.error(self._format_log('ERROR', message, operation, **kwargs))

    def log_state_change(self, state_type: str, old_value: Any, new_value: Any) -> None:
        """
        Log state change at INFO level.

        Args:
            state_type: Type of state (timerState, segment, ...)
            old_value: Previous value
            new_value: New value
        """
        self.info(
            f'State change: {state_type}',
            operation='state_change',
            state_type=state_type,
            old_value=str(old_value),
            new_value=str(new_value)
        )


class LoggingContext:
    """
    Async context manager for logging operation duration.

    Automatically logs operation start, end, and duration.
    """

    def __init__(self, logger: StructuredLogger, operation: str, **kwargs):
        """
        Initialize logging context.

        Args:
            logger: StructuredLogger instance
            operation: Operation name
            **kwargs: Additional context
        """
        self.logger = logger
        self.operation = operation
        self.context = kwargs
        self.start_time: Optional[float] = None

    async def __aenter__(self):
        """Log operation start."""
        self.start_time = time.perf_counter()
        self.logger.debug(
            f'Starting operation: {self.operation}',
            operation=self.operation,
            **self.context
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Log operation end and duration."""
        duration_ms = (time.perf_counter() - self.start_time) * 1000

        if exc_type is not None:
            self.logger.warning(
                f'Operation failed: {self.operation}',
                operation=self.operation,
                error_type=exc_type.__name__,
                error_message=str(exc_val),
                duration_ms=duration_ms,
                **self.context
            )
        else:
            self.logger.debug(
                f'Completed operation: {self.operation}',
                operation=self.operation,
                duration_ms=duration_ms,
                **self.context
            )


def get_structured_logger(
    component: str,
    document_id: Optional[str] = None,
    request_id: Optional[str] = None
) -> StructuredLogger:
    """
    Factory function for creating StructuredLogger instances.

    Example:
        >>> logger = get_structured_logger('LedgerEngine', document_id='1AbC')
        >>> logger.info('Timer started')
    """
    return StructuredLogger(
        component=component,
        document_id=document_id,
        request_id=request_id
    )


def configure_lambda_logging():
    """
    Configure logging for Lambda environment.

    Sets up root logger to output to stdout with appropriate format.
    Should be called at module level in Lambda handlers.
    """
    log_level = os.getenv('LOG_LEVEL', 'INFO').upper()

    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format='%(message)s',
        force=True
    )

    if log_level != 'DEBUG':
        logging.getLogger('boto3').setLevel(logging.WARNING)
        logging.getLogger('botocore').setLevel(logging.WARNING)
        logging.getLogger('urllib3').setLevel(logging.WARNING)
