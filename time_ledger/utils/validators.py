"""
Input validation utilities for timer request bodies.
"""
import re
from datetime import datetime, timezone
from typing import Any, Optional

from .error_codes import ErrorCode

# Google spreadsheet IDs: URL-safe base64 alphabet
DOCUMENT_ID_PATTERN = re.compile(r'^[A-Za-z0-9_-]{10,128}$')
MAX_DESCRIPTION_LENGTH = 500


class ValidationError(Exception):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_INVALID_PARAMETER
    ):
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            error_code: Error code reported to the caller
        """
        super().__init__(message)
        self.field = field
        self.message = message
        self.error_code = error_code


def validate_document_id(document_id: Any, field_name: str = 'sheetId') -> str:
    """
    Validate a document (spreadsheet) ID.

    Raises:
        ValidationError: If the ID is missing or malformed
    """
    if not document_id:
        raise ValidationError(
            f'{field_name} is required',
            field=field_name,
            error_code=ErrorCode.VALIDATION_MISSING_PARAMETER
        )

    if not isinstance(document_id, str) or not DOCUMENT_ID_PATTERN.match(document_id):
        raise ValidationError(
            f'{field_name} must be a spreadsheet ID (10-128 characters of A-Z, a-z, 0-9, "-" or "_")',
            field=field_name
        )
    return document_id


def validate_description(description: Any) -> Optional[str]:
    """
    Validate the optional entry description.

    Returns:
        Stripped description, or None when absent or blank
    """
    if description is None:
        return None

    if not isinstance(description, str):
        raise ValidationError('description must be a string', field='description')

    description = description.strip()
    if len(description) > MAX_DESCRIPTION_LENGTH:
        raise ValidationError(
            f'description must be at most {MAX_DESCRIPTION_LENGTH} characters',
            field='description'
        )
    # A leading '=' would be stored as a formula
    if description.startswith(('=', '+', '@')):
        description = "'" + description
    return description or None


def parse_end_time(value: Any) -> Optional[datetime]:
    """
    Parse the optional ISO-8601 endTime of a stop request.

    Naive values are taken to be UTC.
    """
    if value is None:
        return None

    if not isinstance(value, str):
        raise ValidationError('endTime must be an ISO-8601 string', field='endTime')

    try:
        parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        raise ValidationError(
            'endTime must be an ISO-8601 timestamp (e.g., "2024-01-15T17:30:00Z")',
            field='endTime'
        )

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
