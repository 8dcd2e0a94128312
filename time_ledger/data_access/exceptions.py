"""
Custom exceptions for the document store access layer.
"""


class DocumentStoreError(Exception):
    """Base exception for document store operations."""
    pass


class DocumentNotFoundError(DocumentStoreError):
    """Exception raised when the document itself does not exist."""
    pass


class SegmentNotFoundError(DocumentStoreError):
    """Exception raised when a named segment does not exist in a document."""
    pass


class SegmentAlreadyExistsError(DocumentStoreError):
    """Exception raised when creating a segment whose name is taken."""
    pass


class RetryableError(DocumentStoreError):
    """Exception raised for transient errors that can be retried."""
    pass


class RateLimitExceededError(RetryableError):
    """Exception raised when the store rejects a call for quota reasons."""

    def __init__(self, message: str, retry_after: int = 0):
        """
        Initialize rate limit exceeded error.

        Args:
            message: Error message
            retry_after: Seconds the store asked us to wait (0 if unknown)
        """
        super().__init__(message)
        self.retry_after = retry_after


class CredentialsError(DocumentStoreError):
    """Exception raised when store credentials are missing or unusable."""
    pass
