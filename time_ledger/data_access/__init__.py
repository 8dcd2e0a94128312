"""
Data access layer for the tabular document store.
"""
from .document_store import DocumentStore, SegmentHandle
from .memory_store import InMemoryDocumentStore
from .sheets_client import GoogleSheetsClient
from .credentials import (
    ServiceAccountCredentials,
    decode_service_account_key,
    fetch_service_account_secret,
)
from .store_factory import build_document_store, load_credentials
from .exceptions import (
    DocumentStoreError,
    DocumentNotFoundError,
    SegmentNotFoundError,
    SegmentAlreadyExistsError,
    RetryableError,
    RateLimitExceededError,
    CredentialsError,
)

__all__ = [
    'DocumentStore',
    'SegmentHandle',
    'InMemoryDocumentStore',
    'GoogleSheetsClient',
    'ServiceAccountCredentials',
    'decode_service_account_key',
    'fetch_service_account_secret',
    'build_document_store',
    'load_credentials',
    'DocumentStoreError',
    'DocumentNotFoundError',
    'SegmentNotFoundError',
    'SegmentAlreadyExistsError',
    'RetryableError',
    'RateLimitExceededError',
    'CredentialsError',
]
