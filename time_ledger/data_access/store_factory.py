"""
Construction of the configured document store backend.
"""
import logging

from ..config.settings import BACKEND_MEMORY, LedgerSettings
from .credentials import (
    ServiceAccountCredentials,
    decode_service_account_key,
    fetch_service_account_secret,
)
from .document_store import DocumentStore
from .exceptions import CredentialsError
from .memory_store import InMemoryDocumentStore
from .sheets_client import DEFAULT_HEALTH_CHECK_DOCUMENT_ID, GoogleSheetsClient

logger = logging.getLogger(__name__)


def load_credentials(settings: LedgerSettings, secrets_client=None) -> ServiceAccountCredentials:
    """
    Load service account credentials.

    GOOGLE_SERVICE_ACCOUNT_KEY wins over GOOGLE_SERVICE_ACCOUNT_SECRET_ID.

    Raises:
        CredentialsError: If neither source is configured or usable
    """
    if settings.service_account_key:
        info = decode_service_account_key(settings.service_account_key)
    elif settings.service_account_secret_id:
        info = fetch_service_account_secret(
            settings.service_account_secret_id,
            settings.region,
            secrets_client=secrets_client
        )
    else:
        raise CredentialsError(
            'GOOGLE_SERVICE_ACCOUNT_KEY or GOOGLE_SERVICE_ACCOUNT_SECRET_ID must be set.'
        )

    return ServiceAccountCredentials(info, timeout_seconds=settings.store_timeout_seconds)


def build_document_store(settings: LedgerSettings, secrets_client=None) -> DocumentStore:
    """Create the document store selected by settings.store_backend."""
    if settings.store_backend == BACKEND_MEMORY:
        logger.warning('Using in-memory document store; data is lost on restart')
        return InMemoryDocumentStore()

    credentials = load_credentials(settings, secrets_client=secrets_client)
    return GoogleSheetsClient(
        credentials,
        timeout_seconds=settings.store_timeout_seconds,
        max_retries=settings.store_max_retries,
        health_check_document_id=(
            settings.health_check_document_id or DEFAULT_HEALTH_CHECK_DOCUMENT_ID
        )
    )
