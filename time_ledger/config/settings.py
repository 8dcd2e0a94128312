"""
Runtime settings loaded from environment variables.

Per-document settings (hourly rate, timezone) live in each document's
Config segment; this module covers process-level settings only.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

BACKEND_SHEETS = 'sheets'
BACKEND_MEMORY = 'memory'
SUPPORTED_BACKENDS = (BACKEND_SHEETS, BACKEND_MEMORY)


def _env_int(environ: Mapping[str, str], key: str, default: int) -> int:
    value = environ.get(key)
    if value in (None, ''):
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {value!r}")


@dataclass
class LedgerSettings:
    """
    Process configuration.

    Attributes:
        store_backend: 'sheets' for Google Sheets, 'memory' for local runs
        config_cache_ttl_seconds: Lifetime of cached Config snapshots
        service_account_key: Base64 service account JSON key
        service_account_secret_id: Secrets Manager secret holding the key
        region: AWS region for Secrets Manager
        store_max_retries: Retries for throttled or transient store calls
        store_timeout_seconds: Per-request timeout toward the store
        log_level: Logging level name
        health_check_document_id: Spreadsheet read by the health check
    """

    store_backend: str = BACKEND_SHEETS
    config_cache_ttl_seconds: int = 300
    service_account_key: Optional[str] = None
    service_account_secret_id: Optional[str] = None
    region: str = 'us-east-1'
    store_max_retries: int = 3
    store_timeout_seconds: int = 10
    log_level: str = 'INFO'
    health_check_document_id: Optional[str] = None

    def validate(self) -> None:
        """
        Validate configuration parameters.

        Raises:
            ValueError: If any parameter is outside its valid range
        """
        if self.store_backend not in SUPPORTED_BACKENDS:
            raise ValueError(
                f"DOCUMENT_STORE_BACKEND must be one of {', '.join(SUPPORTED_BACKENDS)}, "
                f"got {self.store_backend!r}"
            )

        if self.config_cache_ttl_seconds < 1:
            raise ValueError(
                f"config_cache_ttl_seconds must be at least 1, "
                f"got {self.config_cache_ttl_seconds}"
            )

        if self.store_max_retries < 0:
            raise ValueError(
                f"store_max_retries must be non-negative, got {self.store_max_retries}"
            )

        if self.store_timeout_seconds < 1:
            raise ValueError(
                f"store_timeout_seconds must be at least 1, got {self.store_timeout_seconds}"
            )

    def __post_init__(self):
        """Validate configuration on initialization."""
        self.validate()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'LedgerSettings':
        """
        Build settings from environment variables.

        Example:
            >>> os.environ['DOCUMENT_STORE_BACKEND'] = 'memory'
            >>> LedgerSettings.from_env().store_backend
            'memory'
        """
        env = os.environ if environ is None else environ
        return cls(
            store_backend=env.get('DOCUMENT_STORE_BACKEND', BACKEND_SHEETS).lower(),
            config_cache_ttl_seconds=_env_int(env, 'CONFIG_CACHE_TTL_SECONDS', 300),
            service_account_key=env.get('GOOGLE_SERVICE_ACCOUNT_KEY') or None,
            service_account_secret_id=env.get('GOOGLE_SERVICE_ACCOUNT_SECRET_ID') or None,
            region=env.get('REGION') or env.get('AWS_REGION') or 'us-east-1',
            store_max_retries=_env_int(env, 'STORE_MAX_RETRIES', 3),
            store_timeout_seconds=_env_int(env, 'STORE_TIMEOUT_SECONDS', 10),
            log_level=env.get('LOG_LEVEL', 'INFO').upper(),
            health_check_document_id=env.get('HEALTH_CHECK_SHEET_ID') or None,
        )
