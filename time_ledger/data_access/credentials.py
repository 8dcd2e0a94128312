"""
Google service account credentials.

Loads the service account key (base64 JSON from the environment, or a JSON
secret from AWS Secrets Manager) and exchanges a signed JWT assertion for an
OAuth access token.
"""
import base64
import binascii
import json
import logging
import threading
import time
from typing import Any, Callable, Dict, Optional

import boto3
import jwt
import requests
from botocore.exceptions import ClientError

from .exceptions import CredentialsError, RetryableError

logger = logging.getLogger(__name__)

SHEETS_SCOPE = 'https://www.googleapis.com/auth/spreadsheets'
DEFAULT_TOKEN_URI = 'https://oauth2.googleapis.com/token'
JWT_BEARER_GRANT = 'urn:ietf:params:oauth:grant-type:jwt-bearer'

# Refresh this many seconds before the token actually expires
TOKEN_EXPIRY_MARGIN_SECONDS = 60
ASSERTION_LIFETIME_SECONDS = 3600

REQUIRED_KEY_FIELDS = ('client_email', 'private_key')


def decode_service_account_key(encoded_key: str) -> Dict[str, Any]:
    """
    Decode a base64-encoded service account JSON key.

    Raises:
        CredentialsError: If the value is not base64 JSON
    """
    try:
        decoded = base64.b64decode(encoded_key, validate=True).decode('utf-8')
        info = json.loads(decoded)
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CredentialsError(
            'Failed to parse GOOGLE_SERVICE_ACCOUNT_KEY. '
            'Ensure it is valid base64-encoded JSON.'
        ) from e
    return _validate_key(info)


def fetch_service_account_secret(
    secret_id: str,
    region: str,
    secrets_client=None
) -> Dict[str, Any]:
    """
    Fetch the service account JSON key from AWS Secrets Manager.

    Args:
        secret_id: Secret name or ARN
        region: AWS region
        secrets_client: Optional Secrets Manager client for testing

    Raises:
        CredentialsError: If the secret cannot be read or parsed
    """
    client = secrets_client or boto3.client('secretsmanager', region_name=region)
    try:
        response = client.get_secret_value(SecretId=secret_id)
    except ClientError as e:
        error_code = e.response['Error']['Code']
        logger.error(f"Failed to read secret {secret_id}: {error_code}")
        raise CredentialsError(f"Failed to read secret {secret_id}: {error_code}") from e

    try:
        info = json.loads(response['SecretString'])
    except (KeyError, json.JSONDecodeError) as e:
        raise CredentialsError(f"Secret {secret_id} is not a JSON service account key") from e
    return _validate_key(info)


def _validate_key(info: Any) -> Dict[str, Any]:
    if not isinstance(info, dict):
        raise CredentialsError('Service account key must be a JSON object')
    missing = [name for name in REQUIRED_KEY_FIELDS if not info.get(name)]
    if missing:
        raise CredentialsError(
            f"Service account key is missing: {', '.join(missing)}"
        )
    return info


class ServiceAccountCredentials:
    """
    OAuth access tokens for a Google service account.

    Tokens are cached until shortly before expiry. get_access_token() is
    called from executor threads, so refresh is guarded by a lock.
    """

    def __init__(
        self,
        service_account_info: Dict[str, Any],
        scopes: str = SHEETS_SCOPE,
        http_session: Optional[requests.Session] = None,
        timeout_seconds: float = 10.0,
        clock: Callable[[], float] = time.time
    ):
        """
        Initialize credentials.

        Args:
            service_account_info: Parsed service account JSON key
            scopes: Space-separated OAuth scopes
            http_session: Optional requests session for testing
            timeout_seconds: Token endpoint timeout
            clock: Time source returning epoch seconds
        """
        info = _validate_key(service_account_info)
        self.client_email = info['client_email']
        self._private_key = info['private_key']
        self._private_key_id = info.get('private_key_id')
        self.token_uri = info.get('token_uri') or DEFAULT_TOKEN_URI
        self.scopes = scopes
        self.http = http_session or requests.Session()
        self.timeout_seconds = timeout_seconds
        self._clock = clock

        self._token: Optional[str] = None
        self._expires_at = 0.0
        self._lock = threading.Lock()

    def _build_assertion(self, issued_at: int) -> str:
        claims = {
            'iss': self.client_email,
            'scope': self.scopes,
            'aud': self.token_uri,
            'iat': issued_at,
            'exp': issued_at + ASSERTION_LIFETIME_SECONDS,
        }
        headers = {'kid': self._private_key_id} if self._private_key_id else None
        return jwt.encode(claims, self._private_key, algorithm='RS256', headers=headers)

    def get_access_token(self) -> str:
        """
        Return a valid access token, refreshing it if needed.

        Raises:
            CredentialsError: If the token endpoint rejects the assertion
            RetryableError: On network failures or token endpoint 5xx
        """
        with self._lock:
            now = self._clock()
            if self._token and now < self._expires_at - TOKEN_EXPIRY_MARGIN_SECONDS:
                return self._token

            try:
                assertion = self._build_assertion(int(now))
            except (ValueError, TypeError, jwt.PyJWTError) as e:
                raise CredentialsError(f"Unable to sign token assertion: {e}") from e

            try:
                response = self.http.post(
                    self.token_uri,
                    data={'grant_type': JWT_BEARER_GRANT, 'assertion': assertion},
                    timeout=self.timeout_seconds
                )
            except requests.RequestException as e:
                raise RetryableError(f"Token request failed: {e}") from e

            if response.status_code >= 500:
                raise RetryableError(f"Token endpoint returned {response.status_code}")
            if response.status_code != 200:
                logger.error(
                    f"Token exchange rejected for {self.client_email}: "
                    f"{response.status_code} {response.text}"
                )
                raise CredentialsError(
                    f"Token exchange failed with status {response.status_code}"
                )

            payload = response.json()
            self._token = payload['access_token']
            self._expires_at = now + int(payload.get('expires_in', 3600))
            logger.info(f"Obtained access token for {self.client_email}")
            return self._token
