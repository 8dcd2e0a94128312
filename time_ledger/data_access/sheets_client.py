"""
Google Sheets backed document store.

Talks to the Sheets v4 REST API with requests. Each spreadsheet is a
document and each worksheet a segment. Blocking HTTP calls run in the
default executor so they do not stall the event loop.
"""
import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote

import requests

from .credentials import ServiceAccountCredentials
from .document_store import DocumentStore, SegmentHandle
from .exceptions import (
    DocumentNotFoundError,
    DocumentStoreError,
    RateLimitExceededError,
    RetryableError,
    SegmentAlreadyExistsError,
    SegmentNotFoundError,
)
from ..utils.a1_notation import qualified_range
from ..utils.retry import retry_with_backoff

logger = logging.getLogger(__name__)

SHEETS_API_URL = 'https://sheets.googleapis.com/v4/spreadsheets'
# Google's public sample spreadsheet, readable by any authenticated caller
DEFAULT_HEALTH_CHECK_DOCUMENT_ID = '1BxiMVs0XRA5nFMdKvBdBZjgmUUqptlbs74OgvE2upms'
USER_ENTERED = 'USER_ENTERED'


class GoogleSheetsClient(DocumentStore):
    """
    DocumentStore over the Google Sheets REST API.
    """

    def __init__(
        self,
        credentials: ServiceAccountCredentials,
        http_session: Optional[requests.Session] = None,
        timeout_seconds: float = 10.0,
        max_retries: int = 3,
        base_url: str = SHEETS_API_URL,
        health_check_document_id: str = DEFAULT_HEALTH_CHECK_DOCUMENT_ID
    ):
        """
        Initialize Sheets client.

        Args:
            credentials: Source of bearer tokens
            http_session: Optional requests session for testing
            timeout_seconds: Per-request timeout
            max_retries: Retries for 429, 5xx and network failures
            base_url: API root
            health_check_document_id: Spreadsheet fetched by check_connection
        """
        self.credentials = credentials
        self.http = http_session or requests.Session()
        self.timeout_seconds = timeout_seconds
        self.max_retries = max_retries
        self.base_url = base_url.rstrip('/')
        self.health_check_document_id = health_check_document_id

    def _send(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        body: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Issue one blocking HTTP request and translate failures."""
        headers = {'Authorization': f'Bearer {self.credentials.get_access_token()}'}
        url = f'{self.base_url}/{path}'

        try:
            response = self.http.request(
                method,
                url,
                params=params,
                json=body,
                headers=headers,
                timeout=self.timeout_seconds
            )
        except requests.RequestException as e:
            raise RetryableError(f"Sheets request failed: {e}") from e

        if response.status_code < 300:
            return response.json() if response.content else {}

        message = _error_message(response)

        if response.status_code == 429:
            retry_after = response.headers.get('Retry-After', '0')
            raise RateLimitExceededError(
                f"Sheets API quota exceeded: {message}",
                retry_after=int(retry_after) if retry_after.isdigit() else 0
            )
        if response.status_code >= 500:
            raise RetryableError(f"Sheets API error {response.status_code}: {message}")
        if response.status_code == 404:
            raise DocumentNotFoundError(f"Document not found: {message}")
        if response.status_code == 400 and 'Unable to parse range' in message:
            raise SegmentNotFoundError(message)
        if response.status_code == 400 and 'already exists' in message:
            raise SegmentAlreadyExistsError(message)

        logger.error(f"Sheets API {method} {path} failed: {response.status_code} {message}")
        raise DocumentStoreError(f"Sheets API error {response.status_code}: {message}")

    @retry_with_backoff(max_retries='max_retries')
    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        body: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None,
            lambda: self._send(method, path, params, body)
        )

    @staticmethod
    def _values_path(document_id: str, segment_name: str, cell_range: str) -> str:
        a1 = quote(qualified_range(segment_name, cell_range), safe='')
        return f'{document_id}/values/{a1}'

    async def list_segments(self, document_id: str) -> List[str]:
        data = await self._request(
            'GET',
            document_id,
            params={'fields': 'sheets.properties.title'}
        )
        return [sheet['properties']['title'] for sheet in data.get('sheets', [])]

    async def create_segment(self, document_id: str, name: str) -> SegmentHandle:
        data = await self._request(
            'POST',
            f'{document_id}:batchUpdate',
            body={'requests': [{'addSheet': {'properties': {'title': name}}}]}
        )
        try:
            properties = data['replies'][0]['addSheet']['properties']
        except (KeyError, IndexError) as e:
            raise DocumentStoreError(f"Unexpected addSheet reply for {name}") from e

        logger.info(f"Created worksheet {name} ({properties['sheetId']}) in {document_id}")
        return SegmentHandle(sheet_id=properties['sheetId'], title=properties['title'])

    async def read_range(
        self,
        document_id: str,
        segment_name: str,
        cell_range: str
    ) -> List[List[str]]:
        data = await self._request(
            'GET',
            self._values_path(document_id, segment_name, cell_range)
        )
        return data.get('values', [])

    async def append_row(
        self,
        document_id: str,
        segment_name: str,
        values: Sequence[Optional[Any]],
        anchor: str = 'A6'
    ) -> None:
        await self._request(
            'POST',
            self._values_path(document_id, segment_name, anchor) + ':append',
            params={'valueInputOption': USER_ENTERED},
            body={'values': [list(values)]}
        )

    async def update_cell(
        self,
        document_id: str,
        segment_name: str,
        cell: str,
        value: Any
    ) -> None:
        await self._request(
            'PUT',
            self._values_path(document_id, segment_name, cell),
            params={'valueInputOption': USER_ENTERED},
            body={'values': [[value]]}
        )

    async def batch_mutate(
        self,
        document_id: str,
        requests: List[Dict[str, Any]]
    ) -> None:
        await self._request(
            'POST',
            f'{document_id}:batchUpdate',
            body={'requests': requests}
        )

    async def check_connection(self) -> None:
        await self._request(
            'GET',
            self.health_check_document_id,
            params={'fields': 'spreadsheetId'}
        )


def _error_message(response: requests.Response) -> str:
    try:
        return response.json()['error']['message']
    except (ValueError, KeyError, TypeError):
        return response.text
