"""
HTTP API Lambda handler for the timer endpoints.

This handler implements the REST API over the ledger engine:
- POST /timer/start - Start a timer on a spreadsheet
- POST /timer/stop - Stop the running timer of a spreadsheet
- GET /health - Health check
"""
import asyncio
import base64
import binascii
import json
from typing import Any, Dict, Optional

from time_ledger.config.settings import LedgerSettings
from time_ledger.data_access.store_factory import build_document_store
from time_ledger.services.errors import LedgerError
from time_ledger.services.ledger_engine import LedgerEngine
from time_ledger.utils.error_codes import ErrorCode
from time_ledger.utils.response_builder import error_response, success_response
from time_ledger.utils.structured_logger import configure_lambda_logging, get_structured_logger
from time_ledger.utils.validators import (
    ValidationError,
    parse_end_time,
    validate_description,
    validate_document_id,
)

configure_lambda_logging()
logger = get_structured_logger('TimerHandler')

# Reused across invocations of a warm container: the engine owns the config
# cache and the per-document locks, and asyncio locks are bound to one loop.
_engine: Optional[LedgerEngine] = None
_loop: Optional[asyncio.AbstractEventLoop] = None


def get_engine() -> LedgerEngine:
    """Get or create the ledger engine for this container."""
    global _engine
    if _engine is None:
        settings = LedgerSettings.from_env()
        _engine = LedgerEngine(
            build_document_store(settings),
            config_ttl_seconds=settings.config_cache_ttl_seconds
        )
    return _engine


def run(coroutine):
    """Run a coroutine on the container's event loop."""
    global _loop
    if _loop is None or _loop.is_closed():
        _loop = asyncio.new_event_loop()
    return _loop.run_until_complete(coroutine)


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    HTTP API Lambda handler for timer operations.

    Routes:
    - POST /timer/start -> start_timer
    - POST /timer/stop -> stop_timer
    - GET /health -> health_check
    """
    request_id = getattr(context, 'aws_request_id', None)

    try:
        http = event['requestContext']['http']
        http_method = http['method']
        path = http['path']

        logger.info('HTTP request received', operation='route', method=http_method, path=path)

        if http_method == 'POST' and path == '/timer/start':
            return start_timer(event, request_id)
        elif http_method == 'POST' and path == '/timer/stop':
            return stop_timer(event, request_id)
        elif http_method == 'GET' and path == '/health':
            return health_check()
        else:
            return error_response(404, ErrorCode.NOT_FOUND, 'Not found')

    except ValidationError as e:
        return error_response(400, e.error_code, e.message, details={'field': e.field})
    except LedgerError as e:
        if e.status_code >= 500:
            logger.error('Ledger operation failed', operation='route', error=e)
        else:
            logger.warning(e.message, operation='route', error_code=e.error_code)
        return error_response(e.status_code, e.error_code, e.message)
    except Exception as e:
        logger.error(f'Unhandled error: {str(e)}', operation='route', error=e)
        return error_response(500, ErrorCode.INTERNAL_SERVER_ERROR, 'Internal server error')


def parse_body(event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Decode the JSON request body.

    Raises:
        ValidationError: If the body is not a JSON object
    """
    raw = event.get('body') or '{}'
    if event.get('isBase64Encoded') and event.get('body'):
        try:
            raw = base64.b64decode(raw, validate=True).decode('utf-8')
        except (binascii.Error, UnicodeDecodeError):
            raise ValidationError(
                'Request body is not valid base64-encoded UTF-8',
                error_code=ErrorCode.VALIDATION_INVALID_MESSAGE_FORMAT
            )

    try:
        body = json.loads(raw)
    except json.JSONDecodeError:
        raise ValidationError(
            'Request body must be valid JSON',
            error_code=ErrorCode.VALIDATION_INVALID_MESSAGE_FORMAT
        )

    if not isinstance(body, dict):
        raise ValidationError(
            'Request body must be a JSON object',
            error_code=ErrorCode.VALIDATION_INVALID_MESSAGE_FORMAT
        )
    return body


def start_timer(event: Dict[str, Any], request_id: Optional[str]) -> Dict[str, Any]:
    """Start a timer."""
    body = parse_body(event)
    sheet_id = validate_document_id(body.get('sheetId'))
    description = validate_description(body.get('description'))

    result = run(get_engine().start_timer(sheet_id, description, request_id=request_id))
    return success_response(200, result.to_dict())


def stop_timer(event: Dict[str, Any], request_id: Optional[str]) -> Dict[str, Any]:
    """Stop the running timer."""
    body = parse_body(event)
    sheet_id = validate_document_id(body.get('sheetId'))
    end_time = parse_end_time(body.get('endTime'))

    result = run(get_engine().stop_timer(sheet_id, end_time, request_id=request_id))
    return success_response(200, result.to_dict())


def health_check() -> Dict[str, Any]:
    """Report whether the document store is reachable."""
    try:
        run(get_engine().check_health())
    except LedgerError as e:
        logger.error('Health check failed', operation='health_check', error=e)
        return success_response(500, {
            'status': 'ERROR',
            'message': 'Could not connect to Google Sheets API.'
        })

    return success_response(200, {
        'status': 'OK',
        'message': 'Google Sheets API connection is healthy.'
    })
