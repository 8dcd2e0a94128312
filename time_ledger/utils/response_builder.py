"""
Utility for building standardized API Gateway responses.
"""
import json
import time
from typing import Dict, Any, Optional

JSON_HEADERS = {'Content-Type': 'application/json'}


def success_response(
    status_code: int = 200,
    body: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Build success response.

    Args:
        status_code: HTTP status code
        body: Response body dict

    Returns:
        API Gateway response dict
    """
    return {
        'statusCode': status_code,
        'headers': dict(JSON_HEADERS),
        'body': json.dumps(body or {})
    }


def error_response(
    status_code: int,
    error_code: str,
    message: str,
    details: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Build error response.

    Args:
        status_code: HTTP status code
        error_code: Application error code
        message: Human-readable error message
        details: Optional additional error details

    Returns:
        API Gateway response dict
    """
    body = {
        'type': 'error',
        'code': str(getattr(error_code, 'value', error_code)),
        'message': message,
        'timestamp': int(time.time() * 1000)
    }

    if details:
        body['details'] = details

    return {
        'statusCode': status_code,
        'headers': dict(JSON_HEADERS),
        'body': json.dumps(body)
    }
