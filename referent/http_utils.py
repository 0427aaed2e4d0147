"""HTTP helpers shared by the Referent Cloud Functions."""

import json
from typing import Optional
from urllib.parse import urlparse

CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Content-Type': 'application/json',
}

PREFLIGHT_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Methods': 'POST',
    'Access-Control-Allow-Headers': 'Content-Type',
    'Access-Control-Max-Age': '3600'
}


def preflight_response() -> tuple:
    """Answer a CORS preflight request."""
    return ('', 204, PREFLIGHT_HEADERS)


def json_response(payload: dict, status: int = 200) -> tuple:
    return (json.dumps(payload, ensure_ascii=False), status, CORS_HEADERS)


def error_response(message: str, status: int) -> tuple:
    return json_response({'error': message}, status)


def get_text_field(request_json: Optional[dict], name: str) -> Optional[str]:
    """
    Return a required string field from the request body.

    None when the body is missing, the field is absent, not a string, or blank.
    """
    if not isinstance(request_json, dict):
        return None
    value = request_json.get(name)
    if not isinstance(value, str) or not value.strip():
        return None
    return value


def is_valid_url(url: str) -> bool:
    """Only absolute http(s) URLs with a host are fetchable."""
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return False
    return parsed.scheme in ('http', 'https') and bool(parsed.netloc)
