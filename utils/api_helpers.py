"""
Helpers for API tests built on Playwright's APIRequestContext.
"""

import json
import logging
from typing import Any, Dict, Optional
from urllib.parse import urlencode

from playwright.sync_api import APIRequestContext, APIResponse, Error as PlaywrightError, Playwright

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    'Accept': 'application/json',
    'Content-Type': 'application/json',
}

_UNREADABLE_BODY = '[Could not read response body]'


def create_request_context(
    playwright: Playwright,
    base_url: str,
    extra_headers: Optional[Dict[str, str]] = None,
) -> APIRequestContext:
    """New request context with JSON headers; the caller must ``dispose()`` it."""
    return playwright.request.new_context(
        base_url=base_url,
        extra_http_headers={**DEFAULT_HEADERS, **(extra_headers or {})},
    )


def _safe_text(response: APIResponse) -> str:
    try:
        return response.text()
    except (PlaywrightError, UnicodeDecodeError):
        # body already disposed or not text
        return _UNREADABLE_BODY


def assert_json_response(response: APIResponse) -> Any:
    """Assert a JSON content type and return the parsed body."""
    content_type = response.headers.get('content-type', '')
    assert 'application/json' in content_type, (
        f"Expected Content-Type to include 'application/json', got '{content_type}'"
    )

    body = response.json()
    assert body is not None, "Response body should not be null"
    return body


def assert_status(response: APIResponse, expected_status: int):
    """Assert the status code, including URL and body in the failure message."""
    if response.status != expected_status:
        raise AssertionError(
            f"Expected status {expected_status} for {response.url}, "
            f"got {response.status}. Body: {_safe_text(response)}"
        )


def format_response(response: APIResponse, label: str = 'API Response') -> str:
    return (
        f"=== {label} ===\n"
        f"URL:     {response.url}\n"
        f"Status:  {response.status} {response.status_text}\n"
        f"Headers: {json.dumps(response.headers, indent=2)}\n"
        f"Body:    {_safe_text(response)}\n"
        f"=================="
    )


def log_response(response: APIResponse, label: str = 'API Response'):
    logger.info(format_response(response, label))


def build_url(path: str, params: Optional[Dict[str, Any]] = None) -> str:
    """Append ``params`` to ``path`` as a query string; ``path`` is returned as-is when empty."""
    query = urlencode(params or {})
    return f"{path}?{query}" if query else path
