"""
Translate failed Graph API responses into the binding's error taxonomy.

This is the only module that interprets HTTP status codes. A failed response
whose body carries the API's error envelope::

    {"error": {"type": "OAuthException", "code": 200, "error_subcode": 1234, "message": "..."}}

is classified by ``(type, code, subcode)``; anything else becomes a
:class:`~graph_api_binding.adapters.base.TransportError` carrying the status and
raw body. Errors are raised exactly once, never retried.
"""

from __future__ import annotations

import json
from typing import Any, Mapping, Optional

import httpx

from ..core.logging import get_logger
from .base import ApiError, NotAuthorized, PermissionDenied, RateLimited, ResourceGone, TransportError, UnsupportedRedirect

RATE_LIMIT_CODES = frozenset({4, 17, 341, 613})
NOT_AUTHORIZED_CODES = frozenset({102, 190, 2500})
PERMISSION_CODES = frozenset({10, *range(200, 300)})
NOT_FOUND_CODES = frozenset({803})

_logger = get_logger(__name__)


def _optional_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _without_query(url: httpx.URL) -> str:
    return str(url).split("?", 1)[0]


def parse_error_envelope(body: str) -> Optional[Mapping[str, Any]]:
    """Return the decoded envelope if ``body`` matches the error shape, else ``None``."""

    if not body or not body.strip():
        return None
    try:
        payload = json.loads(body)
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if not isinstance(error, dict) or not isinstance(error.get("message"), str):
        return None
    return payload


def classify(status: int, envelope: Mapping[str, Any]) -> ApiError:
    """Build the typed error for a parsed error envelope."""

    error = envelope["error"]
    error_type = error.get("type") if isinstance(error.get("type"), str) else None
    code = _optional_int(error.get("code"))
    subcode = _optional_int(error.get("error_subcode"))
    options = {
        "status": status,
        "error_type": error_type,
        "code": code,
        "subcode": subcode,
        "payload": envelope,
    }
    message = error["message"]

    if code in RATE_LIMIT_CODES:
        return RateLimited(message, **options)
    if code in NOT_AUTHORIZED_CODES or status == 401:
        return NotAuthorized(message, **options)
    if code in PERMISSION_CODES:
        return PermissionDenied(message, **options)
    if code in NOT_FOUND_CODES or (code == 100 and error_type == "GraphMethodException") or status in (404, 410):
        return ResourceGone(message, **options)
    return ApiError(message, **options)


def raise_for_response(response: httpx.Response, *, binary: bool = False) -> None:
    """
    Return silently on success, otherwise raise the classified error.

    Parameters
    ----------
    response:
        The received response.
    binary:
        Whether the request fetched binary content. Only then is an unfollowed
        redirect reported as :class:`UnsupportedRedirect`; elsewhere a 3xx without an
        error envelope is a :class:`TransportError`.
    """

    if response.is_success:
        return

    status = response.status_code
    if binary and response.is_redirect:
        raise UnsupportedRedirect(status, response.headers.get("Location"))

    body = response.text
    envelope = parse_error_envelope(body)
    if envelope is None:
        _logger.warning(
            "Graph API request failed without an error envelope",
            extra={"method": response.request.method, "url": _without_query(response.request.url), "status_code": status},
        )
        raise TransportError(f"HTTP {status} error for {response.request.method} {_without_query(response.request.url)}", status=status, body=body)

    error = classify(status, envelope)
    _logger.warning(
        "Graph API returned an error",
        extra={
            "status_code": status,
            "error_type": error.error_type,
            "code": error.code,
            "subcode": error.subcode,
            "error_class": type(error).__name__,
        },
    )
    raise error
