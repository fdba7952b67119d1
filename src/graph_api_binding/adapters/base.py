"""
Error taxonomy shared by the Graph API engine and its operation modules.

Every failure surfaced to callers derives from :class:`GraphError`. Remote
failures keep the fields of the API's error envelope so that callers can act on
them without inspecting the raw HTTP exchange.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional


class GraphError(RuntimeError):
    """Base class for every error raised by the binding."""


class RegistryError(GraphError):
    """Raised when a field mapping cannot be registered or looked up."""


class DecodeError(GraphError):
    """
    Raised when a payload does not match the shape its entity type declares.

    Parameters
    ----------
    message:
        Human-readable description of the mismatch.
    path:
        Dotted attribute path locating the failure, e.g. ``Page.location.latitude``.
    """

    def __init__(self, message: str, *, path: Optional[str] = None) -> None:
        super().__init__(f"{message} (at {path})" if path else message)
        self.reason = message
        self.path = path


class Unauthorized(GraphError):
    """Raised when an operation requires an access token that is not available."""


class UnsupportedRedirect(GraphError):
    """Raised when a binary fetch is answered with a redirect the transport does not follow."""

    def __init__(self, status: int, location: Optional[str]) -> None:
        super().__init__(f"Request resulted in a {status} redirect to {location or '<unknown>'} which could not be followed. " "Enable follow_redirects on the context to fetch the target.")
        self.status = status
        self.location = location


class TransportError(GraphError):
    """Raised for failures that carry no structured error envelope."""

    def __init__(self, message: str, *, status: Optional[int] = None, body: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class ApiError(GraphError):
    """
    Structured error reported by the remote API.

    Attributes
    ----------
    status:
        HTTP status code of the failed response.
    error_type:
        The envelope's ``error.type`` (e.g. ``OAuthException``).
    code:
        The envelope's ``error.code``.
    subcode:
        The envelope's optional ``error.error_subcode``.
    message:
        The envelope's human-readable ``error.message``.
    payload:
        The complete decoded error envelope.
    """

    def __init__(
        self,
        message: str,
        *,
        status: int,
        error_type: Optional[str] = None,
        code: Optional[int] = None,
        subcode: Optional[int] = None,
        payload: Optional[Mapping[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.error_type = error_type
        self.code = code
        self.subcode = subcode
        self.payload = dict(payload or {})

    def __str__(self) -> str:
        parts = [f"HTTP {self.status}"]
        if self.error_type:
            parts.append(self.error_type)
        if self.code is not None:
            parts.append(f"code={self.code}")
        if self.subcode is not None:
            parts.append(f"subcode={self.subcode}")
        return f"{self.message} ({', '.join(parts)})"


class PermissionDenied(ApiError):
    """The token is valid but lacks the permission the operation needs."""


class NotAuthorized(ApiError, Unauthorized):
    """The remote API rejected the access token (invalid, expired, or revoked)."""


class ResourceGone(ApiError):
    """The requested object does not exist or is no longer available."""


class RateLimited(ApiError):
    """The remote API throttled the caller; backing off is the caller's responsibility."""


class PageAdministrationError(GraphError):
    """Raised when a page-scoped write targets a page the authenticated user does not administer."""

    def __init__(self, page_id: str) -> None:
        super().__init__(f"The authenticated user is not an administrator of page {page_id}.")
        self.page_id = page_id
