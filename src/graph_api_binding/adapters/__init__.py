"""
HTTP-facing layer of the binding.

* :mod:`.base` holds the error taxonomy.
* :mod:`.errors` classifies failed responses into that taxonomy.
* :mod:`.graph` holds :class:`~graph_api_binding.adapters.graph.GraphClient`, the
  request engine every operation module goes through.
"""

from .base import (
    ApiError,
    DecodeError,
    GraphError,
    NotAuthorized,
    PageAdministrationError,
    PermissionDenied,
    RateLimited,
    RegistryError,
    ResourceGone,
    TransportError,
    Unauthorized,
    UnsupportedRedirect,
)
from .errors import classify, raise_for_response

__all__ = [
    "ApiError",
    "DecodeError",
    "GraphError",
    "NotAuthorized",
    "PageAdministrationError",
    "PermissionDenied",
    "RateLimited",
    "RegistryError",
    "ResourceGone",
    "TransportError",
    "Unauthorized",
    "UnsupportedRedirect",
    "classify",
    "raise_for_response",
]
