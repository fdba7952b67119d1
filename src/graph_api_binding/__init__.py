"""
Typed client binding for the Facebook Graph API.

:class:`~graph_api_binding.services.graph.GraphServices` is the main entry
point; it wires a :class:`~graph_api_binding.core.context.GraphContext` to the
:class:`~graph_api_binding.adapters.graph.GraphClient` request engine and the
page and like operation groups. Entity types live in
:mod:`graph_api_binding.models`.
"""

from .adapters.base import (
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
from .adapters.graph import GraphClient
from .config import GraphSettings, load_settings
from .core.context import GraphContext
from .core.paging import PagedList, PagingParameters
from .core.registry import MappingRegistry, default_registry
from .operations import LikeOperations, PageOperations, PostLink
from .services import GraphServices

__version__ = "0.1.0"

__all__ = [
    "ApiError",
    "DecodeError",
    "GraphClient",
    "GraphContext",
    "GraphError",
    "GraphServices",
    "GraphSettings",
    "LikeOperations",
    "MappingRegistry",
    "NotAuthorized",
    "PageAdministrationError",
    "PageOperations",
    "PagedList",
    "PagingParameters",
    "PostLink",
    "PermissionDenied",
    "RateLimited",
    "RegistryError",
    "ResourceGone",
    "TransportError",
    "Unauthorized",
    "UnsupportedRedirect",
    "default_registry",
    "load_settings",
    "__version__",
]
