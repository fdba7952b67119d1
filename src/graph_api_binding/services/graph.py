"""
Graph API service façade.

Bundles a :class:`~graph_api_binding.core.context.GraphContext`, a shared
:class:`~graph_api_binding.adapters.graph.GraphClient` and the operation groups
so callers configure the binding once and reach every feature from one object.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import LoggerAdapter
from typing import Optional

import httpx

from ..adapters.graph import GraphClient
from ..config import GraphSettings, load_settings
from ..core.context import GraphContext
from ..core.registry import MappingRegistry
from ..operations.likes import LikeOperations
from ..operations.pages import PageOperations


@dataclass(slots=True)
class GraphServices:
    """High-level entry point exposing ``pages`` and ``likes``."""

    context: GraphContext
    http_client: Optional[httpx.Client] = None
    logger: LoggerAdapter = field(init=False, repr=False)
    _client: Optional[GraphClient] = field(default=None, init=False, repr=False)
    _pages: Optional[PageOperations] = field(default=None, init=False, repr=False)
    _likes: Optional[LikeOperations] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self.logger = self.context.get_logger(self.__class__.__name__)

    @classmethod
    def from_settings(
        cls,
        settings: Optional[GraphSettings] = None,
        *,
        access_token: Optional[str] = None,
        registry: Optional[MappingRegistry] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> "GraphServices":
        """
        Build the façade from settings.

        Parameters
        ----------
        settings:
            Preloaded settings; :func:`~graph_api_binding.config.load_settings` is used when omitted.
        access_token:
            Token override, e.g. one obtained from an OAuth flow at runtime.
        registry:
            Custom mapping registry.
        http_client:
            Shared transport reused by every call.
        """

        resolved = settings if settings is not None else load_settings(strict=False)
        context = GraphContext.build_default(settings=resolved, registry=registry, access_token=access_token)
        return cls(context=context, http_client=http_client)

    @property
    def client(self) -> GraphClient:
        if self._client is None:
            self._client = GraphClient(self.context, http_client=self.http_client)
            self.logger.debug("Created Graph client", extra={"authorized": self.context.is_authorized})
        return self._client

    @property
    def pages(self) -> PageOperations:
        if self._pages is None:
            self._pages = PageOperations(self.client)
        return self._pages

    @property
    def likes(self) -> LikeOperations:
        if self._likes is None:
            self._likes = LikeOperations(self.client)
        return self._likes

    @property
    def is_authorized(self) -> bool:
        return self.context.is_authorized

    def close(self) -> None:
        """Close the shared transport if one was supplied."""

        if self.http_client is not None:
            self.http_client.close()
