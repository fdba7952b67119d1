"""
Immutable configuration shared by every engine call.

A :class:`GraphContext` bundles the versioned base URL, the access token (if
any), the frozen mapping registry, and transport knobs. It is passed by
reference into the engine; nothing in it changes after construction, so one
context can serve any number of concurrent callers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import LoggerAdapter
from typing import Mapping, Optional

from ..config import DEFAULT_TIMEOUT, GraphSettings, load_settings
from .logging import get_logger as _get_logger
from .registry import MappingRegistry, default_registry


@dataclass(slots=True, frozen=True)
class GraphContext:
    """
    Engine configuration.

    Attributes
    ----------
    base_url:
        Versioned API root, e.g. ``https://graph.facebook.com/v2.2/``.
    access_token:
        Token sent as ``Authorization: OAuth <token>``. ``None`` means the
        context can only perform unauthenticated reads.
    registry:
        Field-mapping registry used for decoding. An unfrozen registry is
        frozen in place on construction, so it cannot be extended afterwards.
    timeout:
        Per-request timeout in seconds handed to the transport.
    follow_redirects:
        Whether the transport follows redirects (binary fetches of pictures
        answer with a redirect to the CDN).
    """

    base_url: str
    access_token: Optional[str] = field(default=None, repr=False)
    registry: MappingRegistry = field(default_factory=default_registry, repr=False)
    timeout: float = DEFAULT_TIMEOUT
    follow_redirects: bool = False

    def __post_init__(self) -> None:
        if not self.base_url.endswith("/"):
            object.__setattr__(self, "base_url", f"{self.base_url}/")
        if not self.registry.frozen:
            self.registry.freeze()

    @classmethod
    def build_default(
        cls,
        *,
        settings: Optional[GraphSettings] = None,
        registry: Optional[MappingRegistry] = None,
        access_token: Optional[str] = None,
    ) -> "GraphContext":
        """
        Construct a context from settings.

        Parameters
        ----------
        settings:
            Preloaded settings. When omitted :func:`~graph_api_binding.config.load_settings` is called.
        registry:
            Mapping registry override, used as given even when empty. Defaults to
            :func:`default_registry`. It is frozen in place.
        access_token:
            Token override taking precedence over the settings' token.
        """

        resolved = settings if settings is not None else load_settings(strict=False)
        return cls(
            base_url=resolved.base_url,
            access_token=access_token or resolved.access_token,
            registry=registry if registry is not None else default_registry(),
            timeout=resolved.timeout,
            follow_redirects=resolved.follow_redirects,
        )

    @property
    def is_authorized(self) -> bool:
        return bool(self.access_token)

    def get_logger(self, name: str, *, extra: Optional[Mapping[str, object]] = None) -> LoggerAdapter:
        merged = {"base_url": self.base_url}
        merged.update(extra or {})
        return _get_logger(name, extra=merged)
