"""Per-feature operation groups built on :class:`~graph_api_binding.adapters.graph.GraphClient`."""

from .likes import LikeOperations
from .pages import PAGE_FIELDS, PageOperations, PostLink

__all__ = ["LikeOperations", "PAGE_FIELDS", "PageOperations", "PostLink"]
