"""
Transport-independent core: field mappings, decoding, pagination, configuration context.

Nothing in this package performs network I/O.
"""

from .context import GraphContext
from .decoder import EntityDecoder, parse_timestamp
from .logging import configure_logging, get_logger
from .paging import PagedList, PagingParameters, build_query_params, parse_envelope
from .registry import EntityMapping, FieldKind, FieldSpec, MappingRegistry, default_registry

__all__ = [
    "EntityDecoder",
    "EntityMapping",
    "FieldKind",
    "FieldSpec",
    "GraphContext",
    "MappingRegistry",
    "PagedList",
    "PagingParameters",
    "build_query_params",
    "configure_logging",
    "default_registry",
    "get_logger",
    "parse_envelope",
    "parse_timestamp",
]
