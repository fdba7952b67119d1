"""
Pagination cursors and paged results for connection listings.

A listing response looks like::

    {
        "data": [...],
        "paging": {"previous": "https://graph.facebook.com/...&limit=25&offset=0",
                   "next": "https://graph.facebook.com/...&limit=25&offset=50"},
        "summary": {"total_count": 312}
    }

The ``previous``/``next`` URLs are never followed directly. Only the query
parameters needed to address the adjacent page are kept as a
:class:`PagingParameters` cursor; the engine rebuilds the request against its
own base URL and credentials.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Generic, Iterator, Optional, Tuple, Type, TypeVar, overload

import httpx

from ..adapters.base import DecodeError
from .decoder import EntityDecoder
from .logging import get_logger

T = TypeVar("T")

CURSOR_KEYS: Tuple[str, ...] = ("limit", "offset", "since", "until", "after", "before")
_INTEGER_KEYS = frozenset({"limit", "offset", "since", "until"})

_logger = get_logger(__name__)


@dataclass(slots=True, frozen=True)
class PagingParameters:
    """
    Query parameters addressing one page of a connection.

    Offset-paged connections use ``limit``/``offset``, time-paged ones
    ``since``/``until`` (unix timestamps), cursor-paged ones ``after``/``before``.
    """

    limit: Optional[int] = None
    offset: Optional[int] = None
    since: Optional[int] = None
    until: Optional[int] = None
    after: Optional[str] = None
    before: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, item.name) is None for item in fields(self))

    @classmethod
    def from_url(cls, url: str) -> Optional["PagingParameters"]:
        """
        Extract a cursor from a ``paging.previous``/``paging.next`` URL.

        Returns ``None`` when the URL carries no recognised cursor parameter.
        """

        if not isinstance(url, str):
            raise DecodeError(f"Expected a paging URL string, got {type(url).__name__}")
        try:
            params = httpx.URL(url).params
        except httpx.InvalidURL as exc:
            raise DecodeError(f"Malformed paging URL {url!r}: {exc}") from exc

        values: Dict[str, Any] = {}
        for key in CURSOR_KEYS:
            value = params.get(key)
            if value is None:
                continue
            if key in _INTEGER_KEYS:
                try:
                    values[key] = int(value)
                except ValueError:
                    raise DecodeError(f"Paging parameter '{key}' is not an integer: {value!r}") from None
            else:
                values[key] = value

        cursor = cls(**values)
        if cursor.is_empty:
            ignored = sorted(key for key in params.keys() if key not in ("access_token", "fields"))
            _logger.warning("Paging URL carries no recognised cursor parameters", extra={"ignored": ignored})
            return None
        return cursor


def build_query_params(cursor: Optional[PagingParameters]) -> Dict[str, str]:
    """Render only the populated fields of ``cursor`` as query parameters."""

    if cursor is None:
        return {}
    params: Dict[str, str] = {}
    for key in CURSOR_KEYS:
        value = getattr(cursor, key)
        if value is not None:
            params[key] = str(value)
    return params


@dataclass(slots=True, frozen=True)
class PagedList(Generic[T]):
    """One fetched page of a connection plus the cursors to its neighbours."""

    data: Tuple[T, ...] = ()
    previous_page: Optional[PagingParameters] = None
    next_page: Optional[PagingParameters] = None
    total_count: Optional[int] = None

    def __len__(self) -> int:
        return len(self.data)

    def __iter__(self) -> Iterator[T]:
        return iter(self.data)

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> Tuple[T, ...]: ...

    def __getitem__(self, index):
        return self.data[index]

    @property
    def has_next(self) -> bool:
        return self.next_page is not None

    @property
    def has_previous(self) -> bool:
        return self.previous_page is not None


def _parse_total_count(payload: Dict[str, Any]) -> Optional[int]:
    summary = payload.get("summary")
    if not isinstance(summary, dict) or summary.get("total_count") is None:
        return None
    value = summary["total_count"]
    if isinstance(value, bool):
        raise DecodeError("summary.total_count must be an integer, got boolean")
    if isinstance(value, float) and not value.is_integer():
        raise DecodeError(f"summary.total_count must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise DecodeError(f"summary.total_count must be an integer, got {value!r}") from None


def _parse_cursor(paging: Dict[str, Any], direction: str) -> Optional[PagingParameters]:
    url = paging.get(direction)
    if url is None:
        return None
    return PagingParameters.from_url(url)


def parse_envelope(payload: Any, entity_type: Type[T], decoder: EntityDecoder) -> PagedList[T]:
    """Decode a listing envelope into a :class:`PagedList`."""

    if not isinstance(payload, dict):
        raise DecodeError(f"Expected a listing envelope object, got {type(payload).__name__}")
    if "data" not in payload:
        raise DecodeError("Listing envelope has no 'data' array")

    data = decoder.decode_list(payload["data"], entity_type)
    total_count = _parse_total_count(payload)

    paging = payload.get("paging")
    if paging is None:
        return PagedList(tuple(data), None, None, total_count)
    if not isinstance(paging, dict):
        raise DecodeError(f"Expected 'paging' to be an object, got {type(paging).__name__}")
    return PagedList(
        tuple(data),
        previous_page=_parse_cursor(paging, "previous"),
        next_page=_parse_cursor(paging, "next"),
        total_count=total_count,
    )
