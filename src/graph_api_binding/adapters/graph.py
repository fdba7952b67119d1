"""
Graph API request engine.

:class:`GraphClient` is the only component that talks HTTP. It builds object
and connection URIs, attaches the ``Authorization: OAuth <token>`` header, and
hands successful payloads to the entity decoder or the listing envelope parser.
Failed responses go through :func:`~graph_api_binding.adapters.errors.raise_for_response`.

Per-feature operation modules must go through the public methods here rather
than building URIs or parsing envelopes themselves.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from logging import LoggerAdapter
from typing import Any, Dict, Iterable, Iterator, Mapping, MutableMapping, Optional, Type, TypeVar, Union

import httpx

from ..core.context import GraphContext
from ..core.decoder import EntityDecoder
from ..core.paging import PagedList, PagingParameters, build_query_params, parse_envelope
from .base import DecodeError, TransportError, Unauthorized
from .errors import raise_for_response

T = TypeVar("T")

FormData = Mapping[str, Any]


def join_fields(fields: Iterable[str]) -> str:
    """Comma-join field names in the order given."""

    return ",".join(str(name) for name in fields)


@dataclass(slots=True)
class GraphClient:
    """
    Stateless Graph API engine.

    Parameters
    ----------
    context:
        Immutable configuration (base URL, token, mapping registry, timeout).
    http_client:
        Optional shared :class:`httpx.Client`. When omitted a short-lived client
        is created for every call using the context's timeout and redirect policy.
        An injected client keeps its own timeout and redirect settings.
    """

    context: GraphContext
    http_client: Optional[httpx.Client] = None
    decoder: EntityDecoder = field(init=False, repr=False)
    logger: LoggerAdapter = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.decoder = EntityDecoder(self.context.registry)
        self.logger = self.context.get_logger(f"{self.__class__.__module__}.{self.__class__.__name__}")

    # ------------------------------------------------------------------ reads

    def fetch_object(
        self,
        object_id: str,
        entity_type: Type[T],
        fields: Iterable[str] = (),
        *,
        params: Optional[Mapping[str, Any]] = None,
        authenticated: bool = True,
    ) -> T:
        """GET ``{base}/{object_id}`` and decode the body as one ``entity_type``."""

        query = self._merge_query(params, None, fields)
        response = self._send("GET", self._build_url(object_id), params=query, authenticated=authenticated)
        return self.decoder.decode(self._parse_json(response), entity_type)

    def fetch_connection(
        self,
        object_id: str,
        connection: Optional[str],
        entity_type: Type[T],
        *,
        params: Optional[Mapping[str, Any]] = None,
        fields: Iterable[str] = (),
        paging: Optional[PagingParameters] = None,
        authenticated: bool = True,
    ) -> PagedList[T]:
        """
        GET ``{base}/{object_id}/{connection}`` and decode the listing envelope.

        Query parameters are emitted in order: ``params``, the ``paging``
        cursor, then a single ``fields`` entry which replaces any ``fields``
        key present in ``params``.
        """

        query = self._merge_query(params, paging, fields)
        response = self._send("GET", self._build_url(object_id, connection), params=query, authenticated=authenticated)
        return parse_envelope(self._parse_json(response), entity_type, self.decoder)

    def fetch_binary(self, object_id: str, connection: str, variant: Union[str, Enum], *, authenticated: bool = True) -> bytes:
        """GET a binary resource such as ``{object_id}/picture?type=large``."""

        kind = variant.value if isinstance(variant, Enum) else variant
        response = self._send(
            "GET",
            self._build_url(object_id, connection),
            params={"type": str(kind).lower()},
            authenticated=authenticated,
            binary=True,
        )
        return response.content

    # ------------------------------------------------------------------ writes

    def publish(self, object_id: str, connection: str, data: FormData, *, files: Optional[Mapping[str, Any]] = None) -> str:
        """POST to a connection and return the ID of the created object."""

        response = self._send("POST", self._build_url(object_id, connection), data=dict(data), files=files)
        payload = self._parse_json(response)
        identifier = payload.get("id") if isinstance(payload, dict) else None
        if isinstance(identifier, bool) or not isinstance(identifier, (str, int)):
            raise DecodeError(f"Publish response carries no 'id': {payload!r}")
        return str(identifier)

    def post(self, object_id: str, connection: str, data: Optional[FormData] = None) -> None:
        """POST form data; the response body is not inspected beyond success."""

        self._send("POST", self._build_url(object_id, connection), data=dict(data or {}))

    def remove(self, object_id: str, connection: Optional[str] = None, data: Optional[FormData] = None) -> None:
        """Delete an object or connection entry by POSTing ``method=delete``."""

        form: Dict[str, Any] = dict(data or {})
        form["method"] = "delete"
        self._send("POST", self._build_url(object_id, connection), data=form)

    # ------------------------------------------------------------------ internals

    def _build_url(self, object_id: str, connection: Optional[str] = None) -> str:
        url = f"{self.context.base_url}{object_id}"
        if connection:
            url = f"{url}/{connection}"
        return url

    @staticmethod
    def _merge_query(
        params: Optional[Mapping[str, Any]],
        paging: Optional[PagingParameters],
        fields: Iterable[str],
    ) -> Dict[str, Any]:
        query: Dict[str, Any] = {key: value for key, value in (params or {}).items() if value is not None}
        query.update(build_query_params(paging))
        selected = list(fields)
        if selected:
            query.pop("fields", None)
            query["fields"] = join_fields(selected)
        return query

    def _headers(self, authenticated: bool) -> MutableMapping[str, str]:
        headers: MutableMapping[str, str] = {"Accept": "application/json"}
        if authenticated:
            if not self.context.access_token:
                raise Unauthorized("This operation requires an access token, but the client was created without one.")
            headers["Authorization"] = f"OAuth {self.context.access_token}"
        return headers

    @contextmanager
    def _client(self) -> Iterator[httpx.Client]:
        if self.http_client is not None:
            yield self.http_client
            return
        with httpx.Client(timeout=self.context.timeout, follow_redirects=self.context.follow_redirects) as client:
            yield client

    def _send(self, method: str, url: str, *, authenticated: bool = True, binary: bool = False, **kwargs: Any) -> httpx.Response:
        """
        Issue one request and return the successful response.

        Timeout and redirect policy belong to the transport: an injected
        ``http_client`` keeps its own settings, the short-lived client takes
        them from the context. ``binary`` reports an unfollowed redirect as
        :class:`UnsupportedRedirect` instead of a transport failure.
        """

        # Writes are always authenticated.
        headers = self._headers(authenticated or method != "GET")
        self.logger.debug("Graph request", extra={"method": method, "url": url, "params": kwargs.get("params")})

        try:
            with self._client() as client:
                response = client.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            self.logger.error("HTTP error during Graph request", extra={"method": method, "url": url, "error": str(exc)})
            raise TransportError(f"HTTP error while calling {method} {url}: {exc}") from exc

        self.logger.debug("Graph response", extra={"method": method, "url": url, "status_code": response.status_code})
        raise_for_response(response, binary=binary)
        return response

    @staticmethod
    def _parse_json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise DecodeError(f"Failed to decode JSON from {response.request.method} {str(response.request.url).split('?', 1)[0]}: {exc}") from exc
