from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, List, Union

import httpx
import pytest

from graph_api_binding.adapters.graph import GraphClient
from graph_api_binding.core.context import GraphContext

DATA_DIR = Path(__file__).parent / "data"
BASE_URL = "https://graph.facebook.com/v2.2/"
ACCESS_TOKEN = "someAccessToken"

Reply = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


class TransportSpy:
    """Records every request and answers from a queue of canned responses."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self._replies: List[Reply] = []

    def reply(self, response: Reply) -> "TransportSpy":
        self._replies.append(response)
        return self

    def reply_json(self, payload: Any, status_code: int = 200) -> "TransportSpy":
        return self.reply(httpx.Response(status_code, json=payload))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        if not self._replies:
            raise AssertionError(f"Unexpected request {request.method} {request.url}")
        reply = self._replies.pop(0)
        if isinstance(reply, httpx.Response):
            return reply
        return reply(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture(scope="session")
def load_fixture() -> Callable[[str], Any]:
    def _load(name: str) -> Any:
        return json.loads((DATA_DIR / name).read_text(encoding="utf-8"))

    return _load


@pytest.fixture()
def transport() -> TransportSpy:
    return TransportSpy()


@pytest.fixture()
def graph_context() -> GraphContext:
    return GraphContext(base_url=BASE_URL, access_token=ACCESS_TOKEN)


@pytest.fixture()
def anonymous_context() -> GraphContext:
    return GraphContext(base_url=BASE_URL)


@pytest.fixture()
def http_client(transport: TransportSpy):
    client = httpx.Client(transport=httpx.MockTransport(transport))
    yield client
    client.close()


@pytest.fixture()
def graph_client(graph_context: GraphContext, http_client: httpx.Client) -> GraphClient:
    return GraphClient(graph_context, http_client=http_client)


@pytest.fixture()
def anonymous_client(anonymous_context: GraphContext, http_client: httpx.Client) -> GraphClient:
    return GraphClient(anonymous_context, http_client=http_client)
