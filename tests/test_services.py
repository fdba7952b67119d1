from __future__ import annotations

import httpx

import graph_api_binding
from graph_api_binding.config import GraphSettings
from graph_api_binding.models import Reference
from graph_api_binding.operations import LikeOperations, PageOperations
from graph_api_binding.services import GraphServices


def test_from_settings_wires_context_and_operations(http_client):
    settings = GraphSettings(access_token="fileToken", api_version="v2.2")

    services = GraphServices.from_settings(settings, http_client=http_client)

    assert services.is_authorized
    assert services.context.base_url == "https://graph.facebook.com/v2.2/"
    assert isinstance(services.pages, PageOperations)
    assert isinstance(services.likes, LikeOperations)
    assert services.pages.client is services.client
    assert services.likes.client is services.client
    assert services.pages is services.pages


def test_services_share_transport(transport, http_client, load_fixture):
    transport.reply_json(load_fixture("likes.json"))
    services = GraphServices.from_settings(GraphSettings(), access_token="runtimeToken", http_client=http_client)

    likes = services.likes.get_likes("123456789")

    assert likes[2] == Reference("738140579", "Craig Walls")
    assert transport.last.headers["Authorization"] == "OAuth runtimeToken"


def test_services_without_token_are_not_authorized(monkeypatch):
    monkeypatch.delenv("GRAPH_API_ACCESS_TOKEN", raising=False)

    services = GraphServices.from_settings(GraphSettings())

    assert not services.is_authorized


def test_close_closes_shared_client(transport):
    client = httpx.Client(transport=httpx.MockTransport(transport))
    services = GraphServices.from_settings(GraphSettings(access_token="t"), http_client=client)

    services.close()

    assert client.is_closed


def test_package_exports():
    assert graph_api_binding.GraphServices is GraphServices
    assert graph_api_binding.__version__
    for name in graph_api_binding.__all__:
        assert hasattr(graph_api_binding, name)
