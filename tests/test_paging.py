from __future__ import annotations

import logging

import pytest

from graph_api_binding.adapters.base import DecodeError
from graph_api_binding.core.decoder import EntityDecoder
from graph_api_binding.core.paging import PagedList, PagingParameters, build_query_params, parse_envelope
from graph_api_binding.core.registry import default_registry
from graph_api_binding.models import Page, Reference


@pytest.fixture()
def decoder() -> EntityDecoder:
    return EntityDecoder(default_registry())


def test_from_url_extracts_cursor_parameters():
    cursor = PagingParameters.from_url("https://graph.facebook.com/v2.2/738140579/likes?fields=id,name&limit=25&offset=50&access_token=secret")

    assert cursor == PagingParameters(limit=25, offset=50)
    assert build_query_params(cursor) == {"limit": "25", "offset": "50"}


def test_from_url_keeps_opaque_cursors_and_time_bounds():
    cursor = PagingParameters.from_url("https://graph.facebook.com/v2.2/me/feed?limit=10&until=1414706000&after=QVFIUmx1")

    assert cursor.limit == 10
    assert cursor.until == 1414706000
    assert cursor.after == "QVFIUmx1"
    assert list(build_query_params(cursor)) == ["limit", "until", "after"]


def test_from_url_without_cursor_keys_returns_none(caplog):
    with caplog.at_level(logging.WARNING, logger="graph_api_binding.core.paging"):
        cursor = PagingParameters.from_url("https://graph.facebook.com/v2.2/me/likes?fields=id&__paging_token=abc")

    assert cursor is None
    assert any("no recognised cursor" in record.getMessage() for record in caplog.records)


def test_from_url_rejects_non_integer_limit():
    with pytest.raises(DecodeError, match="limit"):
        PagingParameters.from_url("https://graph.facebook.com/v2.2/me/likes?limit=many")


def test_build_query_params_of_none_is_empty():
    assert build_query_params(None) == {}
    assert PagingParameters().is_empty


def test_parse_envelope_with_paging(decoder, load_fixture):
    pages = parse_envelope(load_fixture("pages_liked.json"), Page, decoder)

    assert isinstance(pages, PagedList)
    assert len(pages) == 2
    assert pages[1].likes == 54213
    assert pages.previous_page == PagingParameters(limit=2, offset=0)
    assert pages.next_page == PagingParameters(limit=2, offset=4)
    assert pages.has_next and pages.has_previous
    assert pages.total_count is None


def test_parse_envelope_without_paging(decoder, load_fixture):
    likes = parse_envelope(load_fixture("likes.json"), Reference, decoder)

    assert [reference.id for reference in likes] == ["1533260333", "1322461024", "738140579"]
    assert likes.previous_page is None
    assert likes.next_page is None
    assert not likes.has_next


def test_parse_envelope_reads_summary_total_count(decoder):
    payload = {"data": [{"id": "1", "name": "Someone"}], "summary": {"total_count": 312}}

    likes = parse_envelope(payload, Reference, decoder)

    assert likes.total_count == 312
    assert len(likes) == 1


def test_parse_envelope_empty_data(decoder):
    likes = parse_envelope({"data": []}, Reference, decoder)

    assert likes.data == ()
    assert likes.next_page is None


def test_parse_envelope_requires_data(decoder):
    with pytest.raises(DecodeError, match="'data'"):
        parse_envelope({"paging": {}}, Reference, decoder)


def test_parse_envelope_rejects_malformed_paging(decoder):
    with pytest.raises(DecodeError, match="paging"):
        parse_envelope({"data": [], "paging": "next"}, Reference, decoder)


def test_parse_envelope_rejects_fractional_total_count(decoder):
    with pytest.raises(DecodeError, match="total_count"):
        parse_envelope({"data": [], "summary": {"total_count": 12.7}}, Reference, decoder)


def test_parse_envelope_accepts_integral_float_total_count(decoder):
    likes = parse_envelope({"data": [], "summary": {"total_count": 12.0}}, Reference, decoder)

    assert likes.total_count == 12
