import asyncio
import json
import sys
from pathlib import Path

import httpx
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tkpreview.core.errors import CollectionEmpty, RecordNotFound, UpstreamFailure
from tkpreview.services.notion import NotionGateway
from tkpreview.services.resolver import resolve_record
from tkpreview.settings import AppSettings


class StubSource:
    """Records every query and answers with canned pages."""

    def __init__(self, results=None):
        self.results = list(results or [])
        self.calls = []

    async def query(self, *, filter=None, sorts=None, page_size=None):
        self.calls.append({"filter": filter, "sorts": sorts, "page_size": page_size})
        return self.results


def _page(page_id, short_id="Bloom.1012"):
    return {
        "id": page_id,
        "last_edited_time": "2024-01-05T09:07:00.000Z",
        "properties": {"tkid1": {"type": "formula", "formula": {"type": "string", "string": short_id}}},
    }


def test_resolve_by_id_filters_on_short_id():
    source = StubSource([_page("first"), _page("second")])
    record = asyncio.run(resolve_record(source, "Bloom.1012"))
    assert record.id == "first"
    assert source.calls == [
        {
            "filter": {"property": "tkid1", "formula": {"string": {"equals": "Bloom.1012"}}},
            "sorts": None,
            "page_size": None,
        }
    ]


def test_resolve_without_id_takes_last_edited():
    source = StubSource([_page("latest")])
    record = asyncio.run(resolve_record(source, None))
    assert record.id == "latest"
    assert source.calls == [
        {
            "filter": None,
            "sorts": [{"timestamp": "last_edited_time", "direction": "descending"}],
            "page_size": 1,
        }
    ]


def test_empty_id_behaves_like_no_id():
    source = StubSource([_page("latest")])
    asyncio.run(resolve_record(source, ""))
    assert source.calls[0]["page_size"] == 1


def test_no_match_raises_record_not_found():
    with pytest.raises(RecordNotFound) as excinfo:
        asyncio.run(resolve_record(StubSource([]), "Bloom.1012"))
    assert excinfo.value.banner == "No record found for ID: Bloom.1012"


def test_empty_collection_raises_collection_empty():
    with pytest.raises(CollectionEmpty):
        asyncio.run(resolve_record(StubSource([]), None))


def _gateway(handler):
    settings = AppSettings(_env_file=None, NOTION_TOKEN="secret-token", DATABASE_ID="db123")
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return NotionGateway.from_settings(settings, http_client=http_client)


def test_gateway_posts_database_query():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["auth"] = request.headers.get("authorization")
        seen["version"] = request.headers.get("notion-version")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"object": "list", "results": [_page("p1")], "has_more": False})

    async def scenario():
        gateway = _gateway(handler)
        try:
            return await resolve_record(gateway, "Bloom.1012")
        finally:
            await gateway.aclose()

    record = asyncio.run(scenario())
    assert record.id == "p1"
    assert seen["method"] == "POST"
    assert seen["path"] == "/v1/databases/db123/query"
    assert seen["auth"] == "Bearer secret-token"
    assert seen["version"] == "2022-06-28"
    assert seen["body"] == {"filter": {"property": "tkid1", "formula": {"string": {"equals": "Bloom.1012"}}}}


def test_gateway_wraps_api_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            404,
            json={"object": "error", "status": 404, "code": "object_not_found", "message": "Could not find database"},
        )

    async def scenario():
        gateway = _gateway(handler)
        try:
            await gateway.query(page_size=1)
        finally:
            await gateway.aclose()

    with pytest.raises(UpstreamFailure) as excinfo:
        asyncio.run(scenario())
    assert "Could not find database" in excinfo.value.banner


def test_gateway_wraps_transport_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async def scenario():
        gateway = _gateway(handler)
        try:
            await gateway.query(page_size=1)
        finally:
            await gateway.aclose()

    with pytest.raises(UpstreamFailure) as excinfo:
        asyncio.run(scenario())
    assert excinfo.value.banner == "Error: connection refused"


def test_gateway_does_not_retry_rate_limited_queries():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.path)
        return httpx.Response(
            429,
            headers={"retry-after": "0"},
            json={"object": "error", "status": 429, "code": "rate_limited", "message": "Rate limited"},
        )

    async def scenario():
        gateway = _gateway(handler)
        try:
            await gateway.query(page_size=1)
        finally:
            await gateway.aclose()

    with pytest.raises(UpstreamFailure) as excinfo:
        asyncio.run(scenario())
    assert calls == ["/v1/databases/db123/query"]
    assert "Rate limited" in excinfo.value.banner


def test_gateway_wraps_non_json_responses():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>gateway maintenance</html>", headers={"content-type": "text/html"})

    async def scenario():
        gateway = _gateway(handler)
        try:
            await gateway.query(page_size=1)
        finally:
            await gateway.aclose()

    with pytest.raises(UpstreamFailure) as excinfo:
        asyncio.run(scenario())
    assert excinfo.value.banner.startswith("Error: ")
