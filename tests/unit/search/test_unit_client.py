# tests/unit/search/test_unit_client.py — v1
"""Tests for search/client.py and search/client_factory.py."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock

import httpx
import pytest

from relocator.config.settings import ConfigurationError, Settings
from relocator.search.client import HttpSearchClient
from relocator.search.client_factory import create_search_client


def _transport(handler) -> httpx.MockTransport:
    return httpx.MockTransport(handler)


class TestHttpSearchClient:
    @pytest.mark.asyncio
    async def test_posts_query_to_index(self):
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            seen["content_type"] = request.headers["content-type"]
            return httpx.Response(200, json={"hits": {"hits": []}})

        client = HttpSearchClient(
            "https://search.example.com/", "meadow", transport=_transport(handler),
        )
        result = await client.search({"size": 1})

        assert result == {"hits": {"hits": []}}
        assert seen["method"] == "POST"
        assert seen["url"] == "https://search.example.com/meadow/_search"
        assert seen["body"] == {"size": 1}
        assert seen["content_type"] == "application/json"

    @pytest.mark.asyncio
    async def test_signer_headers_are_sent(self):
        signer = AsyncMock()
        signer.sign.return_value = {
            "Content-Type": "application/json",
            "Authorization": "AWS4-HMAC-SHA256 test",
        }
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("authorization")
            return httpx.Response(200, json={"hits": {"hits": []}})

        client = HttpSearchClient(
            "https://search.example.com", "meadow",
            signer=signer, transport=_transport(handler),
        )
        await client.search({"size": 1})

        assert seen["auth"] == "AWS4-HMAC-SHA256 test"
        method, url, body, _ = signer.sign.call_args.args
        assert method == "POST"
        assert url == client.url
        assert json.loads(body) == {"size": 1}

    @pytest.mark.asyncio
    async def test_error_status_raises(self):
        client = HttpSearchClient(
            "https://search.example.com", "meadow",
            transport=_transport(lambda r: httpx.Response(403, json={"message": "denied"})),
        )
        with pytest.raises(httpx.HTTPStatusError):
            await client.search({})

    @pytest.mark.asyncio
    async def test_non_json_raises_value_error(self):
        client = HttpSearchClient(
            "https://search.example.com", "meadow",
            transport=_transport(lambda r: httpx.Response(200, text="<html>")),
        )
        with pytest.raises(ValueError):
            await client.search({})

    @pytest.mark.asyncio
    async def test_non_object_json_raises_value_error(self):
        client = HttpSearchClient(
            "https://search.example.com", "meadow",
            transport=_transport(lambda r: httpx.Response(200, json=[1, 2])),
        )
        with pytest.raises(ValueError, match="not a JSON object"):
            await client.search({})

    @pytest.mark.asyncio
    async def test_connection_error_propagates(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        client = HttpSearchClient(
            "https://search.example.com", "meadow", transport=_transport(handler),
        )
        with pytest.raises(httpx.ConnectError):
            await client.search({})


class TestClientFactory:
    def test_host_only_endpoint_gets_https(self):
        settings = Settings(
            _env_file=None,
            elasticsearch_endpoint="search-meadow.us-east-1.es.amazonaws.com",
            index_name="dc-v2-file-set",
        )
        client = create_search_client(settings)
        assert isinstance(client, HttpSearchClient)
        assert client.url == (
            "https://search-meadow.us-east-1.es.amazonaws.com/dc-v2-file-set/_search"
        )

    def test_missing_endpoint(self):
        settings = Settings(_env_file=None, elasticsearch_endpoint="", index_name="x")
        with pytest.raises(ConfigurationError, match="ELASTICSEARCH_ENDPOINT"):
            create_search_client(settings)
