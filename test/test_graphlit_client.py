"""Tests for the Graphlit SDK adapter."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

import pytest
from graphlit_api.exceptions import GraphQLClientError
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from graphlit_mcp.upstream import GraphlitClient, GraphlitError
from graphlit_mcp.upstream import graphlit as graphlit_module


class Response(BaseModel):
    """Stand-in for a generated SDK response model."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ContentRow(Response):
    id: str
    file_type: Optional[str] = None


class GetContent(Response):
    content: Optional[ContentRow] = None


class FeedResults(Response):
    results: Optional[List[Optional[Dict[str, Any]]]] = None


class QueryFeeds(Response):
    feeds: Optional[FeedResults] = None


class ContentDone(Response):
    result: Optional[bool] = None


class IsContentDone(Response):
    is_content_done: Optional[ContentDone] = None


class Usage(Response):
    credits: Optional[Dict[str, Any]] = None


class HttpClient:
    def __init__(self):
        self.closed = 0

    async def aclose(self) -> None:
        self.closed += 1


class SdkClient:
    """Generated client double: canned responses by operation name."""

    def __init__(self, responses: Dict[str, Any], failure: Optional[Exception] = None):
        self.responses = responses
        self.failure = failure
        self.calls: List[Tuple[str, dict]] = []
        self.http_client = HttpClient()

    def __getattr__(self, name: str):
        if name.startswith("_"):
            raise AttributeError(name)

        async def operation(**kwargs):
            self.calls.append((name, kwargs))
            if self.failure is not None:
                raise self.failure
            return self.responses.get(name)

        return operation


class Sdk:
    def __init__(self, client: SdkClient):
        self.client = client


def make_client(config, responses=None, failure=None) -> Tuple[GraphlitClient, SdkClient]:
    sdk_client = SdkClient(responses or {}, failure)
    return GraphlitClient(config, sdk=Sdk(sdk_client)), sdk_client


class TestGraphlitClient:
    """Operation dispatch and response handling."""

    async def test_get_content(self, config) -> None:
        client, sdk_client = make_client(config, {
            "get_content": GetContent(content=ContentRow(id="c1", file_type="DOCUMENT")),
        })

        async with client:
            content = await client.get_content("c1")

        assert content == {"id": "c1", "fileType": "DOCUMENT"}
        assert sdk_client.calls == [("get_content", {"id": "c1"})]
        assert sdk_client.http_client.closed == 1

    async def test_results_skip_nulls(self, config) -> None:
        client, _ = make_client(config, {
            "query_feeds": QueryFeeds(feeds=FeedResults(results=[{"id": "f1"}, None, {"id": "f2"}])),
        })

        assert await client.query_feeds({"limit": 10}) == [{"id": "f1"}, {"id": "f2"}]

    async def test_missing_response(self, config) -> None:
        client, _ = make_client(config)

        assert await client.get_content("gone") is None
        assert await client.query_feeds() == []

    async def test_is_content_done(self, config) -> None:
        client, _ = make_client(config, {
            "is_content_done": IsContentDone(is_content_done=ContentDone(result=True)),
        })

        assert await client.is_content_done("c1") is True

    async def test_none_variables_dropped(self, config) -> None:
        client, sdk_client = make_client(config)

        assert await client.search_web("graphlit") == []
        assert sdk_client.calls == [("search_web", {"text": "graphlit"})]

    async def test_references(self, config) -> None:
        client, sdk_client = make_client(config)

        await client.remove_contents_from_collection(["c1", "c2"], "col1")

        assert sdk_client.calls == [(
            "remove_contents_from_collection",
            {"contents": [{"id": "c1"}, {"id": "c2"}], "collection": {"id": "col1"}},
        )]

    async def test_usage_start_date(self, config) -> None:
        client, sdk_client = make_client(config, {"query_credits": Usage(credits={"credits": 1.5})})
        start = datetime(2024, 1, 1, tzinfo=timezone.utc)

        assert await client.query_project_credits(start, "PT24H") == {"credits": 1.5}
        assert sdk_client.calls == [(
            "query_credits",
            {"start_date": "2024-01-01T00:00:00+00:00", "duration": "PT24H"},
        )]

    async def test_graphql_errors(self, config) -> None:
        client, _ = make_client(config, failure=GraphQLClientError("rate limited"))

        with pytest.raises(GraphlitError, match="^rate limited$"):
            await client.ingest_uri("https://example.com")

    def test_sdk_from_settings(self, config, monkeypatch) -> None:
        created = []

        def build(**kwargs):
            created.append(kwargs)
            return Sdk(SdkClient({}))

        monkeypatch.setattr(graphlit_module, "Graphlit", build)

        GraphlitClient(config)

        assert created == [{
            "api_uri": config.api_uri,
            "organization_id": "org-1",
            "environment_id": "env-1",
            "jwt_secret": "test-secret",
        }]
