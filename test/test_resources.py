"""
Tests for the resource registry.

Verifies URI parsing, listing and dereference for each scheme, and that
remote failures degrade to empty results.
"""

import base64
import json

import pytest
from pydantic import AnyUrl

from graphlit_mcp.resources import ResourceRegistry, parse_uri, resource_uri
from graphlit_mcp.upstream import GraphlitError
from mcp.shared.memory import create_connected_server_and_client_session

from conftest import FakeGraphlit


def make_registry(fake: FakeGraphlit, blob_fetcher, limit: int = 10) -> ResourceRegistry:
    return ResourceRegistry(lambda: fake, listing_limit=limit, blob_fetcher=blob_fetcher)


class TestAddressing:
    """URI construction and parsing."""

    def test_parse_uri(self) -> None:
        assert parse_uri("contents://abc123") == ("contents", "abc123")
        assert parse_uri("feeds://f1/") == ("feeds", "f1")
        assert parse_uri("projects://") == ("projects", "")

    def test_parse_invalid(self) -> None:
        with pytest.raises(ValueError):
            parse_uri("not a uri")

    def test_resource_uri(self) -> None:
        assert resource_uri("collections", "c1") == "collections://c1"
        assert resource_uri("projects") == "projects://"

    def test_schemes(self, fake, blob_fetcher) -> None:
        registry = make_registry(fake, blob_fetcher)

        assert registry.get_schemes() == [
            "contents", "feeds", "collections", "workflows",
            "specifications", "conversations", "projects",
        ]
        templates = {template.uriTemplate for template in registry.templates()}
        assert "contents://{id}" in templates
        assert "projects://" in templates


class TestListing:
    """Scheme listings."""

    async def test_feeds_listing(self, fake, blob_fetcher) -> None:
        fake.responses["query_feeds"] = [{"id": "f1", "name": "Slack [general]"}]
        registry = make_registry(fake, blob_fetcher, limit=5)

        resources = await registry.list_scheme("feeds")

        assert [(str(r.uri), r.name) for r in resources] == [("feeds://f1", "Slack [general]")]
        assert fake.called("query_feeds") == [(({"limit": 5},), {})]
        assert fake.closed == 1

    async def test_feeds_listing_failure(self, fake, blob_fetcher) -> None:
        fake.failures["query_feeds"] = GraphlitError("boom")
        registry = make_registry(fake, blob_fetcher)

        assert await registry.list_scheme("feeds") == []
        assert fake.closed == 1

    async def test_contents_listing(self, fake, blob_fetcher) -> None:
        fake.responses["query_contents"] = [
            {"id": "c1", "name": "report.pdf", "description": "Q1", "mimeType": "application/pdf"},
            {"id": "c2", "name": "notes"},
        ]
        registry = make_registry(fake, blob_fetcher)

        resources = await registry.list_scheme("contents")

        assert resources[0].mimeType == "application/pdf"
        assert resources[0].description == "Q1"
        assert resources[1].mimeType == "text/markdown"

    async def test_unknown_scheme(self, fake, blob_fetcher) -> None:
        registry = make_registry(fake, blob_fetcher)

        assert await registry.list_scheme("tweets") == []
        assert fake.calls == []

    async def test_listing_over_session(self, server, fake) -> None:
        fake.failures = {
            name: GraphlitError("unavailable")
            for name in (
                "query_contents", "query_feeds", "query_collections", "query_workflows",
                "query_specifications", "query_conversations", "get_project",
            )
        }

        async with create_connected_server_and_client_session(server._mcp_server) as client:
            result = await client.list_resources()

        assert result.resources == []


class TestDereference:
    """Reading a single resource."""

    async def test_content(self, fake, blob_fetcher) -> None:
        fake.responses["get_content"] = {
            "id": "abc123",
            "type": "FILE",
            "fileType": "DOCUMENT",
            "fileName": "report.pdf",
            "markdown": "# Report body",
        }
        registry = make_registry(fake, blob_fetcher)

        blocks = await registry.read("contents://abc123")

        assert len(blocks) == 1
        assert blocks[0].mime_type == "text/markdown"
        assert blocks[0].content.startswith("**Content ID:** abc123\n**File Type:** [DOCUMENT]")
        assert blob_fetcher.urls == []

    async def test_content_numeric_facet(self, fake, blob_fetcher) -> None:
        fake.responses["get_content"] = {
            "id": "pod1",
            "type": "FILE",
            "fileType": "AUDIO",
            "audio": {"title": "Weekly", "episode": 3},
        }
        registry = make_registry(fake, blob_fetcher)

        blocks = await registry.read("contents://pod1")

        assert len(blocks) == 1
        assert "**Episode:** 3" in blocks[0].content

    async def test_content_null_children(self, fake, blob_fetcher) -> None:
        fake.responses["get_content"] = {
            "id": "p1",
            "type": "FILE",
            "fileType": "PACKAGE",
            "children": [{"id": "k1"}, None],
            "collections": [None],
        }
        registry = make_registry(fake, blob_fetcher)

        blocks = await registry.read("contents://p1")

        assert len(blocks) == 1
        assert blocks[0].content.endswith("**Child Content:** contents://k1")
        assert "**Collection" not in blocks[0].content

    async def test_image_content(self, fake, blob_fetcher) -> None:
        fake.responses["get_content"] = {
            "id": "img1",
            "type": "FILE",
            "fileType": "IMAGE",
            "fileName": "cat.png",
            "masterUri": "https://cdn/master.png",
            "imageUri": "https://cdn/cat.png",
        }
        registry = make_registry(fake, blob_fetcher)

        blocks = await registry.read("contents://img1")

        assert len(blocks) == 2
        assert blocks[1].content == blob_fetcher.blob.data
        assert blocks[1].mime_type == "image/png"
        assert blob_fetcher.urls == ["https://cdn/cat.png"]

    async def test_image_blob_over_session(self, server, fake, blob_fetcher) -> None:
        fake.responses["get_content"] = {
            "id": "img1",
            "type": "FILE",
            "fileType": "IMAGE",
            "masterUri": "https://cdn/master.png",
        }

        async with create_connected_server_and_client_session(server._mcp_server) as client:
            result = await client.read_resource(AnyUrl("contents://img1"))

        assert len(result.contents) == 2
        assert result.contents[0].text.startswith("**Content ID:** img1")
        assert result.contents[1].blob == base64.b64encode(blob_fetcher.blob.data).decode()
        assert blob_fetcher.urls == ["https://cdn/master.png"]

    async def test_dereference_failure(self, fake, blob_fetcher) -> None:
        fake.failures["get_collection"] = GraphlitError("not found")
        registry = make_registry(fake, blob_fetcher)

        assert await registry.read("collections://missing") == []
        assert fake.closed == 1

    async def test_empty_id(self, fake, blob_fetcher) -> None:
        registry = make_registry(fake, blob_fetcher)

        assert await registry.read("feeds://") == []
        assert fake.calls == []

    async def test_collection(self, fake, blob_fetcher) -> None:
        fake.responses["get_collection"] = {
            "id": "col1",
            "name": "Reports",
            "contents": [{"id": "c1"}, None, {"id": "c2"}],
        }
        registry = make_registry(fake, blob_fetcher)

        blocks = await registry.read("collections://col1")

        assert json.loads(blocks[0].content) == {
            "id": "col1",
            "name": "Reports",
            "contents": ["contents://c1", "contents://c2"],
        }
        assert blocks[0].mime_type == "application/json"

    async def test_feed(self, fake, blob_fetcher) -> None:
        fake.responses["get_feed"] = {
            "id": "f1",
            "name": "RSS",
            "type": "RSS",
            "readCount": 3,
            "state": "ENABLED",
            "owner": {"id": "o1"},
        }
        registry = make_registry(fake, blob_fetcher)

        projection = json.loads((await registry.read("feeds://f1"))[0].content)

        assert projection["readCount"] == 3
        assert projection["state"] == "ENABLED"
        assert "owner" not in projection

    async def test_conversation(self, fake, blob_fetcher) -> None:
        fake.responses["get_conversation"] = {
            "id": "conv-1",
            "messages": [{"role": "USER", "message": "hi"}],
        }
        registry = make_registry(fake, blob_fetcher)

        blocks = await registry.read("conversations://conv-1")

        assert blocks[0].content == "**Conversation ID:** conv-1\nUSER:\nhi\n\n---\n"

    async def test_project_usage(self, fake, blob_fetcher) -> None:
        fake.responses.update({
            "get_project": {"id": "proj1", "name": "Main", "credits": 1000},
            "query_project_credits": {"credits": 12.5},
            "query_project_tokens": {"llmInputTokens": 300},
        })
        registry = make_registry(fake, blob_fetcher)

        projection = json.loads((await registry.read("projects://"))[0].content)

        assert projection["name"] == "Main"
        assert projection["lastDayCredits"] == {"credits": 12.5}
        assert projection["lastDayTokens"] == {"llmInputTokens": 300}
        (_start, duration), _ = fake.called("query_project_credits")[0]
        assert duration == "PT24H"
        assert [name for name, _, _ in fake.calls] == [
            "get_project", "query_project_credits", "query_project_tokens",
        ]
