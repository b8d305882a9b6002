"""Direct ingestion and web tools."""

import base64
import mimetypes
from pathlib import Path
from typing import Annotated

from pydantic import Field

from .base import SearchService, TextType, ToolContext, entity_id, to_json


DEFAULT_MIME_TYPE = "application/octet-stream"


def encode_file(file_path: str) -> tuple[str, str, str]:
    """Read a local file and return its name, base64 payload and MIME type."""
    path = Path(file_path)
    mime_type, _ = mimetypes.guess_type(path.name)
    data = base64.b64encode(path.read_bytes()).decode("ascii")
    return path.name, data, mime_type or DEFAULT_MIME_TYPE


def register(ctx: ToolContext) -> None:
    """Register direct ingestion and web tools."""

    @ctx.tool(
        "ingestUrl",
        """Ingests content from URL into Graphlit knowledge base.
        Can scrape web pages, and can ingest individual Word documents, PDFs, audio recordings, videos, images, or any other unstructured data.
        Executes asynchronously and returns the content identifier.""",
    )
    async def ingest_url(
        url: Annotated[str, Field(description="URL of the content to ingest.")],
    ) -> str:
        async with ctx.client() as client:
            content = await client.ingest_uri(url)
        return to_json(entity_id(content))

    @ctx.tool(
        "ingestText",
        """Ingests text as content into Graphlit knowledge base.
        Accepts a name for the content object, the text itself, and an optional text type (Plain, Markdown, Html). Defaults to Markdown text type.
        Can use for storing long-term textual memories or the output from LLM or other tools as content resources, which can be later searched or retrieved.
        Executes *synchronously* and returns the content identifier.""",
    )
    async def ingest_text(
        name: Annotated[str, Field(description="Name of the content object.")],
        text: Annotated[str, Field(description="Text to ingest.")],
        textType: Annotated[TextType, Field(description="Text type, optional. Defaults to Markdown.")] = "MARKDOWN",
    ) -> str:
        async with ctx.client() as client:
            content = await client.ingest_text(name, text, textType, is_synchronous=True)
        return to_json(entity_id(content))

    @ctx.tool(
        "ingestFile",
        """Ingests local file into Graphlit knowledge base.
        Accepts the path to the file in the local filesystem.
        Executes asynchronously and returns the content identifier.""",
    )
    async def ingest_file(
        filePath: Annotated[str, Field(description="Path to the file in the local filesystem.")],
    ) -> str:
        name, data, mime_type = encode_file(filePath)
        async with ctx.client() as client:
            content = await client.ingest_encoded_file(name, data, mime_type)
        return to_json(entity_id(content))

    @ctx.tool(
        "screenshotPage",
        """Screenshots web page from URL.
        Executes *synchronously* and returns the content identifier.""",
    )
    async def screenshot_page(
        url: Annotated[str, Field(description="Web page URL.")],
    ) -> str:
        async with ctx.client() as client:
            content = await client.screenshot_page(url)
        return to_json(entity_id(content))

    @ctx.tool(
        "webMap",
        """Enumerates the web pages at or beneath the provided URL using web sitemap.
        Does *not* ingest web pages into Graphlit knowledge base.
        Accepts web page URL as string.
        Returns list of mapped URIs from web site.""",
    )
    async def web_map(
        url: Annotated[str, Field(description="Web page URL.")],
    ) -> str:
        async with ctx.client() as client:
            uris = await client.map_web(url)
        return to_json(uris)

    @ctx.tool(
        "webSearch",
        """Performs web search based on search query. Format the search query as what would be entered into a Google search.
        Does *not* ingest pages into Graphlit knowledge base.
        Accepts search query as string, and optional search service type.
        Search service types: Tavily, Exa. Defaults to Tavily.
        Returns URL, title and relevant Markdown text from resulting web pages.""",
    )
    async def web_search(
        search: Annotated[str, Field(description="Search query.")],
        searchService: Annotated[SearchService, Field(description="Search service, optional. Defaults to Tavily.")] = "TAVILY",
    ) -> str:
        async with ctx.client() as client:
            results = await client.search_web(search, searchService)
        return to_json(results)
