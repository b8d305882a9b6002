"""Retrieval, collection and lifecycle tools."""

from typing import Annotated, List, Optional

from pydantic import Field

from ..formatting import format_results
from ..models import ContentResult, SourceResult
from .base import ContentType, FileType, ToolContext, entity_id, references, to_json


def register(ctx: ToolContext) -> None:
    """Register content and collection tools."""

    @ctx.tool(
        "retrieveSources",
        """Retrieve relevant content sources from Graphlit knowledge base. Do *not* use for retrieving content by content identifier - retrieve content resource instead, with URI 'contents://{id}'.
        Accepts a search prompt, optional recency filter (defaults to all time), and optional content type and file type filters.
        Also accepts optional feed and collection identifiers to filter content by.
        Prompt should be optimized for vector search, via text embeddings. Rewrite prompt as appropriate for higher relevance to search results.
        Returns the ranked content sources, including their content resource URI to retrieve the complete Markdown text.""",
    )
    async def retrieve_sources(
        prompt: Annotated[str, Field(description="Search prompt for content retrieval.")],
        inLast: Annotated[Optional[str], Field(description="Recency filter for content 'in last' timespan, optional. Should be ISO 8601 format, for example, 'PT1H' for last hour, 'P1D' for last day, 'P7D' for last week, 'P30D' for last month. Doesn't support weeks or months explicitly.")] = None,
        contentType: Annotated[Optional[ContentType], Field(description="Content type filter, optional.")] = None,
        fileType: Annotated[Optional[FileType], Field(description="File type filter, optional.")] = None,
        feeds: Annotated[Optional[List[str]], Field(description="Feed identifiers to filter content by, optional.")] = None,
        collections: Annotated[Optional[List[str]], Field(description="Collection identifiers to filter content by, optional.")] = None,
    ) -> str:
        content_filter = {
            "searchType": "HYBRID",
            "feeds": references(feeds),
            "collections": references(collections),
            "inLast": inLast,
            "types": [contentType] if contentType else None,
            "fileTypes": [fileType] if fileType else None,
        }

        async with ctx.client() as client:
            sources = await client.retrieve_sources(
                prompt,
                content_filter,
                retrieval_strategy={"type": "CHUNK", "disableFallback": True},
                reranking_strategy={"serviceType": "COHERE"},
            )

        return format_results(
            (SourceResult.from_remote(source) for source in sources),
            wrapper="sources",
            element="source",
        )

    @ctx.tool(
        "queryContents",
        """Query contents in Graphlit knowledge base by name, content type and file type.
        Accepts an optional name filter, optional content type and file type filters, and an optional result limit.
        Returns matching contents with their content resource URIs, most recent first.""",
    )
    async def query_contents(
        name: Annotated[Optional[str], Field(description="Content name filter, optional.")] = None,
        contentType: Annotated[Optional[ContentType], Field(description="Content type filter, optional.")] = None,
        fileType: Annotated[Optional[FileType], Field(description="File type filter, optional.")] = None,
        limit: Annotated[Optional[int], Field(description="Maximum number of contents to return, optional. Defaults to 100.")] = None,
    ) -> str:
        content_filter = {
            "name": name,
            "types": [contentType] if contentType else None,
            "fileTypes": [fileType] if fileType else None,
            "limit": limit or ctx.settings.listing_limit,
        }

        async with ctx.client() as client:
            contents = await client.query_contents(content_filter)

        return format_results(
            (ContentResult.from_remote(content) for content in contents),
            wrapper="contents",
            element="content",
        )

    @ctx.tool(
        "createCollection",
        """Create a collection.
        Accepts a collection name, and optional list of content identifiers to add to collection.
        Returns the collection identifier""",
    )
    async def create_collection(
        name: Annotated[str, Field(description="Collection name.")],
        contents: Annotated[Optional[List[str]], Field(description="Content identifiers to add to collection, optional.")] = None,
    ) -> str:
        async with ctx.client() as client:
            collection = await client.create_collection(name, contents)
        return to_json(entity_id(collection))

    @ctx.tool(
        "addContentsToCollection",
        """Add contents to a collection.
        Accepts a collection identifier and a list of content identifiers to add to collection.
        Returns the collection identifier.""",
    )
    async def add_contents_to_collection(
        id: Annotated[str, Field(description="Collection identifier.")],
        contents: Annotated[List[str], Field(description="Content identifiers to add to collection.")],
    ) -> str:
        async with ctx.client() as client:
            await client.add_contents_to_collections(contents, [id])
        return to_json({"id": id})

    @ctx.tool(
        "removeContentsFromCollection",
        """Remove contents from collection.
        Accepts a collection identifier and a list of content identifiers to remove from collection.
        Returns the collection identifier.""",
    )
    async def remove_contents_from_collection(
        id: Annotated[str, Field(description="Collection identifier.")],
        contents: Annotated[List[str], Field(description="Content identifiers to remove from collection.")],
    ) -> str:
        async with ctx.client() as client:
            collection = await client.remove_contents_from_collection(contents, id)
        return to_json(entity_id(collection))

    @ctx.tool(
        "deleteCollection",
        """Delete a collection. Does *not* delete the content in the collection.
        Accepts a collection identifier.
        Returns the collection identifier and collection state, i.e. Deleted.""",
    )
    async def delete_collection(
        id: Annotated[str, Field(description="Collection identifier.")],
    ) -> str:
        async with ctx.client() as client:
            return to_json(await client.delete_collection(id))

    @ctx.tool(
        "deleteFeed",
        """Delete a feed and all of its ingested content.
        Accepts a feed identifier which was returned from one of the ingestion tools, like ingestGoogleDriveFiles.
        Content deletion will happen asynchronously.
        Returns the feed identifier and feed state, i.e. Deleted.""",
    )
    async def delete_feed(
        id: Annotated[str, Field(description="Feed identifier.")],
    ) -> str:
        async with ctx.client() as client:
            return to_json(await client.delete_feed(id))

    @ctx.tool(
        "deleteContent",
        """Delete content.
        Accepts a content identifier.
        Returns the content identifier and content state, i.e. Deleted.""",
    )
    async def delete_content(
        id: Annotated[str, Field(description="Content identifier.")],
    ) -> str:
        async with ctx.client() as client:
            return to_json(await client.delete_content(id))

    @ctx.tool(
        "isContentDone",
        """Check if content has completed asynchronous ingestion.
        Accepts a content identifier which was returned from one of the non-feed ingestion tools, like ingestUrl.
        Returns whether the content is done or not.""",
    )
    async def is_content_done(
        id: Annotated[str, Field(description="Content identifier.")],
    ) -> str:
        async with ctx.client() as client:
            return to_json({"done": await client.is_content_done(id)})

    @ctx.tool(
        "isFeedDone",
        """Check if an asynchronous feed has completed ingesting all the available content.
        Accepts a feed identifier which was returned from one of the ingestion tools, like ingestGoogleDriveFiles.
        Returns whether the feed is done or not.""",
    )
    async def is_feed_done(
        id: Annotated[str, Field(description="Feed identifier.")],
    ) -> str:
        async with ctx.client() as client:
            return to_json({"done": await client.is_feed_done(id)})
