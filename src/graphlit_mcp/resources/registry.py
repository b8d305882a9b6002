"""Registry mapping URI schemes to entity listers and dereferencers."""

import json
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

from mcp import types
from mcp.server.lowlevel.helper_types import ReadResourceContents

from ..connectors import FetchedBlob, fetch_blob
from ..formatting import format_content, format_conversation
from ..models import Content, Conversation
from ..upstream import ClientFactory, GraphlitApi, Record


logger = logging.getLogger(__name__)

URI_PATTERN = re.compile(r"^(?P<scheme>[a-z]+)://(?P<id>[^/?#]*)/?$")

USAGE_WINDOW = timedelta(hours=24)
USAGE_DURATION = "PT24H"

MARKDOWN = "text/markdown"
JSON = "application/json"

Lister = Callable[[GraphlitApi, int], Awaitable[List[types.Resource]]]
Reader = Callable[[GraphlitApi, str], Awaitable[List[ReadResourceContents]]]
BlobFetcher = Callable[[str], Awaitable[FetchedBlob]]


@dataclass
class ResourceKind:
    """One URI scheme with its listing and dereference behaviour."""
    scheme: str
    name: str
    description: str
    mime_type: str
    lister: Lister
    reader: Reader


def resource_uri(scheme: str, entity_id: str = "") -> str:
    return f"{scheme}://{entity_id}"


def parse_uri(uri: str) -> Tuple[str, str]:
    """
    Split a resource URI into scheme and entity identifier.

    Args:
        uri: URI of the form ``{scheme}://{id}``

    Returns:
        Tuple of (scheme, id); id is empty for bare scheme URIs

    Raises:
        ValueError: If the URI does not match the resource form
    """
    match = URI_PATTERN.match(str(uri))
    if not match:
        raise ValueError(f"Unsupported resource URI: {uri}")
    return match.group("scheme"), match.group("id")


def _json(value: Any) -> str:
    return json.dumps(value, indent=2)


def _named_rows(scheme: str, records: List[Record]) -> List[types.Resource]:
    return [
        types.Resource(
            uri=resource_uri(scheme, record["id"]),
            name=record.get("name") or record["id"],
        )
        for record in records
    ]


class ResourceRegistry:
    """Lists and dereferences platform entities by URI scheme."""

    def __init__(
        self,
        client_factory: ClientFactory,
        listing_limit: int = 100,
        blob_fetcher: BlobFetcher = fetch_blob,
    ):
        """
        Initialize the registry with the standard schemes.

        Args:
            client_factory: Builds a fresh remote client per call
            listing_limit: Maximum number of entities per listing
            blob_fetcher: Downloads image renditions for content dereference
        """
        self.client_factory = client_factory
        self.listing_limit = listing_limit
        self.blob_fetcher = blob_fetcher
        self._kinds: Dict[str, ResourceKind] = {}
        self._register_defaults()

    def register(self, kind: ResourceKind) -> None:
        self._kinds[kind.scheme] = kind

    def get(self, scheme: str) -> Optional[ResourceKind]:
        return self._kinds.get(scheme)

    def get_schemes(self) -> list[str]:
        return list(self._kinds.keys())

    def __len__(self) -> int:
        return len(self._kinds)

    def templates(self) -> List[types.ResourceTemplate]:
        """Resource templates advertised to the peer for discovery."""
        return [
            types.ResourceTemplate(
                uriTemplate=resource_uri(kind.scheme, "" if kind.scheme == "projects" else "{id}"),
                name=kind.name,
                description=kind.description,
                mimeType=kind.mime_type,
            )
            for kind in self._kinds.values()
        ]

    async def list_scheme(self, scheme: str) -> List[types.Resource]:
        """List one scheme; failures degrade to an empty listing."""
        kind = self._kinds.get(scheme)
        if kind is None:
            return []

        client = self.client_factory()
        try:
            return await kind.lister(client, self.listing_limit)
        except Exception as e:
            logger.error(f"Error fetching {scheme} list: {e}")
            return []
        finally:
            await client.close()

    async def list_resources(self) -> List[types.Resource]:
        """List every registered scheme, one after another."""
        resources: List[types.Resource] = []
        for scheme in self._kinds:
            resources.extend(await self.list_scheme(scheme))
        return resources

    async def read(self, uri: str) -> List[ReadResourceContents]:
        """Dereference a URI; unknown schemes and failures yield no contents."""
        try:
            scheme, entity_id = parse_uri(uri)
        except ValueError as e:
            logger.error(str(e))
            return []

        kind = self._kinds.get(scheme)
        if kind is None or (not entity_id and scheme != "projects"):
            return []

        client = self.client_factory()
        try:
            return await kind.reader(client, entity_id)
        except Exception as e:
            logger.error(f"Error fetching {scheme} resource {entity_id}: {e}")
            return []
        finally:
            await client.close()

    def _register_defaults(self) -> None:
        async def list_contents(client: GraphlitApi, limit: int) -> List[types.Resource]:
            contents = await client.query_contents({"limit": limit})
            return [
                types.Resource(
                    uri=resource_uri("contents", content["id"]),
                    name=content.get("name") or content["id"],
                    description=content.get("description") or "",
                    mimeType=content.get("mimeType") or MARKDOWN,
                )
                for content in contents
            ]

        async def read_content(client: GraphlitApi, content_id: str) -> List[ReadResourceContents]:
            record = await client.get_content(content_id)
            content = Content.model_validate(record) if record else None

            blocks = [ReadResourceContents(content=format_content(content), mime_type=MARKDOWN)]

            if content is not None and (content.file_type or "").upper() == "IMAGE":
                image_url = content.image_uri or content.master_uri
                if image_url:
                    blob = await self.blob_fetcher(image_url)
                    blocks.append(ReadResourceContents(content=blob.data, mime_type=blob.mime_type))

            return blocks

        async def list_feeds(client: GraphlitApi, limit: int) -> List[types.Resource]:
            return _named_rows("feeds", await client.query_feeds({"limit": limit}))

        async def read_feed(client: GraphlitApi, feed_id: str) -> List[ReadResourceContents]:
            feed = await client.get_feed(feed_id) or {}
            projection = {
                "id": feed.get("id"),
                "name": feed.get("name"),
                "type": feed.get("type"),
                "readCount": feed.get("readCount"),
                "creationDate": feed.get("creationDate"),
                "lastReadDate": feed.get("lastReadDate"),
                "state": feed.get("state"),
                "error": feed.get("error"),
            }
            return [ReadResourceContents(content=_json(projection), mime_type=JSON)]

        async def list_collections(client: GraphlitApi, limit: int) -> List[types.Resource]:
            return _named_rows("collections", await client.query_collections({"limit": limit}))

        async def read_collection(client: GraphlitApi, collection_id: str) -> List[ReadResourceContents]:
            collection = await client.get_collection(collection_id) or {}
            projection = {
                "id": collection.get("id"),
                "name": collection.get("name"),
                "contents": [
                    resource_uri("contents", content["id"])
                    for content in collection.get("contents") or []
                    if content is not None
                ],
            }
            return [ReadResourceContents(content=_json(projection), mime_type=JSON)]

        async def list_workflows(client: GraphlitApi, limit: int) -> List[types.Resource]:
            return _named_rows("workflows", await client.query_workflows({"limit": limit}))

        async def read_workflow(client: GraphlitApi, workflow_id: str) -> List[ReadResourceContents]:
            workflow = await client.get_workflow(workflow_id) or {}
            projection = {
                "id": workflow.get("id"),
                "name": workflow.get("name"),
                "state": workflow.get("state"),
                "creationDate": workflow.get("creationDate"),
            }
            return [ReadResourceContents(content=_json(projection), mime_type=JSON)]

        async def list_specifications(client: GraphlitApi, limit: int) -> List[types.Resource]:
            return _named_rows("specifications", await client.query_specifications({"limit": limit}))

        async def read_specification(client: GraphlitApi, specification_id: str) -> List[ReadResourceContents]:
            specification = await client.get_specification(specification_id) or {}
            projection = {
                "id": specification.get("id"),
                "name": specification.get("name"),
                "type": specification.get("type"),
                "serviceType": specification.get("serviceType"),
                "state": specification.get("state"),
                "creationDate": specification.get("creationDate"),
            }
            return [ReadResourceContents(content=_json(projection), mime_type=JSON)]

        async def list_conversations(client: GraphlitApi, limit: int) -> List[types.Resource]:
            return _named_rows("conversations", await client.query_conversations({"limit": limit}))

        async def read_conversation(client: GraphlitApi, conversation_id: str) -> List[ReadResourceContents]:
            record = await client.get_conversation(conversation_id)
            conversation = Conversation.model_validate(record) if record else None
            return [ReadResourceContents(content=format_conversation(conversation), mime_type=MARKDOWN)]

        async def list_projects(client: GraphlitApi, limit: int) -> List[types.Resource]:
            project = await client.get_project()
            if not project:
                return []
            return [types.Resource(uri=resource_uri("projects"), name=project.get("name") or "Project")]

        async def read_project(client: GraphlitApi, _project_id: str) -> List[ReadResourceContents]:
            project = await client.get_project() or {}

            start_date = datetime.now(timezone.utc) - USAGE_WINDOW
            credits = await client.query_project_credits(start_date, USAGE_DURATION)
            tokens = await client.query_project_tokens(start_date, USAGE_DURATION)

            projection = {
                "id": project.get("id"),
                "name": project.get("name"),
                "quota": project.get("quota"),
                "credits": project.get("credits"),
                "lastCreditsDate": project.get("lastCreditsDate"),
                "lastDayCredits": credits,
                "lastDayTokens": tokens,
            }
            return [ReadResourceContents(content=_json(projection), mime_type=JSON)]

        for kind in (
            ResourceKind(
                "contents", "Content",
                "Returns content metadata and complete Markdown text. Accepts content resource URI, i.e. contents://{id}, where 'id' is a content identifier.",
                MARKDOWN, list_contents, read_content,
            ),
            ResourceKind(
                "feeds", "Feed",
                "Returns feed metadata. Accepts feed resource URI, i.e. feeds://{id}, where 'id' is a feed identifier.",
                JSON, list_feeds, read_feed,
            ),
            ResourceKind(
                "collections", "Collection",
                "Returns collection metadata and list of content resources. Accepts collection resource URI, i.e. collections://{id}, where 'id' is a collection identifier.",
                JSON, list_collections, read_collection,
            ),
            ResourceKind(
                "workflows", "Workflow",
                "Returns workflow metadata. Accepts workflow resource URI, i.e. workflows://{id}, where 'id' is a workflow identifier.",
                JSON, list_workflows, read_workflow,
            ),
            ResourceKind(
                "specifications", "Specification",
                "Returns LLM specification metadata. Accepts specification resource URI, i.e. specifications://{id}, where 'id' is a specification identifier.",
                JSON, list_specifications, read_specification,
            ),
            ResourceKind(
                "conversations", "Conversation",
                "Returns conversation messages and cited sources. Accepts conversation resource URI, i.e. conversations://{id}, where 'id' is a conversation identifier.",
                MARKDOWN, list_conversations, read_conversation,
            ),
            ResourceKind(
                "projects", "Project",
                "Returns current project metadata, including credits and LLM tokens used in the last day. Accepts project resource URI, i.e. projects://.",
                JSON, list_projects, read_project,
            ),
        ):
            self.register(kind)
