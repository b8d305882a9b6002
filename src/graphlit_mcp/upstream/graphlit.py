"""Graphlit data API client for the MCP adapter.

Wraps the generated async client of the ``graphlit-client`` SDK. Responses
are dumped to plain camelCase records so handlers see the GraphQL shape.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from graphlit import Graphlit
from graphlit_api.exceptions import GraphQLClientError
from pydantic import BaseModel

from ..config import Settings, settings as default_settings
from .base import GraphlitError, Record


logger = logging.getLogger(__name__)


def _references(ids: Optional[List[str]]) -> Optional[List[Dict[str, str]]]:
    if ids is None:
        return None
    return [{"id": entity_id} for entity_id in ids]


def _record(response: Optional[BaseModel]) -> Record:
    if response is None:
        return {}
    return response.model_dump(mode="json", by_alias=True)


class GraphlitClient:
    """Client for the Graphlit GraphQL data API."""

    def __init__(self, config: Optional[Settings] = None, sdk: Optional[Graphlit] = None):
        """
        Initialize Graphlit client.

        Args:
            config: Settings carrying the platform credentials (global settings if omitted)
            sdk: Prebuilt SDK instance, used to substitute the network in tests
        """
        config = config or default_settings
        if sdk is None:
            sdk = Graphlit(
                api_uri=config.api_uri,
                organization_id=config.organization_id,
                environment_id=config.environment_id,
                jwt_secret=config.jwt_secret,
            )
        self.sdk = sdk

    async def execute(self, operation: str, **variables: Any) -> Record:
        """
        Run one generated SDK operation.

        Args:
            operation: Snake-case operation name on the SDK client
            **variables: Operation variables; None values are not sent

        Returns:
            The response data as a camelCase record

        Raises:
            GraphlitError: If the API rejects the operation
        """
        method = getattr(self.sdk.client, operation)
        logger.debug(f"Graphlit operation: {operation}")
        try:
            response = await method(**{k: v for k, v in variables.items() if v is not None})
        except GraphQLClientError as e:
            raise GraphlitError(str(e)) from e
        return _record(response)

    async def _results(self, operation: str, field: str, **variables: Any) -> List[Record]:
        data = await self.execute(operation, **variables)
        return [result for result in ((data.get(field) or {}).get("results") or []) if result is not None]

    # Contents

    async def query_contents(self, filter: Optional[Record] = None) -> List[Record]:
        return await self._results("query_contents", "contents", filter=filter)

    async def get_content(self, content_id: str) -> Optional[Record]:
        data = await self.execute("get_content", id=content_id)
        return data.get("content")

    async def delete_content(self, content_id: str) -> Optional[Record]:
        data = await self.execute("delete_content", id=content_id)
        return data.get("deleteContent")

    async def is_content_done(self, content_id: str) -> Optional[bool]:
        data = await self.execute("is_content_done", id=content_id)
        return (data.get("isContentDone") or {}).get("result")

    # Feeds

    async def query_feeds(self, filter: Optional[Record] = None) -> List[Record]:
        return await self._results("query_feeds", "feeds", filter=filter)

    async def get_feed(self, feed_id: str) -> Optional[Record]:
        data = await self.execute("get_feed", id=feed_id)
        return data.get("feed")

    async def create_feed(self, feed: Record) -> Optional[Record]:
        data = await self.execute("create_feed", feed=feed)
        return data.get("createFeed")

    async def delete_feed(self, feed_id: str) -> Optional[Record]:
        data = await self.execute("delete_feed", id=feed_id)
        return data.get("deleteFeed")

    async def is_feed_done(self, feed_id: str) -> Optional[bool]:
        data = await self.execute("is_feed_done", id=feed_id)
        return (data.get("isFeedDone") or {}).get("result")

    # Collections

    async def query_collections(self, filter: Optional[Record] = None) -> List[Record]:
        return await self._results("query_collections", "collections", filter=filter)

    async def get_collection(self, collection_id: str) -> Optional[Record]:
        data = await self.execute("get_collection", id=collection_id)
        return data.get("collection")

    async def create_collection(self, name: str, contents: Optional[List[str]] = None) -> Optional[Record]:
        collection: Record = {"name": name}
        if contents is not None:
            collection["contents"] = _references(contents)
        data = await self.execute("create_collection", collection=collection)
        return data.get("createCollection")

    async def add_contents_to_collections(self, contents: List[str], collections: List[str]) -> List[Record]:
        data = await self.execute(
            "add_contents_to_collections",
            contents=_references(contents),
            collections=_references(collections),
        )
        return data.get("addContentsToCollections") or []

    async def remove_contents_from_collection(self, contents: List[str], collection_id: str) -> Optional[Record]:
        data = await self.execute(
            "remove_contents_from_collection",
            contents=_references(contents),
            collection={"id": collection_id},
        )
        return data.get("removeContentsFromCollection")

    async def delete_collection(self, collection_id: str) -> Optional[Record]:
        data = await self.execute("delete_collection", id=collection_id)
        return data.get("deleteCollection")

    # Workflows, specifications, conversations

    async def query_workflows(self, filter: Optional[Record] = None) -> List[Record]:
        return await self._results("query_workflows", "workflows", filter=filter)

    async def get_workflow(self, workflow_id: str) -> Optional[Record]:
        data = await self.execute("get_workflow", id=workflow_id)
        return data.get("workflow")

    async def query_specifications(self, filter: Optional[Record] = None) -> List[Record]:
        return await self._results("query_specifications", "specifications", filter=filter)

    async def get_specification(self, specification_id: str) -> Optional[Record]:
        data = await self.execute("get_specification", id=specification_id)
        return data.get("specification")

    async def query_conversations(self, filter: Optional[Record] = None) -> List[Record]:
        return await self._results("query_conversations", "conversations", filter=filter)

    async def get_conversation(self, conversation_id: str) -> Optional[Record]:
        data = await self.execute("get_conversation", id=conversation_id)
        return data.get("conversation")

    # Project

    async def get_project(self) -> Optional[Record]:
        data = await self.execute("get_project")
        return data.get("project")

    async def query_project_credits(self, start_date: datetime, duration: str) -> Optional[Record]:
        data = await self.execute("query_credits", start_date=start_date.isoformat(), duration=duration)
        return data.get("credits")

    async def query_project_tokens(self, start_date: datetime, duration: str) -> Optional[Record]:
        data = await self.execute("query_tokens", start_date=start_date.isoformat(), duration=duration)
        return data.get("tokens")

    # Retrieval, ingestion and extraction

    async def retrieve_sources(
        self,
        prompt: str,
        filter: Optional[Record] = None,
        retrieval_strategy: Optional[Record] = None,
        reranking_strategy: Optional[Record] = None,
    ) -> List[Record]:
        return await self._results(
            "retrieve_sources",
            "retrieveSources",
            prompt=prompt,
            filter=filter,
            retrieval_strategy=retrieval_strategy,
            reranking_strategy=reranking_strategy,
        )

    async def ingest_uri(self, uri: str) -> Optional[Record]:
        data = await self.execute("ingest_uri", uri=uri)
        return data.get("ingestUri")

    async def ingest_text(self, name: str, text: str, text_type: str, is_synchronous: bool = True) -> Optional[Record]:
        data = await self.execute(
            "ingest_text",
            text=text,
            name=name,
            text_type=text_type,
            is_synchronous=is_synchronous,
        )
        return data.get("ingestText")

    async def ingest_encoded_file(self, name: str, data: str, mime_type: str) -> Optional[Record]:
        result = await self.execute("ingest_encoded_file", name=name, data=data, mime_type=mime_type)
        return result.get("ingestEncodedFile")

    async def screenshot_page(self, uri: str) -> Optional[Record]:
        data = await self.execute("screenshot_page", uri=uri)
        return data.get("screenshotPage")

    async def describe_image(self, prompt: str, uri: str) -> Optional[Record]:
        data = await self.execute("describe_image", prompt=prompt, uri=uri)
        return data.get("describeImage")

    async def map_web(self, uri: str) -> Optional[List[str]]:
        data = await self.execute("map_web", uri=uri)
        return (data.get("mapWeb") or {}).get("results")

    async def search_web(self, text: str, service: Optional[str] = None) -> List[Record]:
        return await self._results("search_web", "searchWeb", text=text, service=service)

    # Connector discovery

    async def query_slack_channels(self, properties: Record) -> Optional[List[str]]:
        data = await self.execute("query_slack_channels", properties=properties)
        return (data.get("slackChannels") or {}).get("results")

    async def query_microsoft_teams_teams(self, properties: Record) -> List[Record]:
        return await self._results("query_microsoft_teams_teams", "microsoftTeamsTeams", properties=properties)

    async def query_microsoft_teams_channels(self, properties: Record, team_id: str) -> List[Record]:
        return await self._results(
            "query_microsoft_teams_channels",
            "microsoftTeamsChannels",
            properties=properties,
            team_id=team_id,
        )

    async def query_share_point_libraries(self, properties: Record) -> List[Record]:
        return await self._results("query_share_point_libraries", "sharePointLibraries", properties=properties)

    async def query_share_point_folders(self, properties: Record, library_id: str) -> List[Record]:
        return await self._results(
            "query_share_point_folders",
            "sharePointFolders",
            properties=properties,
            library_id=library_id,
        )

    async def close(self) -> None:
        """Close the SDK's HTTP client."""
        await self.sdk.client.http_client.aclose()

    async def __aenter__(self) -> "GraphlitClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
