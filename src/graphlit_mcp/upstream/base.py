"""Protocol and factory types for the remote platform client."""

from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Protocol


Record = Dict[str, Any]


class GraphlitError(Exception):
    """Raised when the data API rejects an operation."""


class GraphlitApi(Protocol):
    """Remote operations used by the tool and resource handlers."""

    async def query_contents(self, filter: Optional[Record] = None) -> List[Record]: ...

    async def get_content(self, content_id: str) -> Optional[Record]: ...

    async def delete_content(self, content_id: str) -> Optional[Record]: ...

    async def is_content_done(self, content_id: str) -> Optional[bool]: ...

    async def query_feeds(self, filter: Optional[Record] = None) -> List[Record]: ...

    async def get_feed(self, feed_id: str) -> Optional[Record]: ...

    async def create_feed(self, feed: Record) -> Optional[Record]: ...

    async def delete_feed(self, feed_id: str) -> Optional[Record]: ...

    async def is_feed_done(self, feed_id: str) -> Optional[bool]: ...

    async def query_collections(self, filter: Optional[Record] = None) -> List[Record]: ...

    async def get_collection(self, collection_id: str) -> Optional[Record]: ...

    async def create_collection(
        self, name: str, contents: Optional[List[str]] = None
    ) -> Optional[Record]: ...

    async def add_contents_to_collections(
        self, contents: List[str], collections: List[str]
    ) -> List[Record]: ...

    async def remove_contents_from_collection(
        self, contents: List[str], collection_id: str
    ) -> Optional[Record]: ...

    async def delete_collection(self, collection_id: str) -> Optional[Record]: ...

    async def query_workflows(self, filter: Optional[Record] = None) -> List[Record]: ...

    async def get_workflow(self, workflow_id: str) -> Optional[Record]: ...

    async def query_specifications(self, filter: Optional[Record] = None) -> List[Record]: ...

    async def get_specification(self, specification_id: str) -> Optional[Record]: ...

    async def query_conversations(self, filter: Optional[Record] = None) -> List[Record]: ...

    async def get_conversation(self, conversation_id: str) -> Optional[Record]: ...

    async def get_project(self) -> Optional[Record]: ...

    async def query_project_credits(
        self, start_date: datetime, duration: str
    ) -> Optional[Record]: ...

    async def query_project_tokens(
        self, start_date: datetime, duration: str
    ) -> Optional[Record]: ...

    async def retrieve_sources(
        self,
        prompt: str,
        filter: Optional[Record] = None,
        retrieval_strategy: Optional[Record] = None,
        reranking_strategy: Optional[Record] = None,
    ) -> List[Record]: ...

    async def ingest_uri(self, uri: str) -> Optional[Record]: ...

    async def ingest_text(
        self, name: str, text: str, text_type: str, is_synchronous: bool = True
    ) -> Optional[Record]: ...

    async def ingest_encoded_file(
        self, name: str, data: str, mime_type: str
    ) -> Optional[Record]: ...

    async def screenshot_page(self, uri: str) -> Optional[Record]: ...

    async def describe_image(self, prompt: str, uri: str) -> Optional[Record]: ...

    async def map_web(self, uri: str) -> Optional[List[str]]: ...

    async def search_web(self, text: str, service: Optional[str] = None) -> List[Record]: ...

    async def query_slack_channels(self, properties: Record) -> Optional[List[str]]: ...

    async def query_microsoft_teams_teams(self, properties: Record) -> List[Record]: ...

    async def query_microsoft_teams_channels(
        self, properties: Record, team_id: str
    ) -> List[Record]: ...

    async def query_share_point_libraries(self, properties: Record) -> List[Record]: ...

    async def query_share_point_folders(
        self, properties: Record, library_id: str
    ) -> List[Record]: ...

    async def close(self) -> None: ...


# Builds a fresh client for each tool or resource invocation
ClientFactory = Callable[[], GraphlitApi]
