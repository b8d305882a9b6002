"""Typed views over the remote records the formatters consume.

Every field is optional, unknown fields are ignored, numbers are accepted
where text is expected and list items may be null, so a partially
populated GraphQL response always validates.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RemoteModel(BaseModel):
    """Base for remote records using camelCase wire names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )


class EntityReference(RemoteModel):
    id: str
    name: Optional[str] = None


class IssueFacet(RemoteModel):
    title: Optional[str] = None
    identifier: Optional[str] = None
    type: Optional[str] = None
    project: Optional[str] = None
    team: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    labels: Optional[List[Optional[str]]] = None


class Recipient(RemoteModel):
    name: Optional[str] = None
    email: Optional[str] = None


class EmailFacet(RemoteModel):
    subject: Optional[str] = None
    sensitivity: Optional[str] = None
    priority: Optional[str] = None
    importance: Optional[str] = None
    labels: Optional[List[Optional[str]]] = None
    to: Optional[List[Optional[Recipient]]] = None
    from_: Optional[List[Optional[Recipient]]] = Field(default=None, alias="from")
    cc: Optional[List[Optional[Recipient]]] = None
    bcc: Optional[List[Optional[Recipient]]] = None


class DocumentFacet(RemoteModel):
    title: Optional[str] = None
    author: Optional[str] = None


class AudioFacet(RemoteModel):
    title: Optional[str] = None
    author: Optional[str] = None
    episode: Optional[str] = None
    series: Optional[str] = None


class ImageFacet(RemoteModel):
    description: Optional[str] = None
    software: Optional[str] = None
    make: Optional[str] = None
    model: Optional[str] = None


class Link(RemoteModel):
    link_type: Optional[str] = None
    uri: Optional[str] = None


class Observation(RemoteModel):
    type: Optional[str] = None
    observable: Optional[EntityReference] = None


class Chunk(RemoteModel):
    index: Optional[int] = None
    text: Optional[str] = None


class Page(RemoteModel):
    index: Optional[int] = None
    chunks: Optional[List[Optional[Chunk]]] = None


class Segment(RemoteModel):
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    text: Optional[str] = None


class Frame(RemoteModel):
    index: Optional[int] = None
    text: Optional[str] = None


class Content(RemoteModel):
    """One ingested knowledge unit, as returned by the content query."""

    id: str
    type: Optional[str] = None
    file_type: Optional[str] = None
    name: Optional[str] = None
    file_name: Optional[str] = None
    description: Optional[str] = None
    mime_type: Optional[str] = None

    uri: Optional[str] = None
    master_uri: Optional[str] = None
    image_uri: Optional[str] = None
    audio_uri: Optional[str] = None

    creation_date: Optional[str] = None
    original_date: Optional[str] = None

    issue: Optional[IssueFacet] = None
    email: Optional[EmailFacet] = None
    document: Optional[DocumentFacet] = None
    audio: Optional[AudioFacet] = None
    image: Optional[ImageFacet] = None

    collections: Optional[List[Optional[EntityReference]]] = None
    parent: Optional[EntityReference] = None
    children: Optional[List[Optional[EntityReference]]] = None
    links: Optional[List[Optional[Link]]] = None
    observations: Optional[List[Optional[Observation]]] = None

    pages: Optional[List[Optional[Page]]] = None
    segments: Optional[List[Optional[Segment]]] = None
    frames: Optional[List[Optional[Frame]]] = None
    markdown: Optional[str] = None


class Citation(RemoteModel):
    index: Optional[int] = None
    text: Optional[str] = None
    content: Optional[EntityReference] = None


class ConversationMessage(RemoteModel):
    role: Optional[str] = None
    message: Optional[str] = None
    citations: Optional[List[Optional[Citation]]] = None


class Conversation(RemoteModel):
    id: str
    name: Optional[str] = None
    messages: Optional[List[Optional[ConversationMessage]]] = None


# Flat result rows rendered by the markup formatter. The ``typename`` field is
# the discriminator and is never emitted as an attribute.


class SourceResult(RemoteModel):
    """One ranked retrieval fragment."""

    typename: Literal["Source"] = Field(default="Source", alias="__typename")
    id: Optional[str] = None
    resource_uri: Optional[str] = None
    type: Optional[str] = None
    relevance: Optional[float] = None
    page_number: Optional[int] = None
    frame_number: Optional[int] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    metadata: Optional[str] = None
    text: Optional[str] = None

    @classmethod
    def from_remote(cls, source: dict) -> "SourceResult":
        """Flatten a ``retrieveSources`` result into a result row."""
        content_id = (source.get("content") or {}).get("id")
        return cls(
            id=content_id,
            resource_uri=f"contents://{content_id}" if content_id else None,
            type=source.get("type"),
            relevance=source.get("relevance"),
            page_number=source.get("pageNumber"),
            frame_number=source.get("frameNumber"),
            start_time=source.get("startTime"),
            end_time=source.get("endTime"),
            metadata=source.get("metadata"),
            text=source.get("text"),
        )


class ContentResult(RemoteModel):
    """One row of a content listing."""

    typename: Literal["Content"] = Field(default="Content", alias="__typename")
    id: Optional[str] = None
    resource_uri: Optional[str] = None
    name: Optional[str] = None
    type: Optional[str] = None
    file_type: Optional[str] = None
    mime_type: Optional[str] = None
    creation_date: Optional[str] = None
    original_date: Optional[str] = None
    text: Optional[str] = None

    @classmethod
    def from_remote(cls, content: dict) -> "ContentResult":
        """Project a ``queryContents`` result into a result row."""
        return cls(
            id=content.get("id"),
            resource_uri=f"contents://{content['id']}" if content.get("id") else None,
            name=content.get("name"),
            type=content.get("type"),
            file_type=content.get("fileType"),
            mime_type=content.get("mimeType"),
            creation_date=content.get("creationDate"),
            original_date=content.get("originalDate"),
            text=content.get("description"),
        )
