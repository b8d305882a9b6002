"""Binary fetcher for downloadable content renditions."""

import mimetypes
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

import httpx


DEFAULT_MIME_TYPE = "application/octet-stream"


@dataclass
class FetchedBlob:
    """Downloaded bytes with their detected media type."""
    data: bytes
    mime_type: str


def detect_mime_type(url: str, content_type: Optional[str] = None) -> str:
    """
    Detect the media type of a download.

    The response Content-Type header wins; otherwise the type is guessed
    from the URL path.

    Args:
        url: Download URL
        content_type: Content-Type response header, if any

    Returns:
        Media type without parameters
    """
    if content_type:
        media_type = content_type.split(";")[0].strip()
        if media_type and media_type != DEFAULT_MIME_TYPE:
            return media_type

    guessed, _ = mimetypes.guess_type(urlparse(url).path)
    return guessed or DEFAULT_MIME_TYPE


async def fetch_blob(
    url: str,
    timeout: float = 30.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FetchedBlob:
    """
    Download a binary rendition such as an image.

    Args:
        url: URL to fetch
        timeout: Request timeout in seconds
        transport: Optional httpx transport, used to substitute the network in tests

    Returns:
        FetchedBlob with the raw bytes and detected media type
    """
    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True, transport=transport) as client:
        response = await client.get(url)
        response.raise_for_status()

        return FetchedBlob(
            data=response.content,
            mime_type=detect_mime_type(str(response.url), response.headers.get("content-type")),
        )
