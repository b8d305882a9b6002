"""Secondary fetches outside the platform API."""

from .web import FetchedBlob, detect_mime_type, fetch_blob

__all__ = ["FetchedBlob", "detect_mime_type", "fetch_blob"]
