"""Shared plumbing for tool handlers."""

import json
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Callable, Dict, List, Literal, Optional

from mcp.server.fastmcp import FastMCP

from ..config import ConnectorSettings, Settings
from ..upstream import ClientFactory, GraphlitApi


logger = logging.getLogger(__name__)

DEFAULT_READ_LIMIT = 100

ContentType = Literal["EMAIL", "EVENT", "FILE", "ISSUE", "MESSAGE", "PAGE", "POST", "TEXT"]
FileType = Literal[
    "ANIMATION", "AUDIO", "CODE", "DATA", "DOCUMENT", "DRAWING", "EMAIL",
    "GEOMETRY", "IMAGE", "PACKAGE", "POINT_CLOUD", "SHAPE", "VIDEO",
]
TextType = Literal["PLAIN", "MARKDOWN", "HTML"]
SearchService = Literal["TAVILY", "EXA"]


def to_json(value: Any) -> str:
    """Pretty-print a tool payload."""
    return json.dumps(value, indent=2)


def references(ids: Optional[List[str]]) -> Optional[List[Dict[str, str]]]:
    """Convert identifiers to entity references."""
    if ids is None:
        return None
    return [{"id": identifier} for identifier in ids]


def entity_id(entity: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Payload carrying only the identifier of a created entity."""
    return {"id": (entity or {}).get("id")}


@dataclass
class ToolContext:
    """Dependencies shared by the handlers of one server."""
    mcp: FastMCP
    settings: Settings
    connectors: ConnectorSettings
    client_factory: ClientFactory

    def tool(self, name: str, description: str) -> Callable[[Callable], Callable]:
        """Register a handler under its published name, unless the tool is disabled."""

        def decorator(fn: Callable) -> Callable:
            if self.settings.is_tool_enabled(name):
                self.mcp.add_tool(fn, name=name, description=description)
            else:
                logger.debug(f"Tool {name} disabled by configuration")
            return fn

        return decorator

    @asynccontextmanager
    async def client(self) -> AsyncIterator[GraphlitApi]:
        """Construct a request-scoped remote client and close it afterwards."""
        client = self.client_factory()
        try:
            yield client
        finally:
            await client.close()
