"""MCP tool catalog."""

from . import content, extraction, feeds, ingest
from .base import ToolContext


def register_tools(ctx: ToolContext) -> None:
    """Register every tool module with the server."""
    for module in (content, feeds, ingest, extraction):
        module.register(ctx)


__all__ = ["ToolContext", "register_tools"]
