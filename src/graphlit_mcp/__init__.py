"""Graphlit MCP server: knowledge-platform resources and tools over MCP."""

__version__ = "1.0.0"
