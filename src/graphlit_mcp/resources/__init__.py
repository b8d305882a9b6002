"""Resource addressing module initialization."""

from .registry import ResourceKind, ResourceRegistry, parse_uri, resource_uri

__all__ = ["ResourceKind", "ResourceRegistry", "parse_uri", "resource_uri"]
