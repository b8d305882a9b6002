"""MCP server implementation with FastMCP."""

import base64
import logging
from typing import Any, Dict, Iterable, List, Optional

from mcp import types
from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from mcp.server.lowlevel.helper_types import ReadResourceContents
from pydantic import AnyUrl
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from .config import ConnectorSettings, MissingCredentialsError, Settings, terminate
from .config import connectors as default_connectors
from .config import settings as default_settings
from .connectors import fetch_blob
from .resources import ResourceRegistry
from .tools import ToolContext, register_tools
from .upstream import ClientFactory, GraphlitClient


logger = logging.getLogger(__name__)

SERVER_NAME = "Graphlit MCP Server"


def root_cause(error: BaseException) -> BaseException:
    """Follow the exception chain down to the error raised by the handler."""
    while error.__cause__ is not None:
        error = error.__cause__
    return error


class BasicAuthMiddleware(BaseHTTPMiddleware):
    """Middleware for HTTP Basic Authentication."""

    def __init__(self, app, config: Optional[Settings] = None):
        super().__init__(app)
        self.config = config or default_settings

    def _unauthorized(self) -> Response:
        return Response(
            content="Unauthorized",
            status_code=401,
            headers={"WWW-Authenticate": 'Basic realm="Graphlit MCP Server"'},
        )

    async def dispatch(self, request: Request, call_next):
        # Check if auth is enabled
        if not self.config.is_http_auth_enabled():
            return await call_next(request)

        # Get Authorization header
        auth_header = request.headers.get("Authorization")

        if not auth_header or not auth_header.startswith("Basic "):
            return self._unauthorized()

        try:
            # Decode credentials
            encoded_credentials = auth_header.split(" ")[1]
            decoded_credentials = base64.b64decode(encoded_credentials).decode("utf-8")
            username, password = decoded_credentials.split(":", 1)
        except (IndexError, ValueError):
            return self._unauthorized()

        # Verify credentials
        if (
            username == self.config.http_auth_username
            and password == self.config.http_auth_password
        ):
            return await call_next(request)
        return self._unauthorized()


class GraphlitMCP(FastMCP):
    """FastMCP server whose resources come from a ResourceRegistry.

    Tool failures surface as ``Error: <message>`` results. A tool that lacks
    connector credentials stops the process instead.
    """

    def __init__(self, name: str, resource_registry: ResourceRegistry, **kwargs: Any):
        self.resource_registry = resource_registry
        super().__init__(name, **kwargs)

    async def call_tool(self, name: str, arguments: Dict[str, Any]):
        try:
            return await super().call_tool(name, arguments)
        except Exception as e:
            cause = root_cause(e)
            if isinstance(cause, MissingCredentialsError):
                terminate(str(cause))
            logger.warning(f"Tool {name} failed: {cause}")
            raise ToolError(f"Error: {cause}") from e

    async def list_resources(self) -> List[types.Resource]:
        return await self.resource_registry.list_resources()

    async def list_resource_templates(self) -> List[types.ResourceTemplate]:
        return self.resource_registry.templates()

    async def read_resource(self, uri: AnyUrl | str) -> Iterable[ReadResourceContents]:
        return await self.resource_registry.read(str(uri))


def create_server(
    config: Optional[Settings] = None,
    connector_config: Optional[ConnectorSettings] = None,
    client_factory: Optional[ClientFactory] = None,
    blob_fetcher=fetch_blob,
) -> GraphlitMCP:
    """
    Build the MCP server with its resource and tool catalogs.

    Args:
        config: Platform and server settings (defaults to the environment)
        connector_config: Connector credentials (defaults to the environment)
        client_factory: Constructs a remote client per request
        blob_fetcher: Downloads image blobs for content resources

    Returns:
        Configured server, ready to run on any transport
    """
    config = config or default_settings
    connector_config = connector_config or default_connectors
    if client_factory is None:
        client_factory = lambda: GraphlitClient(config)

    registry = ResourceRegistry(
        client_factory,
        listing_limit=config.listing_limit,
        blob_fetcher=blob_fetcher,
    )
    mcp = GraphlitMCP(
        SERVER_NAME,
        registry,
        host=config.http_host,
        port=config.http_port,
    )

    register_tools(ToolContext(
        mcp=mcp,
        settings=config,
        connectors=connector_config,
        client_factory=client_factory,
    ))

    logger.debug(f"Registered resource schemes: {', '.join(registry.get_schemes())}")
    return mcp
