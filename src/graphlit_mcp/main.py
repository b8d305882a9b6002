"""Entry point for the Graphlit MCP server."""

import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.routing import Mount

from .config import connectors, settings, validate_startup
from .server import BasicAuthMiddleware, GraphlitMCP, create_server

# Custom logging format
LOG_FORMAT = "[%(asctime)s] %(levelname)-8s %(message)s"
DATE_FORMAT = "%m/%d/%y %H:%M:%S"

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO"):
    """Configure unified logging format for all loggers."""
    # stdout carries the stdio transport, so logs always go to stderr
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    # Configure root logger
    root = logging.getLogger()
    root.setLevel(level.upper())
    root.handlers = [handler]

    # Reduce noise from httpx
    logging.getLogger("httpx").setLevel(logging.WARNING)


def build_http_app(mcp: GraphlitMCP) -> Starlette:
    """Mount the streamable HTTP transport behind basic auth."""

    @asynccontextmanager
    async def lifespan(app):
        async with mcp.session_manager.run():
            logger.info("Server initialization complete!")
            yield
        logger.info("Server shutdown complete")

    # streamable_http_app() creates the session manager used by the lifespan
    mcp_app = mcp.streamable_http_app()

    return Starlette(
        debug=False,
        lifespan=lifespan,
        routes=[
            Mount("/", app=mcp_app),
        ],
        middleware=[Middleware(BasicAuthMiddleware, config=settings)],
    )


def run_http(mcp: GraphlitMCP):
    """Serve the MCP endpoint over HTTP with uvicorn."""
    app = build_http_app(mcp)

    logger.info(
        f"Starting Graphlit MCP server on http://{settings.http_host}:{settings.http_port}"
    )
    logger.info(
        "MCP endpoint: http://%s:%s%s",
        settings.http_host,
        settings.http_port,
        mcp.settings.streamable_http_path,
    )
    if not settings.is_http_auth_enabled():
        logger.warning("HTTP basic auth disabled")

    # Configure uvicorn to use our logging format
    log_config = uvicorn.config.LOGGING_CONFIG.copy()
    log_config["formatters"]["default"]["fmt"] = LOG_FORMAT
    log_config["formatters"]["default"]["datefmt"] = DATE_FORMAT
    log_config["formatters"]["access"]["fmt"] = LOG_FORMAT
    log_config["formatters"]["access"]["datefmt"] = DATE_FORMAT

    uvicorn.run(
        app,
        host=settings.http_host,
        port=settings.http_port,
        log_level=settings.log_level.lower(),
        log_config=log_config,
    )


def main():
    """Validate the deployment and run the MCP server on the configured transport."""
    configure_logging(settings.log_level)
    validate_startup(settings, connectors)

    mcp = create_server(settings, connectors)

    if settings.transport == "stdio":
        logger.info("Starting Graphlit MCP server on stdio")
        mcp.run("stdio")
    elif settings.transport == "streamable-http":
        run_http(mcp)
    else:
        logger.error(f"Unknown transport: {settings.transport}")
        sys.exit(2)


if __name__ == "__main__":
    main()
