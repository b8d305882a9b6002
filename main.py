"""Entry point for the Graphlit MCP server when run from a source checkout."""

from src.graphlit_mcp.main import main


if __name__ == "__main__":
    main()
