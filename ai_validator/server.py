"""
AI Validator - MCP Server Entry Point

FastMCP server with STDIO and SSE transport support.
"""

import argparse
from fastmcp import FastMCP

from ai_validator.config import get_settings
from ai_validator.logging_config import configure_logging
from ai_validator.tools import validate_answer


def create_app() -> FastMCP:
    """Create and configure the MCP application."""
    mcp = FastMCP(
        name="ai-validator",
        instructions="Confidence scoring for AI answers against their retrieved sources",
    )
    mcp.tool()(validate_answer.validate_answer)
    return mcp


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="AI Validator MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default=None,
        help="Transport protocol (default: from env)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port for SSE transport (default: from env)"
    )
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings.log)
    transport = args.transport or settings.mcp.transport
    port = args.port or settings.mcp.port

    mcp = create_app()

    if transport == "stdio":
        mcp.run(transport="stdio")
    else:
        mcp.run(transport="sse", host=settings.mcp.host, port=port)


if __name__ == "__main__":
    main()
