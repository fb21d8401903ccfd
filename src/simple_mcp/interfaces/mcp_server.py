"""MCP server exposing the ``hello_world`` tool over stdio.

Built on the official SDK's ``FastMCP``; this module only registers tools and
picks the transport.  Run it with ``simple-mcp serve``.
"""

from __future__ import annotations

import logging
from typing import Annotated

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from simple_mcp.config.schema import SimpleMCPConfig
from simple_mcp.domain.text import MAX_NAME_LENGTH, is_empty_or_whitespace
from simple_mcp.infrastructure.logging_setup import trace_context

logger = logging.getLogger(__name__)

HELLO_WORLD_TOOL = "hello_world"


def say_hello(name: str) -> str:
    """Return the greeting for ``name``.

    Raises:
        ValueError: ``name`` is blank or longer than ``MAX_NAME_LENGTH``.
    """
    if is_empty_or_whitespace(name):
        raise ValueError("name is required")
    if len(name) > MAX_NAME_LENGTH:
        raise ValueError(f"name must be at most {MAX_NAME_LENGTH} characters")
    return f"Hello, {name}!"


def build_server(config: SimpleMCPConfig) -> FastMCP:
    """Create the FastMCP server and register its tools."""
    server = FastMCP(config.server.name)

    @server.tool(name=HELLO_WORLD_TOOL, description="Say hello to someone")
    def hello_world(
        name: Annotated[str, Field(description="Name of the person to greet")],
    ) -> str:
        with trace_context():
            logger.info("%s called", HELLO_WORLD_TOOL)
            return say_hello(name)

    return server


def run_stdio(config: SimpleMCPConfig) -> None:
    """Serve over stdin/stdout until the client disconnects."""
    server = build_server(config)
    logger.info(
        "Starting MCP server %r v%s on stdio", config.server.name, config.server.version,
    )
    server.run(transport="stdio")
    logger.info("bye")
