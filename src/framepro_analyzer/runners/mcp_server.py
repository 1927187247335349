"""FramePro analyzer MCP stdio server.

Publishes the four analysis tools over the Model Context Protocol. Tool calls
run synchronously inside the handler; any :class:`AnalyzerError` is raised
back to the SDK, which reports it to the client as an error result.

Usage::

    framepro-mcp                       # defaults from conf/config.yaml
    framepro-mcp -o data_dir=/captures # Hydra-style overrides
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from framepro_analyzer.config import AnalyzerSettings, configure_logging, load_config
from framepro_analyzer.errors import AnalyzerError
from framepro_analyzer.runners.tools import TOOL_DEFINITIONS, invoke_tool, render_result

logger = logging.getLogger(__name__)


def list_tool_specs() -> list[Tool]:
    return [
        Tool(name=d.name, description=d.description, inputSchema=dict(d.input_schema))
        for d in TOOL_DEFINITIONS
    ]


def build_server(settings: AnalyzerSettings) -> Server:
    """Create the MCP server with tool handlers bound to ``settings``."""

    server: Server = Server(settings.server_name, version=settings.server_version)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return list_tool_specs()

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[TextContent]:
        try:
            result = invoke_tool(name, arguments, settings)
        except AnalyzerError as exc:
            logger.warning("Tool '%s' failed: %s", name, exc)
            raise
        return [TextContent(type="text", text=render_result(result))]

    return server


async def serve(settings: AnalyzerSettings) -> None:
    server = build_server(settings)
    logger.info(
        "MCP server start | name=%s tools=%d data_dir=%s",
        settings.server_name,
        len(TOOL_DEFINITIONS),
        settings.data_dir,
    )
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main(argv: list[str] | None = None) -> int:  # pragma: no cover - process entry
    parser = argparse.ArgumentParser(description="FramePro Performance Analyzer MCP server (stdio).")
    parser.add_argument(
        "-o",
        "--override",
        action="append",
        default=None,
        help="Config override in key=value form (e.g., data_dir=/captures). May be repeated.",
    )
    args = parser.parse_args(argv)

    cfg = load_config(args.override)
    configure_logging(cfg)
    asyncio.run(serve(AnalyzerSettings.from_config(cfg)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
