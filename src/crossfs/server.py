"""MCP stdio server exposing the built-in tools."""

from __future__ import annotations

import json
import logging
from typing import Any

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from . import __version__
from .config import AppConfig
from .tools import ToolContext, ToolRegistry, register_default_tools
from .tools.platform import PlatformProfile

logger = logging.getLogger(__name__)


class ToolCallError(Exception):
    """A tool returned an error result; surfaced to the client as isError."""


def render_result(result: dict[str, Any]) -> list[types.TextContent]:
    """Serialize a handler result, raising for error results."""
    if "error" in result:
        raise ToolCallError(json.dumps(result, indent=2, default=str))
    return [types.TextContent(type="text", text=json.dumps(result, indent=2, default=str))]


def list_tool_specs(registry: ToolRegistry) -> list[types.Tool]:
    return [
        types.Tool(
            name=defn["name"],
            description=defn.get("description", ""),
            inputSchema=defn.get("parameters", {"type": "object", "properties": {}}),
        )
        for defn in registry.get_definitions()
    ]


async def dispatch(registry: ToolRegistry, name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
    if not registry.has_tool(name):
        raise ToolCallError(f"Unknown tool: {name}")
    result = await registry.call_tool(name, arguments or {})
    return render_result(result)


def build_registry(config: AppConfig, profile: PlatformProfile) -> ToolRegistry:
    registry = ToolRegistry()
    ctx = ToolContext.from_config(config, profile)
    register_default_tools(registry, ctx, disabled=config.tools.disabled)
    return registry


def create_server(config: AppConfig, profile: PlatformProfile) -> Server:
    registry = build_registry(config, profile)
    server: Server = Server(config.server.name, version=__version__)

    @server.list_tools()
    async def _list_tools() -> list[types.Tool]:
        return list_tool_specs(registry)

    @server.call_tool()
    async def _call_tool(name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        return await dispatch(registry, name, arguments)

    return server


async def run_stdio(config: AppConfig, profile: PlatformProfile) -> None:
    server = create_server(config, profile)
    logger.info("Cross-platform filesystem MCP server running on %s", profile.name)
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
