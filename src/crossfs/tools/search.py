"""File name search tool."""

from __future__ import annotations

import os
from typing import Any

from .commands import build_search_command
from .context import ToolContext
from .shell import run_shell

DEFINITION: dict[str, Any] = {
    "name": "search_files",
    "description": "Search for files by name pattern",
    "parameters": {
        "type": "object",
        "properties": {
            "path": {"type": "string", "description": "Directory to search in"},
            "pattern": {"type": "string", "description": "Search pattern (supports wildcards, e.g. '*.py')"},
            "max_depth": {"type": "integer", "description": "Maximum search depth (default: 3)"},
        },
        "required": ["path", "pattern"],
    },
}


async def handle(
    ctx: ToolContext, path: str, pattern: str, max_depth: int | None = None, **_: Any
) -> dict[str, Any]:
    directory = ctx.validate(path)
    if not os.path.isdir(directory):
        return {"error": f"Not a directory: {directory}"}

    depth = ctx.default_max_depth if max_depth is None else max_depth
    command = build_search_command(directory, pattern, depth, ctx.profile)
    result = await run_shell(command, ctx, str(directory))
    if "error" in result:
        return {"error": f"Search failed: {result['error']}"}

    files = [line.strip() for line in result["stdout"].splitlines() if line.strip()]
    return {"path": str(directory), "pattern": pattern, "files": files, "count": len(files)}
