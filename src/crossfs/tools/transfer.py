"""Move and copy tools."""

from __future__ import annotations

import os
import shutil
from typing import Any

from .commands import build_copy_command
from .context import ToolContext
from .shell import run_shell

MOVE_DEFINITION: dict[str, Any] = {
    "name": "move_item",
    "description": "Move or rename a file or directory",
    "parameters": {
        "type": "object",
        "properties": {
            "source": {"type": "string", "description": "Source path"},
            "destination": {"type": "string", "description": "Destination path"},
        },
        "required": ["source", "destination"],
    },
}

COPY_DEFINITION: dict[str, Any] = {
    "name": "copy_item",
    "description": "Copy a file or directory",
    "parameters": {
        "type": "object",
        "properties": {
            "source": {"type": "string", "description": "Source path"},
            "destination": {"type": "string", "description": "Destination path"},
        },
        "required": ["source", "destination"],
    },
}


async def handle_move(ctx: ToolContext, source: str, destination: str, **_: Any) -> dict[str, Any]:
    src = str(ctx.validate(source))
    dst = str(ctx.validate(destination))
    try:
        shutil.move(src, dst)
    except OSError as e:
        return {"error": f"Failed to move item: {e}"}
    return {"status": "ok", "source": src, "destination": dst}


async def handle_copy(ctx: ToolContext, source: str, destination: str, **_: Any) -> dict[str, Any]:
    src = ctx.validate(source)
    dst = ctx.validate(destination)

    if not os.path.isdir(src):
        try:
            shutil.copyfile(src, dst)
        except OSError as e:
            return {"error": f"Failed to copy item: {e}"}
        return {"status": "ok", "source": str(src), "destination": str(dst), "type": "file"}

    command = build_copy_command(src, dst, True, ctx.profile)
    result = await run_shell(command, ctx, os.path.dirname(str(src)))
    if "error" in result:
        return {"error": f"Failed to copy item: {result['error']}"}
    if result["exit_code"] != 0:
        detail = result["stderr"].strip() or f"exit code {result['exit_code']}"
        return {"error": f"Failed to copy item: {detail}"}
    return {"status": "ok", "source": str(src), "destination": str(dst), "type": "directory"}
