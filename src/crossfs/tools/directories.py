"""Directory tools and the working-directory report."""

from __future__ import annotations

import os
import shutil
from datetime import datetime, timezone
from typing import Any

from .context import ToolContext
from .platform import PlatformFamily

LIST_DIRECTORY_DEFINITION: dict[str, Any] = {
    "name": "list_directory",
    "description": "List contents of a directory",
    "parameters": {
        "type": "object",
        "properties": {
            "path": {"type": "string", "description": "Directory path (relative to home directory or absolute)"},
            "show_hidden": {"type": "boolean", "description": "Show hidden files (default: false)"},
        },
        "required": ["path"],
    },
}

CREATE_DIRECTORY_DEFINITION: dict[str, Any] = {
    "name": "create_directory",
    "description": "Create a directory (and parent directories if needed)",
    "parameters": {
        "type": "object",
        "properties": {
            "path": {"type": "string", "description": "Directory path"},
        },
        "required": ["path"],
    },
}

DELETE_DIRECTORY_DEFINITION: dict[str, Any] = {
    "name": "delete_directory",
    "description": "Delete a directory and its contents",
    "parameters": {
        "type": "object",
        "properties": {
            "path": {"type": "string", "description": "Directory path"},
            "recursive": {"type": "boolean", "description": "Delete recursively (default: true)"},
        },
        "required": ["path"],
    },
}

CURRENT_DIRECTORY_DEFINITION: dict[str, Any] = {
    "name": "get_current_directory",
    "description": "Get the current working directory",
    "parameters": {"type": "object", "properties": {}},
}


def _is_hidden(name: str, ctx: ToolContext) -> bool:
    if name.startswith("."):
        return True
    return ctx.profile.family is PlatformFamily.WINDOWS and name.startswith("$")


async def handle_list_directory(ctx: ToolContext, path: str, show_hidden: bool = False, **_: Any) -> dict[str, Any]:
    resolved = str(ctx.validate(path))
    if not os.path.isdir(resolved):
        return {"error": f"Not a directory: {resolved}"}

    entries: list[dict[str, Any]] = []
    try:
        with os.scandir(resolved) as it:
            for entry in sorted(it, key=lambda e: e.name):
                if not show_hidden and _is_hidden(entry.name, ctx):
                    continue
                try:
                    st = entry.stat()
                except OSError:
                    continue
                is_dir = entry.is_dir()
                entries.append(
                    {
                        "name": entry.name,
                        "type": "directory" if is_dir else "file",
                        "size_bytes": 0 if is_dir else st.st_size,
                        "modified": datetime.fromtimestamp(st.st_mtime, tz=timezone.utc).isoformat(),
                    }
                )
    except OSError as e:
        return {"error": f"Failed to list directory: {e}"}

    return {"path": resolved, "entries": entries, "count": len(entries)}


async def handle_create_directory(ctx: ToolContext, path: str, **_: Any) -> dict[str, Any]:
    resolved = str(ctx.validate(path))
    try:
        os.makedirs(resolved, exist_ok=True)
    except OSError as e:
        return {"error": f"Failed to create directory: {e}"}
    return {"status": "ok", "path": resolved}


async def handle_delete_directory(ctx: ToolContext, path: str, recursive: bool = True, **_: Any) -> dict[str, Any]:
    resolved = str(ctx.validate(path))
    if not os.path.isdir(resolved):
        return {"error": f"Not a directory: {resolved}"}
    try:
        if recursive:
            shutil.rmtree(resolved)
        else:
            os.rmdir(resolved)
    except OSError as e:
        return {"error": f"Failed to delete directory: {e}"}
    return {"status": "ok", "deleted": resolved}


async def handle_current_directory(ctx: ToolContext, **_: Any) -> dict[str, Any]:
    return {"cwd": os.getcwd(), "platform": ctx.profile.name, "home": ctx.base_dir}
