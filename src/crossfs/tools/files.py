"""Single-file tools: read, write, delete, stat."""

from __future__ import annotations

import os
import stat
from datetime import datetime, timezone
from typing import Any

from .context import ToolContext
from .platform import PlatformFamily

READ_FILE_DEFINITION: dict[str, Any] = {
    "name": "read_file",
    "description": "Read contents of a text file",
    "parameters": {
        "type": "object",
        "properties": {
            "path": {"type": "string", "description": "File path (relative to home directory or absolute)"},
            "encoding": {"type": "string", "description": "File encoding (default: utf-8)"},
        },
        "required": ["path"],
    },
}

WRITE_FILE_DEFINITION: dict[str, Any] = {
    "name": "write_file",
    "description": "Write content to a file. Creates parent directories if needed. Overwrites existing files.",
    "parameters": {
        "type": "object",
        "properties": {
            "path": {"type": "string", "description": "File path"},
            "content": {"type": "string", "description": "Content to write"},
            "encoding": {"type": "string", "description": "File encoding (default: utf-8)"},
        },
        "required": ["path", "content"],
    },
}

DELETE_FILE_DEFINITION: dict[str, Any] = {
    "name": "delete_file",
    "description": "Delete a file",
    "parameters": {
        "type": "object",
        "properties": {
            "path": {"type": "string", "description": "File path"},
        },
        "required": ["path"],
    },
}

FILE_INFO_DEFINITION: dict[str, Any] = {
    "name": "get_file_info",
    "description": "Get information about a file or directory",
    "parameters": {
        "type": "object",
        "properties": {
            "path": {"type": "string", "description": "File or directory path"},
        },
        "required": ["path"],
    },
}


def _iso(timestamp: float) -> str:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).isoformat()


async def handle_read_file(ctx: ToolContext, path: str, encoding: str = "utf-8", **_: Any) -> dict[str, Any]:
    resolved = str(ctx.validate(path))
    if not os.path.isfile(resolved):
        return {"error": f"File not found: {resolved}"}
    try:
        size = os.path.getsize(resolved)
        if size > ctx.max_read_bytes:
            return {"error": f"File too large to read: {size} bytes (limit {ctx.max_read_bytes})"}
        with open(resolved, encoding=encoding, errors="replace") as f:
            content = f.read()
    except (OSError, LookupError) as e:
        return {"error": f"Failed to read file: {e}"}
    return {"path": resolved, "content": content, "size_bytes": size}


async def handle_write_file(
    ctx: ToolContext, path: str, content: str, encoding: str = "utf-8", **_: Any
) -> dict[str, Any]:
    resolved = str(ctx.validate(path))
    try:
        os.makedirs(os.path.dirname(resolved), exist_ok=True)
        with open(resolved, "w", encoding=encoding) as f:
            f.write(content)
    except (OSError, LookupError) as e:
        return {"error": f"Failed to write file: {e}"}
    return {"status": "ok", "path": resolved, "chars_written": len(content)}


async def handle_delete_file(ctx: ToolContext, path: str, **_: Any) -> dict[str, Any]:
    resolved = str(ctx.validate(path))
    try:
        os.unlink(resolved)
    except OSError as e:
        return {"error": f"Failed to delete file: {e}"}
    return {"status": "ok", "deleted": resolved}


async def handle_file_info(ctx: ToolContext, path: str, **_: Any) -> dict[str, Any]:
    resolved = str(ctx.validate(path))
    try:
        st = os.stat(resolved)
    except OSError as e:
        return {"error": f"Failed to get file info: {e}"}

    # st_birthtime only exists on some platforms; st_ctime is the closest fallback
    created = getattr(st, "st_birthtime", st.st_ctime)
    info: dict[str, Any] = {
        "path": resolved,
        "type": "directory" if stat.S_ISDIR(st.st_mode) else "file",
        "size_bytes": st.st_size,
        "created": _iso(created),
        "modified": _iso(st.st_mtime),
        "accessed": _iso(st.st_atime),
        "permissions": oct(stat.S_IMODE(st.st_mode)),
        "platform": ctx.profile.name,
    }
    if ctx.profile.family is not PlatformFamily.WINDOWS:
        info["owner"] = f"{st.st_uid}:{st.st_gid}"
    return info
