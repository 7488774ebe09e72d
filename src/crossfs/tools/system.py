"""Platform information tool."""

from __future__ import annotations

import os
import platform
from typing import Any

from .context import ToolContext

DEFINITION: dict[str, Any] = {
    "name": "get_platform_info",
    "description": "Get information about the current platform and allowed paths",
    "parameters": {"type": "object", "properties": {}},
}


async def handle(ctx: ToolContext, **_: Any) -> dict[str, Any]:
    profile = ctx.profile
    return {
        "os": platform.system() or "unknown",
        "profile": profile.name,
        "family": profile.family.value,
        "architecture": platform.machine(),
        "python_version": platform.python_version(),
        "home_directory": ctx.base_dir,
        "current_directory": os.getcwd(),
        "shell": " ".join([profile.shell_interpreter, profile.shell_flag]),
        "case_sensitive_paths": profile.case_sensitive,
        "allowed_paths": list(profile.allowed_path_prefixes),
    }
