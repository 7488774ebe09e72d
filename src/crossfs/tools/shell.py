"""Shell command execution tool."""

from __future__ import annotations

import asyncio
import logging
import os
import time
from typing import Any

from .context import ToolContext
from .platform import PlatformProfile
from .sanitizer import sanitize_command

logger = logging.getLogger(__name__)

DEFINITION: dict[str, Any] = {
    "name": "execute_command",
    "description": (
        "Execute a shell command (platform-aware) and return stdout, stderr, and exit code. "
        "Command separators, pipes, redirection, and substitution are rejected."
    ),
    "parameters": {
        "type": "object",
        "properties": {
            "command": {"type": "string", "description": "Command to execute"},
            "cwd": {"type": "string", "description": "Working directory (optional, must be in an allowed path)"},
        },
        "required": ["command"],
    },
}


def _truncate(text: str, limit: int) -> str:
    if len(text) > limit:
        return text[:limit] + "\n... (truncated)"
    return text


async def _spawn(command: str, profile: PlatformProfile, cwd: str) -> asyncio.subprocess.Process:
    if profile.posix_shell:
        return await asyncio.create_subprocess_exec(
            *profile.shell_argv(command),
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=cwd,
        )
    # cmd.exe parses its own command line; argv quoting would mangle it.
    return await asyncio.create_subprocess_shell(
        command,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        cwd=cwd,
    )


async def run_shell(command: str, ctx: ToolContext, cwd: str) -> dict[str, Any]:
    """Run an already sanitized or builder-produced command line.

    Returns stdout/stderr/exit_code, or an error dict on timeout or spawn
    failure.
    """
    cmd_short = command[:120] + ("..." if len(command) > 120 else "")
    logger.info("[shell] START: %s (timeout=%ss, cwd=%s)", cmd_short, ctx.shell_timeout, cwd)
    t0 = time.monotonic()

    try:
        proc = await _spawn(command, ctx.profile, cwd)
    except OSError as e:
        logger.error("[shell] FAILED to start: %s (%s)", cmd_short, e)
        return {"error": f"Command execution failed: {e}", "exit_code": -1}

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=ctx.shell_timeout)
    except asyncio.TimeoutError:
        proc.kill()
        await proc.wait()
        logger.warning("[shell] TIMEOUT after %ss: %s", ctx.shell_timeout, cmd_short)
        return {"error": f"Command timed out after {ctx.shell_timeout}s", "exit_code": -1}

    exit_code = proc.returncode or 0
    logger.info("[shell] DONE in %.1fs: exit_code=%d | %s", time.monotonic() - t0, exit_code, cmd_short)

    return {
        "stdout": _truncate(stdout.decode("utf-8", errors="replace"), ctx.max_output_chars),
        "stderr": _truncate(stderr.decode("utf-8", errors="replace"), ctx.max_output_chars),
        "exit_code": exit_code,
    }


async def handle(ctx: ToolContext, command: str, cwd: str | None = None, **_: Any) -> dict[str, Any]:
    working_dir = str(ctx.validate(cwd)) if cwd else os.getcwd()
    sanitized = sanitize_command(command, ctx.profile)

    result = await run_shell(sanitized, ctx, working_dir)
    result["command"] = sanitized
    result["cwd"] = working_dir
    result["platform"] = ctx.profile.name
    return result
