"""CLI entry point for crossfs."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .config import AppConfig, load_config
from .tools.errors import SecurityError
from .tools.platform import PlatformProfile, get_profile
from .tools.sanitizer import sanitize_command
from .tools.security import validate_path

# stdout carries the MCP stdio transport; everything human-facing goes to stderr.
console = Console(stderr=True)


def _setup_logging(level: str) -> None:
    root = logging.getLogger()
    if any(isinstance(h, RichHandler) for h in root.handlers):
        return
    handler = RichHandler(console=console, show_path=False, rich_tracebacks=True)
    logging.basicConfig(level=level, format="%(name)s: %(message)s", handlers=[handler])


def _load_config_or_exit(config_path: str | None) -> AppConfig:
    try:
        return load_config(Path(config_path) if config_path else None)
    except (ValueError, OSError) as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        sys.exit(1)


def _run_info(config: AppConfig, profile: PlatformProfile) -> None:
    table = Table(title="Platform Profile", show_header=False, header_style="bold")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("Profile", f"{profile.name} ({profile.family.value})")
    table.add_row("Base directory", config.paths.base_dir)
    table.add_row("Shell", f"{profile.shell_interpreter} {profile.shell_flag}")
    table.add_row("Case-sensitive paths", "yes" if profile.case_sensitive else "no")
    table.add_row("Allowed paths", "\n".join(profile.allowed_path_prefixes))
    if config.tools.disabled:
        table.add_row("Disabled tools", ", ".join(config.tools.disabled))
    console.print(table)


def _run_check_path(path: str, config: AppConfig, profile: PlatformProfile) -> None:
    try:
        validated = validate_path(path, config.paths.base_dir, profile)
    except SecurityError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    print(validated)


def _run_sanitize(command: str, profile: PlatformProfile) -> None:
    try:
        sanitized = sanitize_command(command, profile)
    except SecurityError as e:
        console.print(f"[red]{e.kind}:[/red] {e}")
        sys.exit(1)
    print(sanitized)


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="crossfs", description="Cross-platform filesystem and shell tools over MCP"
    )
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("serve", help="Run the MCP server over stdio (default)")
    subparsers.add_parser("info", help="Show the active platform profile and allowed paths")

    check_parser = subparsers.add_parser("check-path", help="Validate a path against the allowlist")
    check_parser.add_argument("path", help="Path to validate (relative to the base directory or absolute)")

    sanitize_parser = subparsers.add_parser("sanitize", help="Sanitize a shell command line")
    sanitize_parser.add_argument("shell_command", metavar="COMMAND", help="Command line to sanitize")

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", dest="config_path", default=None, help="Path to config.yaml")
    parser.add_argument("--base-dir", dest="base_dir", default=None, help="Base directory for relative paths")
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override the configured log level",
    )

    args = parser.parse_args()

    config = _load_config_or_exit(args.config_path)
    if args.base_dir:
        config.paths.base_dir = str(Path(args.base_dir).expanduser())
    if args.log_level:
        config.server.log_level = args.log_level
    _setup_logging(config.server.log_level)

    profile = get_profile()

    if args.command == "info":
        _run_info(config, profile)
    elif args.command == "check-path":
        _run_check_path(args.path, config, profile)
    elif args.command == "sanitize":
        _run_sanitize(args.shell_command, profile)
    else:
        from .server import run_stdio

        try:
            asyncio.run(run_stdio(config, profile))
        except KeyboardInterrupt:
            pass


if __name__ == "__main__":
    main()
