"""Configuration loader: YAML file with environment variable fallbacks."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .tools.commands import MAX_SEARCH_DEPTH

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ServerSettings:
    name: str = "cross-platform-filesystem-mcp"
    log_level: str = "INFO"


@dataclass
class PathsConfig:
    base_dir: str = field(default_factory=lambda: os.path.expanduser("~"))


@dataclass
class ShellConfig:
    timeout: int = 120  # seconds
    max_output_chars: int = 100_000


@dataclass
class SearchConfig:
    default_max_depth: int = 3


@dataclass
class LimitsConfig:
    max_read_bytes: int = 10 * 1024 * 1024


@dataclass
class ToolsConfig:
    disabled: list[str] = field(default_factory=list)


@dataclass
class AppConfig:
    server: ServerSettings = field(default_factory=ServerSettings)
    paths: PathsConfig = field(default_factory=PathsConfig)
    shell: ShellConfig = field(default_factory=ShellConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    limits: LimitsConfig = field(default_factory=LimitsConfig)
    tools: ToolsConfig = field(default_factory=ToolsConfig)


def _get_config_path() -> Path:
    env_path = os.environ.get("CROSSFS_CONFIG")
    if env_path:
        return Path(os.path.expanduser(env_path))
    return Path.home() / ".crossfs" / "config.yaml"


def _section(raw: dict[str, Any], key: str) -> dict[str, Any]:
    value = raw.get(key, {})
    return value if isinstance(value, dict) else {}


def _clamped_int(value: Any, default: int, lo: int, hi: int) -> int:
    try:
        parsed = int(value)
    except (ValueError, TypeError):
        parsed = default
    return max(lo, min(parsed, hi))


def load_config(config_path: Path | None = None) -> AppConfig:
    raw: dict[str, Any] = {}
    path = config_path or _get_config_path()

    if path.exists():
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        if not isinstance(raw, dict):
            raise ValueError(f"Config file {path} must contain a mapping at the top level")

    server_raw = _section(raw, "server")
    log_level = str(server_raw.get("log_level") or os.environ.get("CROSSFS_LOG_LEVEL", "INFO")).upper()
    if log_level not in _LOG_LEVELS:
        logging.getLogger(__name__).warning("Unknown log level %r, using INFO", log_level)
        log_level = "INFO"
    server = ServerSettings(
        name=str(server_raw.get("name", ServerSettings.name)),
        log_level=log_level,
    )

    paths_raw = _section(raw, "paths")
    base_dir = paths_raw.get("base_dir") or os.environ.get("CROSSFS_BASE_DIR") or "~"
    paths = PathsConfig(base_dir=os.path.expanduser(str(base_dir)))

    shell_raw = _section(raw, "shell")
    shell = ShellConfig(
        timeout=_clamped_int(shell_raw.get("timeout", os.environ.get("CROSSFS_SHELL_TIMEOUT", 120)), 120, 1, 600),
        max_output_chars=_clamped_int(shell_raw.get("max_output_chars", 100_000), 100_000, 1_000, 10_000_000),
    )

    search_raw = _section(raw, "search")
    search = SearchConfig(
        default_max_depth=_clamped_int(search_raw.get("default_max_depth", 3), 3, 0, MAX_SEARCH_DEPTH),
    )

    limits_raw = _section(raw, "limits")
    limits = LimitsConfig(
        max_read_bytes=_clamped_int(
            limits_raw.get("max_read_bytes", 10 * 1024 * 1024), 10 * 1024 * 1024, 1, 1024 * 1024 * 1024
        ),
    )

    tools_raw = _section(raw, "tools")
    disabled = tools_raw.get("disabled", [])
    if not isinstance(disabled, list):
        disabled = []
    tools = ToolsConfig(disabled=[str(t) for t in disabled])

    return AppConfig(server=server, paths=paths, shell=shell, search=search, limits=limits, tools=tools)
