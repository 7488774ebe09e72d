"""Per-server state handed to every tool handler."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .platform import PlatformProfile
from .security import ValidatedPath, validate_path

if TYPE_CHECKING:
    from ..config import AppConfig


@dataclass(frozen=True)
class ToolContext:
    profile: PlatformProfile
    base_dir: str
    shell_timeout: int = 120
    max_output_chars: int = 100_000
    default_max_depth: int = 3
    max_read_bytes: int = 10 * 1024 * 1024

    @classmethod
    def from_config(cls, config: AppConfig, profile: PlatformProfile) -> ToolContext:
        return cls(
            profile=profile,
            base_dir=config.paths.base_dir,
            shell_timeout=config.shell.timeout,
            max_output_chars=config.shell.max_output_chars,
            default_max_depth=config.search.default_max_depth,
            max_read_bytes=config.limits.max_read_bytes,
        )

    def validate(self, path: str) -> ValidatedPath:
        return validate_path(path, self.base_dir, self.profile)
