"""Path validation against the platform allowlist.

Every filesystem operation and every command built by ``commands`` takes a
``ValidatedPath``; the only way to get one is through ``validate_path`` (or by
constructing one directly, which re-runs the same allowlist check).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .errors import AccessDenied
from .path_utils import matches_prefix, resolve_path
from .platform import PlatformProfile

logger = logging.getLogger(__name__)


def is_path_allowed(path: str, profile: PlatformProfile) -> bool:
    """Whether a canonical absolute path falls under any allowed prefix."""
    return any(matches_prefix(path, prefix, profile) for prefix in profile.allowed_path_prefixes)


@dataclass(frozen=True)
class ValidatedPath:
    """An absolute, normalized path that passed the allowlist for ``profile``."""

    path: str
    profile: PlatformProfile

    def __post_init__(self) -> None:
        mod = self.profile.pathmod
        if not mod.isabs(self.path) or mod.normpath(self.path) != self.path:
            raise AccessDenied(
                self.path,
                self.path,
                self.profile.allowed_path_prefixes,
                self.profile.name,
                reason="Path is not canonical",
            )
        if not is_path_allowed(self.path, self.profile):
            raise AccessDenied(self.path, self.path, self.profile.allowed_path_prefixes, self.profile.name)

    def __str__(self) -> str:
        return self.path

    def __fspath__(self) -> str:
        return self.path


def validate_path(path: str, base_dir: str, profile: PlatformProfile) -> ValidatedPath:
    """Resolve ``path`` against ``base_dir`` and check it against the allowlist.

    Raises AccessDenied when the path is empty, contains null bytes, or
    resolves outside every allowed prefix.
    """
    allowed = profile.allowed_path_prefixes

    if not path:
        raise AccessDenied(path, "", allowed, profile.name, reason="Empty path")

    # Reject null bytes (path traversal via null byte injection)
    if "\x00" in path or "\x00" in base_dir:
        raise AccessDenied(path, "", allowed, profile.name, reason="Path contains null bytes")

    resolved = resolve_path(path, base_dir, profile)

    if not profile.pathmod.isabs(resolved) or not is_path_allowed(resolved, profile):
        logger.warning("Blocked access outside allowed directories: %s", resolved)
        raise AccessDenied(path, resolved, allowed, profile.name)

    return ValidatedPath(resolved, profile)
