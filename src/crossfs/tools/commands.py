"""Platform-native command lines for search and recursive copy.

Only ``ValidatedPath`` arguments are interpolated; the allowlist check already
happened. Every path is still double-quoted for consistency, and characters
that would break out of double quotes are refused.
"""

from __future__ import annotations

from .errors import InvalidArgument, UnsafeCommand
from .platform import PlatformProfile
from .sanitizer import assert_safe
from .security import ValidatedPath

MAX_SEARCH_DEPTH = 32

_POSIX_UNQUOTABLE = frozenset('"$`\\\n\r\x00')
_WINDOWS_UNQUOTABLE = frozenset('"%\n\r\x00')


def _unquotable(profile: PlatformProfile) -> frozenset[str]:
    return _POSIX_UNQUOTABLE if profile.posix_shell else _WINDOWS_UNQUOTABLE


def _require_validated(value: object, profile: PlatformProfile) -> str:
    if not isinstance(value, ValidatedPath):
        raise TypeError(f"Expected ValidatedPath, got {type(value).__name__}")
    if value.profile != profile:
        raise ValueError(f"Path was validated for {value.profile.name!r}, not {profile.name!r}")
    bad = next((ch for ch in value.path if ch in _unquotable(profile)), None)
    if bad is not None:
        raise UnsafeCommand(
            f"Path contains {bad!r}, which cannot be safely quoted: {value.path}",
            fragment=value.path,
            platform=profile.name,
        )
    return value.path


def _check_pattern(pattern: str, profile: PlatformProfile) -> None:
    if not pattern:
        raise UnsafeCommand("Search pattern is empty", fragment=pattern, platform=profile.name)
    if "/" in pattern or "\\" in pattern:
        raise UnsafeCommand(
            f"Search pattern must not contain path separators: {pattern}",
            fragment=pattern,
            platform=profile.name,
        )
    bad = next((ch for ch in pattern if ch in _unquotable(profile) or ch == "'"), None)
    if bad is not None:
        raise UnsafeCommand(
            f"Search pattern contains {bad!r}: {pattern}",
            fragment=pattern,
            platform=profile.name,
        )
    assert_safe(pattern, profile)


def _check_depth(max_depth: object, profile: PlatformProfile) -> int:
    if isinstance(max_depth, bool) or not isinstance(max_depth, int):
        raise InvalidArgument(
            f"max_depth must be an integer, got {max_depth!r}",
            fragment=str(max_depth),
            platform=profile.name,
        )
    if not 0 <= max_depth <= MAX_SEARCH_DEPTH:
        raise InvalidArgument(
            f"max_depth must be between 0 and {MAX_SEARCH_DEPTH}, got {max_depth}",
            fragment=str(max_depth),
            platform=profile.name,
        )
    return max_depth


def build_search_command(directory: ValidatedPath, pattern: str, max_depth: int, profile: PlatformProfile) -> str:
    """File-name search rooted at ``directory``, bounded by ``max_depth`` where supported."""
    root = _require_validated(directory, profile)
    _check_pattern(pattern, profile)
    depth = _check_depth(max_depth, profile)
    target = profile.pathmod.join(root, pattern)
    return profile.search_template.format(root=root, pattern=pattern, depth=depth, target=target)


def build_copy_command(
    source: ValidatedPath,
    destination: ValidatedPath,
    recursive: bool,
    profile: PlatformProfile,
) -> str:
    src = _require_validated(source, profile)
    dst = _require_validated(destination, profile)
    template = profile.copy_tree_template if recursive else profile.copy_file_template
    return template.format(source=src, destination=dst)
