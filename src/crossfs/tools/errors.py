"""Errors raised by path validation and command sanitization.

Every error carries enough context (the offending fragment, the platform and,
for access denials, the full allowlist) for a caller to correct its input
without probing the filesystem. None of them are retried.
"""

from __future__ import annotations

from typing import Any


class SecurityError(Exception):
    """Base class for rejected paths and commands."""

    kind = "security_error"

    def __init__(self, message: str, *, fragment: str = "", platform: str = "") -> None:
        super().__init__(message)
        self.fragment = fragment
        self.platform = platform

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": str(self),
            "error_type": self.kind,
            "fragment": self.fragment,
            "platform": self.platform,
        }


class AccessDenied(SecurityError):
    kind = "access_denied"

    def __init__(
        self,
        path: str,
        resolved: str,
        allowed: tuple[str, ...] | list[str],
        platform: str,
        reason: str = "",
    ) -> None:
        self.path = path
        self.resolved = resolved
        self.allowed = list(allowed)
        detail = reason or "Path outside allowed directories"
        super().__init__(
            f"Access denied: {detail}: {resolved or path}. Allowed: {', '.join(self.allowed)}",
            fragment=path,
            platform=platform,
        )

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["resolved"] = self.resolved
        data["allowed_paths"] = self.allowed
        return data


class UnsafeCommand(SecurityError):
    kind = "unsafe_command"


class UnsafeExecutable(UnsafeCommand):
    kind = "unsafe_executable"


class MalformedCommand(SecurityError):
    kind = "malformed_command"


class InvalidArgument(SecurityError, ValueError):
    kind = "invalid_argument"
