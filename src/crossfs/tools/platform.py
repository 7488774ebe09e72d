"""Per-OS platform profiles.

A profile is static data: the allowlisted path prefixes, how paths compare,
how the shell is invoked, and the native copy/search command templates.
Selection is a pure function of the detected OS family and happens once.
"""

from __future__ import annotations

import ntpath
import os
import posixpath
import sys
from dataclasses import dataclass
from enum import Enum
from types import ModuleType


class PlatformFamily(Enum):
    POSIX = "posix"
    WINDOWS = "windows"
    OTHER = "other"


_POSIX_PREFIXES = ("linux", "darwin", "freebsd", "openbsd", "netbsd", "dragonfly", "sunos", "aix", "cygwin")


@dataclass(frozen=True)
class PlatformProfile:
    name: str
    family: PlatformFamily
    allowed_path_prefixes: tuple[str, ...]
    case_sensitive: bool
    shell_interpreter: str
    shell_flag: str
    copy_file_template: str
    copy_tree_template: str
    search_template: str

    @property
    def pathmod(self) -> ModuleType:
        """Path module matching this profile's separator and drive rules."""
        return ntpath if self.family is PlatformFamily.WINDOWS else posixpath

    @property
    def sep(self) -> str:
        return self.pathmod.sep

    @property
    def posix_shell(self) -> bool:
        """Whether commands run under a POSIX shell (single quotes and backslash escapes apply)."""
        return self.family is not PlatformFamily.WINDOWS

    def shell_argv(self, command: str) -> list[str]:
        return [self.shell_interpreter, self.shell_flag, command]


_POSIX_COPY_FILE = 'cp "{source}" "{destination}"'
_POSIX_COPY_TREE = 'cp -R "{source}" "{destination}"'
_POSIX_SEARCH = 'find "{root}" -maxdepth {depth} -name "{pattern}" -type f'

LINUX_PROFILE = PlatformProfile(
    name="linux",
    family=PlatformFamily.POSIX,
    allowed_path_prefixes=(
        "/home/",
        "/tmp/",
        "/var/tmp/",
        "/opt/",
        "/usr/local/",
        "/etc/",  # read-only configs
    ),
    case_sensitive=True,
    shell_interpreter="/bin/bash",
    shell_flag="-c",
    copy_file_template=_POSIX_COPY_FILE,
    copy_tree_template=_POSIX_COPY_TREE,
    search_template=_POSIX_SEARCH,
)

MACOS_PROFILE = PlatformProfile(
    name="macos",
    family=PlatformFamily.POSIX,
    allowed_path_prefixes=(
        "/Users/",
        "/tmp/",
        "/var/tmp/",
        "/opt/homebrew/",  # Homebrew on Apple Silicon
        "/usr/local/",  # Homebrew on Intel
    ),
    case_sensitive=True,
    shell_interpreter="/bin/bash",
    shell_flag="-c",
    copy_file_template=_POSIX_COPY_FILE,
    copy_tree_template=_POSIX_COPY_TREE,
    search_template=_POSIX_SEARCH,
)

WINDOWS_PROFILE = PlatformProfile(
    name="windows",
    family=PlatformFamily.WINDOWS,
    allowed_path_prefixes=(
        "C:\\Users\\",
        "C:\\temp\\",
        "C:\\tmp\\",
        "D:\\",  # common additional drive
    ),
    case_sensitive=False,
    shell_interpreter="cmd.exe",
    shell_flag="/c",
    copy_file_template='copy "{source}" "{destination}"',
    copy_tree_template='xcopy "{source}" "{destination}" /E /I /Y',
    search_template='dir "{target}" /s /b',
)


def other_profile(home: str) -> PlatformProfile:
    """Minimal fallback for an unrecognised OS: home plus a temp directory."""
    return PlatformProfile(
        name="other",
        family=PlatformFamily.OTHER,
        allowed_path_prefixes=(home, "/tmp/"),
        case_sensitive=True,
        shell_interpreter="/bin/sh",
        shell_flag="-c",
        copy_file_template=_POSIX_COPY_FILE,
        copy_tree_template=_POSIX_COPY_TREE,
        search_template=_POSIX_SEARCH,
    )


def detect_family(system: str | None = None) -> PlatformFamily:
    """Classify a ``sys.platform`` identifier."""
    system = (system if system is not None else sys.platform).lower()
    if system == "win32":
        return PlatformFamily.WINDOWS
    if system.startswith(_POSIX_PREFIXES):
        return PlatformFamily.POSIX
    return PlatformFamily.OTHER


def select_profile(system: str | None = None, home: str | None = None) -> PlatformProfile:
    system = (system if system is not None else sys.platform).lower()
    family = detect_family(system)
    if family is PlatformFamily.WINDOWS:
        return WINDOWS_PROFILE
    if family is PlatformFamily.POSIX:
        return MACOS_PROFILE if system == "darwin" else LINUX_PROFILE
    if family is PlatformFamily.OTHER:
        return other_profile(home or os.path.expanduser("~"))
    raise ValueError(f"Unhandled platform family: {family!r}")


_active_profile: PlatformProfile | None = None


def get_profile() -> PlatformProfile:
    """Return the process-wide profile, selecting it on first use."""
    global _active_profile
    if _active_profile is None:
        _active_profile = select_profile()
    return _active_profile
