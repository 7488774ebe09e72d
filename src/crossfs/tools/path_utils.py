"""Profile-aware path normalization.

Paths are normalized with the path module of the target profile (``ntpath``
for Windows, ``posixpath`` otherwise) rather than ``os.path``, so a Windows
path can be validated on a POSIX host and vice versa. Normalization collapses
``.``, ``..`` and repeated separators into a canonical absolute path.

SECURITY-REVIEW: normalization is purely lexical. Symlinks are not resolved,
so a link inside an allowed directory that points outside it is not caught
here. The security-critical property is that ``..`` is collapsed before the
allowlist comparison.
"""

from __future__ import annotations

from .platform import PlatformProfile


def resolve_path(path: str, base_dir: str, profile: PlatformProfile) -> str:
    """Resolve ``path`` against ``base_dir`` and normalize it for ``profile``."""
    mod = profile.pathmod
    if mod.isabs(path):
        joined = path
    else:
        joined = mod.join(base_dir, path)
    return mod.normpath(joined)


def _fold(value: str, profile: PlatformProfile) -> str:
    return value if profile.case_sensitive else value.lower()


def matches_prefix(path: str, prefix: str, profile: PlatformProfile) -> bool:
    """Inclusive prefix match on separator boundaries.

    ``/tmp`` and ``/tmp/x`` match ``/tmp/``; ``/tmpx`` does not. A filesystem
    or drive root (``/``, ``D:\\``) matches every path beneath it.
    """
    sep = profile.sep
    path = _fold(path, profile)
    prefix = _fold(profile.pathmod.normpath(prefix), profile)
    if prefix.endswith(sep):
        return path.startswith(prefix)
    return path == prefix or path.startswith(prefix + sep)
