"""Executable parsing, metacharacter checks, and command sanitization.

Pure functions over strings; no I/O, no side effects. Validation always runs
before any re-quoting, so a string cannot smuggle a metacharacter through the
sanitizer's own quoting.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from .errors import MalformedCommand, UnsafeCommand, UnsafeExecutable
from .platform import PlatformProfile

logger = logging.getLogger(__name__)

_SEPARATORS = frozenset(";&|")
_REDIRECTIONS = frozenset("<>")
_GROUPING = frozenset("()")
_LINE_BREAKS = frozenset("\n\r\x00")
_BACKTICK = "`"
_SUBSTITUTION = "$("

# A path must never contain these, quoted or not.
_EXECUTABLE_FORBIDDEN = _SEPARATORS | _REDIRECTIONS | _LINE_BREAKS | {_BACKTICK, '"'}

_ENV_REF = re.compile(r"%[A-Za-z_][A-Za-z0-9_()\-]*%")
_WINDOWS_EXECUTABLE_SUFFIXES = (".exe", ".com", ".bat", ".cmd", ".ps1")
_POSIX_ESCAPE = re.compile(r"\\(.)", re.DOTALL)

# Characters a POSIX shell would expand or split in an unquoted word.
_POSIX_EXPANSIONS = frozenset("\\$*?[{~#")


@dataclass(frozen=True)
class ParsedExecutable:
    executable: str
    remainder: str
    quote: str | None = None


def _first_whitespace(text: str, start: int) -> int:
    for i in range(start, len(text)):
        if text[i].isspace():
            return i
    return len(text)


def _skip_whitespace(text: str, start: int) -> int:
    while start < len(text) and text[start].isspace():
        start += 1
    return start


def _unescape(token: str) -> tuple[str, str | None]:
    """Strip POSIX backslash escapes from an unquoted word.

    Returns the literal word and the quote it needs to keep that meaning: a
    single quote when an escaped character would otherwise expand.
    """
    literal = any(m.group(1) in _POSIX_EXPANSIONS for m in _POSIX_ESCAPE.finditer(token))
    return _POSIX_ESCAPE.sub(r"\1", token), ("'" if literal else None)


def _parse_quoted(command: str, profile: PlatformProfile) -> ParsedExecutable:
    quote = command[0]
    end = command.find(quote, 1)
    if end == -1:
        raise MalformedCommand(
            f"Unterminated {quote} quote in executable: {command}",
            fragment=command,
            platform=profile.name,
        )
    remainder = command[end + 1 :]
    if remainder and not remainder[0].isspace():
        raise MalformedCommand(
            f"Unexpected text after closing {quote} quote: {command}",
            fragment=command,
            platform=profile.name,
        )
    return ParsedExecutable(command[1:end], remainder, quote)


def _parse_env_token(command: str) -> ParsedExecutable:
    # %VAR% may expand to a directory containing spaces, so the token keeps
    # absorbing path-like words until it names an executable file.
    end = _first_whitespace(command, 0)
    while end < len(command) and not command[:end].lower().endswith(_WINDOWS_EXECUTABLE_SUFFIXES):
        next_start = _skip_whitespace(command, end)
        next_end = _first_whitespace(command, next_start)
        word = command[next_start:next_end]
        if not word or "\\" not in word or word.startswith(("-", "/")):
            break
        end = next_end
    return ParsedExecutable(command[:end], command[end:])


def _parse_bare(command: str, profile: PlatformProfile) -> ParsedExecutable:
    i = 0
    while i < len(command):
        if profile.posix_shell and command[i] == "\\":
            # backslash escapes exactly one character, whatever it is
            i += 2
            continue
        if command[i].isspace():
            break
        i += 1
    i = min(i, len(command))
    if not profile.posix_shell:
        return ParsedExecutable(command[:i], command[i:])
    token, quote = _unescape(command[:i])
    return ParsedExecutable(token, command[i:], quote)


def parse_executable(command: str, profile: PlatformProfile) -> ParsedExecutable:
    """Split a command into its executable token and the untouched remainder."""
    if not command or command[0].isspace():
        raise MalformedCommand("Command must start with an executable", fragment=command, platform=profile.name)

    first = command[0]
    if first == '"' or (first == "'" and profile.posix_shell):
        return _parse_quoted(command, profile)

    if not profile.posix_shell:
        leading = command[: _first_whitespace(command, 0)]
        if _ENV_REF.search(leading):
            return _parse_env_token(command)

    return _parse_bare(command, profile)


def check_executable(path: str, profile: PlatformProfile) -> None:
    """Reject an (unquoted) executable path containing shell metacharacters."""
    if not path.strip():
        raise MalformedCommand("Empty executable", fragment=path, platform=profile.name)

    forbidden = _EXECUTABLE_FORBIDDEN | {"'"} if profile.posix_shell else _EXECUTABLE_FORBIDDEN
    for ch in path:
        if ch in forbidden:
            raise UnsafeExecutable(
                f"Executable contains shell metacharacter {ch!r}: {path}",
                fragment=path,
                platform=profile.name,
            )
    if _SUBSTITUTION in path:
        raise UnsafeExecutable(
            f"Executable contains command substitution: {path}",
            fragment=path,
            platform=profile.name,
        )


def assert_safe(text: str, profile: PlatformProfile, *, allow_substitution_in_single_quotes: bool = False) -> None:
    """Reject shell metacharacters outside quoted spans.

    Double quotes delimit a span on every platform, single quotes only under a
    POSIX shell. Line breaks and null bytes are rejected everywhere. Backticks
    and ``$(`` are rejected inside double quotes on POSIX (the shell expands
    them there) and, unless explicitly allowed, inside single quotes too.
    """
    posix = profile.posix_shell
    quote: str | None = None
    i = 0

    def _reject(token: str) -> UnsafeCommand:
        return UnsafeCommand(
            f"Unsafe shell metacharacter {token!r} in command: {text}",
            fragment=text,
            platform=profile.name,
        )

    while i < len(text):
        ch = text[i]
        if ch in _LINE_BREAKS:
            raise _reject(ch)

        if quote is None:
            if posix and ch == "\\":
                # Escaped character is literal, but a line continuation is not.
                if i + 1 < len(text) and text[i + 1] in _LINE_BREAKS:
                    raise _reject(text[i + 1])
                i += 2
                continue
            if ch == '"' or (posix and ch == "'"):
                quote = ch
            elif ch in _SEPARATORS or ch in _REDIRECTIONS or ch in _GROUPING or ch == _BACKTICK:
                raise _reject(ch)
            elif text.startswith(_SUBSTITUTION, i):
                raise _reject(_SUBSTITUTION)
            elif not posix and ch == "^":
                # cmd.exe escape: would let a quote or separator through unseen
                raise _reject(ch)
        else:
            if ch == quote:
                quote = None
            elif posix and quote == '"' and ch == "\\":
                if i + 1 < len(text) and text[i + 1] in _LINE_BREAKS:
                    raise _reject(text[i + 1])
                i += 2
                continue
            elif posix and (ch == _BACKTICK or text.startswith(_SUBSTITUTION, i)):
                if quote == '"' or not allow_substitution_in_single_quotes:
                    raise _reject(_BACKTICK if ch == _BACKTICK else _SUBSTITUTION)
        i += 1

    if quote is not None:
        raise MalformedCommand(f"Unterminated {quote} quote in command: {text}", fragment=text, platform=profile.name)


def _needs_quoting(path: str, quote: str | None, profile: PlatformProfile) -> bool:
    if any(ch.isspace() or ch in _GROUPING for ch in path):
        return True
    if not profile.posix_shell:
        return bool(_ENV_REF.search(path))
    if quote is None:
        # An unquoted word keeps its own glob and tilde meaning when left bare.
        return "$" in path
    return any(ch in _POSIX_EXPANSIONS for ch in path)


def _quote_executable(path: str, quote: str | None, profile: PlatformProfile) -> str:
    if not _needs_quoting(path, quote, profile):
        return path
    if quote == "'":
        return f"'{path}'"
    return f'"{path}"'


def ensure_safe_executable(path: str, profile: PlatformProfile) -> str:
    """Validate a bare executable path and return it canonically quoted."""
    text = path.strip()
    if not text:
        raise MalformedCommand("Empty executable", fragment=path, platform=profile.name)

    quote: str | None = None
    if text[0] == '"' or (text[0] == "'" and profile.posix_shell):
        parsed = _parse_quoted(text, profile)
        if parsed.remainder:
            raise MalformedCommand(
                f"Unexpected text after quoted executable: {text}",
                fragment=text,
                platform=profile.name,
            )
        executable, quote = parsed.executable, parsed.quote
    elif profile.posix_shell:
        executable, quote = _unescape(text)
    else:
        executable = text

    check_executable(executable, profile)
    return _quote_executable(executable, quote, profile)


def sanitize_command(command: str, profile: PlatformProfile) -> str:
    """Validate a full command line and re-quote its executable.

    The remainder is returned unmodified. Applying this to its own output is a
    no-op.
    """
    stripped = command.lstrip()
    if not stripped:
        raise MalformedCommand("Empty command", fragment=command, platform=profile.name)

    parsed = parse_executable(stripped, profile)
    check_executable(parsed.executable, profile)
    assert_safe(parsed.remainder, profile)

    sanitized = _quote_executable(parsed.executable, parsed.quote, profile) + parsed.remainder
    logger.debug("Sanitized command (%s): %s", profile.name, sanitized)
    return sanitized
