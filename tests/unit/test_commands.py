"""Tests for crossfs.tools.commands (search and copy command builders)."""

from __future__ import annotations

from dataclasses import replace

import pytest

from crossfs.tools.commands import MAX_SEARCH_DEPTH, build_copy_command, build_search_command
from crossfs.tools.errors import InvalidArgument, UnsafeCommand
from crossfs.tools.platform import LINUX_PROFILE, MACOS_PROFILE, WINDOWS_PROFILE
from crossfs.tools.security import validate_path

WIN = replace(WINDOWS_PROFILE, allowed_path_prefixes=("C:\\",))


def _posix(path: str):
    return validate_path(path, "/tmp", LINUX_PROFILE)


def _win(path: str):
    return validate_path(path, "C:\\", WIN)


class TestBuildCopyCommand:
    def test_posix_recursive(self) -> None:
        command = build_copy_command(_posix("/tmp/source dir"), _posix("/tmp/destination dir"), True, LINUX_PROFILE)
        assert command == 'cp -R "/tmp/source dir" "/tmp/destination dir"'

    def test_posix_single_file(self) -> None:
        command = build_copy_command(_posix("/tmp/a.txt"), _posix("/tmp/b.txt"), False, LINUX_PROFILE)
        assert command == 'cp "/tmp/a.txt" "/tmp/b.txt"'

    def test_windows_recursive(self) -> None:
        command = build_copy_command(_win("C:\\source dir"), _win("C:\\destination dir"), True, WIN)
        assert command == 'xcopy "C:\\source dir" "C:\\destination dir" /E /I /Y'

    def test_windows_single_file(self) -> None:
        command = build_copy_command(_win("C:\\a.txt"), _win("C:\\b.txt"), False, WIN)
        assert command == 'copy "C:\\a.txt" "C:\\b.txt"'

    def test_raw_string_rejected(self) -> None:
        with pytest.raises(TypeError):
            build_copy_command("/tmp/a", _posix("/tmp/b"), False, LINUX_PROFILE)  # type: ignore[arg-type]

    def test_profile_mismatch_rejected(self) -> None:
        source = validate_path("/tmp/a", "/tmp", MACOS_PROFILE)
        with pytest.raises(ValueError, match="validated for"):
            build_copy_command(source, _posix("/tmp/b"), False, LINUX_PROFILE)

    @pytest.mark.parametrize("name", ["a$b", 'a"b', "a`b", "a\\b"])
    def test_posix_unquotable_path(self, name: str) -> None:
        with pytest.raises(UnsafeCommand):
            build_copy_command(_posix(f"/tmp/{name}"), _posix("/tmp/b"), False, LINUX_PROFILE)

    def test_windows_percent_in_path(self) -> None:
        with pytest.raises(UnsafeCommand):
            build_copy_command(_win("C:\\%PATH%"), _win("C:\\b"), False, WIN)

    def test_shell_metacharacters_stay_quoted(self) -> None:
        command = build_copy_command(_posix("/tmp/a;b"), _posix("/tmp/c&d"), False, LINUX_PROFILE)
        assert command == 'cp "/tmp/a;b" "/tmp/c&d"'


class TestBuildSearchCommand:
    def test_posix_find(self) -> None:
        command = build_search_command(_posix("/tmp/src"), "*.py", 3, LINUX_PROFILE)
        assert command == 'find "/tmp/src" -maxdepth 3 -name "*.py" -type f'

    def test_posix_path_with_spaces(self) -> None:
        command = build_search_command(_posix("/tmp/my docs"), "*.md", 1, LINUX_PROFILE)
        assert command == 'find "/tmp/my docs" -maxdepth 1 -name "*.md" -type f'

    def test_windows_dir(self) -> None:
        command = build_search_command(_win("C:\\Users\\bob\\src"), "*.txt", 3, WIN)
        assert command == 'dir "C:\\Users\\bob\\src\\*.txt" /s /b'

    def test_windows_drive_root(self) -> None:
        command = build_search_command(_win("C:\\"), "*.txt", 3, WIN)
        assert command == 'dir "C:\\*.txt" /s /b'

    @pytest.mark.parametrize("depth", [0, 1, MAX_SEARCH_DEPTH])
    def test_depth_bounds_accepted(self, depth: int) -> None:
        assert f"-maxdepth {depth} " in build_search_command(_posix("/tmp"), "*", depth, LINUX_PROFILE)

    @pytest.mark.parametrize("depth", [-1, MAX_SEARCH_DEPTH + 1, True, "3", 2.5, None])
    def test_invalid_depth(self, depth: object) -> None:
        with pytest.raises(InvalidArgument):
            build_search_command(_posix("/tmp"), "*.py", depth, LINUX_PROFILE)  # type: ignore[arg-type]

    def test_invalid_argument_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            build_search_command(_posix("/tmp"), "*.py", 99, LINUX_PROFILE)

    @pytest.mark.parametrize("pattern", ["", "../*", "a/b", "a\\b", "*.py; rm -rf ~", "$HOME", '"x', "it's", "a|b"])
    def test_unsafe_posix_patterns(self, pattern: str) -> None:
        with pytest.raises(UnsafeCommand):
            build_search_command(_posix("/tmp"), pattern, 1, LINUX_PROFILE)

    @pytest.mark.parametrize("pattern", ["%PATH%", "a&b", "a^b", "*.txt\r\n"])
    def test_unsafe_windows_patterns(self, pattern: str) -> None:
        with pytest.raises(UnsafeCommand):
            build_search_command(_win("C:\\"), pattern, 1, WIN)

    def test_raw_string_directory_rejected(self) -> None:
        with pytest.raises(TypeError):
            build_search_command("/tmp", "*.py", 1, LINUX_PROFILE)  # type: ignore[arg-type]
