"""Tests for the crossfs CLI entry point."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from crossfs.__main__ import main
from crossfs.tools.platform import LINUX_PROFILE


@pytest.fixture(autouse=True)
def _isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CROSSFS_CONFIG", str(tmp_path / "missing.yaml"))
    monkeypatch.delenv("CROSSFS_BASE_DIR", raising=False)


def _run(*argv: str) -> None:
    with patch("sys.argv", ["crossfs", *argv]), patch("crossfs.__main__.get_profile", return_value=LINUX_PROFILE):
        main()


class TestSanitize:
    def test_prints_sanitized_command(self, capsys: pytest.CaptureFixture[str]) -> None:
        _run("sanitize", "/opt/My\\ Tool/t --v")
        assert capsys.readouterr().out.strip() == '"/opt/My Tool/t" --v'

    def test_rejects_chained_command(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            _run("sanitize", "ls && whoami")
        assert exc_info.value.code == 1
        assert "unsafe_command" in capsys.readouterr().err


class TestCheckPath:
    def test_allowed(self, capsys: pytest.CaptureFixture[str]) -> None:
        _run("check-path", "/tmp/a/../b")
        assert capsys.readouterr().out.strip() == "/tmp/b"

    def test_relative_uses_base_dir_flag(self, capsys: pytest.CaptureFixture[str]) -> None:
        _run("--base-dir", "/home/alice", "check-path", "notes.md")
        assert capsys.readouterr().out.strip() == "/home/alice/notes.md"

    def test_denied(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            _run("check-path", "/root/.ssh/id_rsa")
        assert exc_info.value.code == 1
        assert "Access denied" in capsys.readouterr().err


class TestInfo:
    def test_shows_allowed_paths(self, capsys: pytest.CaptureFixture[str]) -> None:
        _run("info")
        err = capsys.readouterr().err
        assert "Allowed paths" in err
        assert "/home/" in err


class TestConfigErrors:
    def test_bad_config_exits(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        bad = tmp_path / "bad.yaml"
        bad.write_text("- not\n- a mapping\n")
        with pytest.raises(SystemExit) as exc_info:
            _run("--config", str(bad), "info")
        assert exc_info.value.code == 1
        assert "Configuration error" in capsys.readouterr().err


class TestServe:
    def test_default_command_runs_stdio_server(self) -> None:
        with patch("crossfs.server.run_stdio", new_callable=AsyncMock) as mock_run:
            _run()
        mock_run.assert_awaited_once()
        _, profile = mock_run.call_args.args
        assert profile is LINUX_PROFILE

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            _run("--version")
        assert exc_info.value.code == 0
        assert "crossfs" in capsys.readouterr().out
