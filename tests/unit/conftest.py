"""Shared fixtures: explicit platform profiles and a sandboxed tool context."""

from __future__ import annotations

import os
from dataclasses import replace
from pathlib import Path

import pytest

from crossfs.tools import ToolContext
from crossfs.tools.platform import LINUX_PROFILE, WINDOWS_PROFILE, PlatformProfile


@pytest.fixture
def posix_profile() -> PlatformProfile:
    return LINUX_PROFILE


@pytest.fixture
def windows_profile() -> PlatformProfile:
    return WINDOWS_PROFILE


@pytest.fixture
def sandbox_profile(tmp_path: Path) -> PlatformProfile:
    """A POSIX profile whose only allowed prefix is the test's tmp_path."""
    return replace(LINUX_PROFILE, name="sandbox", allowed_path_prefixes=(str(tmp_path) + os.sep,))


@pytest.fixture
def ctx(tmp_path: Path, sandbox_profile: PlatformProfile) -> ToolContext:
    return ToolContext(profile=sandbox_profile, base_dir=str(tmp_path), shell_timeout=10)
