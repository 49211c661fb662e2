"""Pytest configuration and shared fixtures."""

from collections.abc import Callable, Iterator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

# ============================================================================
# Config Isolation
# ============================================================================
# Global config is read from $XDG_CONFIG_HOME/offsync/config.toml. Point it at
# an empty temp directory so a developer's own config never leaks into tests.


@pytest.fixture(autouse=True)
def isolated_global_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Redirect the global config location into the test's temp directory.

    Returns:
        Path the global config file would be written to.
    """
    xdg_home = tmp_path / "xdg_config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg_home))
    monkeypatch.delenv("APPDATA", raising=False)
    return xdg_home / "offsync" / "config.toml"


@pytest.fixture
def project_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a project directory with an empty .offsync dir and chdir into it.

    Returns:
        Path to the project root.
    """
    project = tmp_path / "project"
    (project / ".offsync").mkdir(parents=True)
    monkeypatch.chdir(project)
    return project


@pytest.fixture
def outside_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Chdir into a directory that is not inside any offsync project."""
    workdir = tmp_path / "elsewhere"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return workdir


# ============================================================================
# Clock Helpers
# ============================================================================


BASE_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)


def make_clock(*offsets_seconds: float) -> Callable[[], datetime]:
    """Create a clock returning BASE_TIME plus each offset in turn.

    The last offset repeats once the sequence is exhausted.
    """
    times: Iterator[datetime] = iter(
        BASE_TIME + timedelta(seconds=offset) for offset in offsets_seconds
    )
    last = BASE_TIME

    def clock() -> datetime:
        nonlocal last
        last = next(times, last)
        return last

    return clock
