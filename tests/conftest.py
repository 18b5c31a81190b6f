"""Shared pytest fixtures for VSONLINE tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.helpers.tracker import HOST, FakeTracker


@pytest.fixture
def host() -> str:
    """A valid tracker host."""
    return HOST


@pytest.fixture
def fake_tracker() -> FakeTracker:
    """A tracker answering every request with a Feature work item."""
    return FakeTracker()


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate ConfigManager from the user's config files and environment.

    Returns the path used as the global config file (not created).
    """
    from vsonline.config.settings import Settings

    for key in Settings.get_config_keys():
        monkeypatch.delenv(key, raising=False)

    project = tmp_path / "project"
    project.mkdir()
    (project / ".git").mkdir()
    monkeypatch.chdir(project)

    global_config = tmp_path / ".vsonline-config"
    monkeypatch.setattr("vsonline.config.manager.CONFIG_FILE", global_config)
    return global_config
