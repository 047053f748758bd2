"""Test configuration and fixtures."""

from pathlib import Path

import pytest

_SETTINGS_ENV_VARS = (
    "RUN_TESTS_GITHUB_TOKEN",
    "GITHUB_TOKEN",
    "GITHUB_REPOSITORY",
    "GITHUB_API_URL",
    "GITHUB_EVENT_NAME",
    "GITHUB_EVENT_PATH",
    "GITHUB_OUTPUT",
    "LOG_LEVEL",
    "RUN_TESTS_LOG_FORMAT",
    "RUN_TESTS_NON_COMMAND_POLICY",
    "RUN_TESTS_REJECTION_POLICY",
)


@pytest.fixture
def clean_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Isolate settings from the runner environment and any local `.env`."""
    for name in _SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    workdir = tmp_path / "workdir"
    workdir.mkdir()
    monkeypatch.chdir(workdir)


@pytest.fixture
def write_event(tmp_path: Path):
    """Write a GitHub event payload and return its path."""

    def _write(payload: str) -> Path:
        path = tmp_path / "event.json"
        path.write_text(payload, encoding="utf-8")
        return path

    return _write
