"""Shared fixtures."""

import pytest

_ENV_VARS = (
    "HTMLGUARD_ENGINE",
    "HTMLGUARD_EXTRA_TAGS",
    "HTMLGUARD_HOST",
    "HTMLGUARD_PORT",
    "HTMLGUARD_MAX_INPUT_BYTES",
    "HTMLGUARD_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep HTMLGUARD_* variables from the host out of the tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    """Write a YAML config in an isolated working directory and return its path."""
    monkeypatch.chdir(tmp_path)

    def _write(text: str) -> str:
        path = tmp_path / "htmlguard.yaml"
        path.write_text(text)
        return str(path)

    return _write
