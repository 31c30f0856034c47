"""Shared fixtures."""

import io
from pathlib import Path

import pytest
import structlog
from rich.console import Console

from fti.config.context import AppContext
from fti.core.log import configure_logging

BASE_URL = "https://api.fti.test"


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep tests away from the real home directory and FTI_* variables."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.delenv("FTI_API_KEY", raising=False)
    monkeypatch.delenv("FTI_API_URL", raising=False)


@pytest.fixture(autouse=True)
def stderr_logging():
    """Bind structlog to the stderr stream of the running test."""
    configure_logging()
    yield
    structlog.reset_defaults()


@pytest.fixture
def settings_path(tmp_path) -> Path:
    return tmp_path / ".fti" / "config.toml"


def make_console() -> Console:
    return Console(
        file=io.StringIO(), width=200, force_terminal=False, color_system=None
    )


@pytest.fixture
def make_ctx(settings_path):
    """Build an AppContext writing to in-memory consoles."""

    def _make(**overrides) -> AppContext:
        values = {
            "settings_path": settings_path,
            "base_url_override": BASE_URL,
            "console": make_console(),
            "err_console": make_console(),
        }
        values.update(overrides)
        return AppContext(**values)

    return _make
