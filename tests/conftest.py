from __future__ import annotations

import sys
from pathlib import Path

import pytest


MODE_KEYS = ("APP_ENV", "NODE_ENV", "LOG_LEVEL")


def pytest_configure() -> None:
    root = Path(__file__).resolve().parents[1]
    if (root / "chief_of_staff").exists():
        sys.path.insert(0, str(root))


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Isolate tests from the caller's environment and working directory.

    Keys are registered with monkeypatch before removal so that values a
    `.env` file writes into os.environ are rolled back after the test.
    """

    for key in MODE_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    return tmp_path
