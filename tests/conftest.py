"""Root test configuration - session-level cleanup of runtime artifacts"""

from pathlib import Path

import pytest


_PROJECT_ROOT = Path(__file__).parent.parent

_CLEANUP_FILES = ["betapad.db", "test.db"]


@pytest.fixture(scope="session", autouse=True)
def cleanup_artifacts():
    """Remove DB files created in the project root during the test session."""
    yield
    for name in _CLEANUP_FILES:
        p = _PROJECT_ROOT / name
        if p.exists():
            p.unlink()


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep developer BETAPAD_* settings out of tests."""
    for name in ("DB_URL", "INDENT_UNIT", "RESOURCE_EXTENSIONS", "HOST", "PORT", "LOG_LEVEL"):
        monkeypatch.delenv(f"BETAPAD_{name}", raising=False)
