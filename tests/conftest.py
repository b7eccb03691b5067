"""Pytest configuration for test environment setup.

- Forces ``DISABLE_FILE_LOGS=1`` to avoid writing log files during tests.
- Ensures the project root is available on ``sys.path`` for imports.
- Isolates every test from a developer's ``.env`` and ``TEMPLATIMATOR_*``
  environment variables.
"""

import os
import sys
from pathlib import Path

import pytest

os.environ.setdefault("DISABLE_FILE_LOGS", "1")  # Avoid creating log files during tests

# Ensure project root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)


@pytest.fixture(autouse=True)
def isolated_settings_env(monkeypatch, tmp_path: Path):
    """Point settings at an empty ``.env`` location and clear overrides."""
    import templatimator.config as cfg

    monkeypatch.setattr(cfg, "ENV_FILE", tmp_path / "no-such.env")
    for name in (
        "TEMPLATIMATOR_LOG_LEVEL",
        "TEMPLATIMATOR_LIBRARY_PATH",
        "TEMPLATIMATOR_DEFAULT_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DISABLE_FILE_LOGS", "1")
    yield
