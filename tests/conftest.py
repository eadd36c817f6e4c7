"""Pytest session bootstrap for this repository.

Responsibilities:
- Ensure the `ollamakit` package is importable from a source checkout
- Keep developer OLLAMA_* variables and `.env` files out of settings tests
"""

# Ensure the project root (containing the 'ollamakit' package) is importable during tests
import os
import sys

import pytest

HERE = os.path.dirname(__file__)
ROOT = os.path.abspath(os.path.join(HERE, '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

_OLLAMA_ENV = (
    "OLLAMA_HOST",
    "OLLAMA_API_PREFIX",
    "OLLAMA_TIMEOUT",
    "OLLAMA_MAX_RETRIES",
    "OLLAMA_RETRY_DELAY",
    "OLLAMA_KEEP_ALIVE",
    "OLLAMA_ALLOW_INSECURE",
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Run every test from an empty directory with no OLLAMA_* overrides."""
    for name in _OLLAMA_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    import ollamakit.infrastructure.config.settings as settings_mod
    monkeypatch.setattr(settings_mod, "_settings", None)
    yield
