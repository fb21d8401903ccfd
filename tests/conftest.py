"""Pytest fixtures and helpers for simple-mcp tests."""
from __future__ import annotations

from pathlib import Path

import pytest

# Repo root (parent of tests/)
REPO_ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture(autouse=True)
def _reset_config_cache(monkeypatch, tmp_path):
    """Clear the load_config LRU cache and reset _env before (and after) every test.

    Tests run from an empty temp directory so a developer's ``.env.local`` in the
    repo root never leaks into them.
    """
    from simple_mcp.config import loader as config_loader

    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SIMPLE_MCP_CONFIG_PATH", raising=False)
    monkeypatch.delenv("SIMPLE_MCP_ENV", raising=False)
    config_loader.load_config.cache_clear()
    config_loader._env = None
    yield
    config_loader.load_config.cache_clear()
    config_loader._env = None
