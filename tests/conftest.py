"""Shared test fixtures for the hanitv test suite."""

from __future__ import annotations

import pytest

from hanitv import config


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path, monkeypatch):
    """Point the config dir at a temp dir and drop any cached config."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    monkeypatch.setenv("APPDATA", str(tmp_path))
    for var in ("HANITV_BASE_URL", "HANITV_API_URL", "HANITV_TIMEOUT"):
        monkeypatch.delenv(var, raising=False)
    config.reset_config()
    yield
    config.reset_config()
