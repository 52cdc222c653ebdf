"""Shared fixtures."""

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Run every test against the built-in connection defaults."""
    for name in ("NEC_DISPLAY_HOST", "NEC_DISPLAY_PORT", "NEC_DISPLAY_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
