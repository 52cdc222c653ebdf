"""Tests for connection configuration."""

import pytest

from nec_display_mcp.config import DEFAULT_HOST, DisplayConfig


def test_defaults():
    config = DisplayConfig.from_env()
    assert config.host == DEFAULT_HOST
    assert config.port == 7142
    assert config.timeout == 2.0


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("NEC_DISPLAY_HOST", "192.168.1.50")
    monkeypatch.setenv("NEC_DISPLAY_PORT", "7000")
    monkeypatch.setenv("NEC_DISPLAY_TIMEOUT", "0.5")
    config = DisplayConfig.from_env()
    assert config == DisplayConfig(host="192.168.1.50", port=7000, timeout=0.5)


def test_invalid_port(monkeypatch):
    monkeypatch.setenv("NEC_DISPLAY_PORT", "telnet")
    with pytest.raises(ValueError):
        DisplayConfig.from_env()
