"""Shared fixtures for the MCP server tests."""

from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from demo_mcp_server.capabilities import build_registry


FIXED_NOW = datetime(2026, 10, 17, 6, 4, 5, 123456, tzinfo=timezone.utc)


@pytest.fixture
def registry():
    """A freshly built, frozen registry of all server capabilities."""
    return build_registry()


@pytest.fixture
def no_hf_token(monkeypatch):
    """Make sure the inference credential is not configured."""
    monkeypatch.delenv("HF_TOKEN", raising=False)


@pytest.fixture
def hf_token(monkeypatch):
    """Configure a dummy inference credential."""
    monkeypatch.setenv("HF_TOKEN", "hf_test_token")
    yield "hf_test_token"


@pytest.fixture
def fixed_clock():
    """Freeze the time tool's clock at FIXED_NOW."""
    with patch("demo_mcp_server.capabilities.tools._utcnow", return_value=FIXED_NOW):
        yield FIXED_NOW
