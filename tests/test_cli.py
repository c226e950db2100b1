# Tests for the command-line entry point and its exit codes

# region imports
from unittest.mock import AsyncMock, patch

import pytest

from demo_mcp_server.__main__ import build_parser, main
# endregion

# region tests
def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.transport == "stdio"
    assert args.host is None
    assert args.port is None


def test_parser_rejects_unknown_transport():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--transport", "websocket"])


def test_stdio_transport_normal_exit():
    with patch("demo_mcp_server.stdio.run_stdio", new_callable=AsyncMock) as mock_run:
        assert main([]) == 0
    mock_run.assert_awaited_once()


def test_stdio_transport_failure_exits_with_one():
    with patch("demo_mcp_server.stdio.run_stdio", side_effect=OSError("stdin is closed")):
        assert main(["--transport", "stdio"]) == 1


def test_http_transport_uses_settings(monkeypatch):
    monkeypatch.setenv("MCP_HTTP_PORT", "9100")
    with patch("uvicorn.run") as mock_run:
        assert main(["--transport", "http", "--host", "0.0.0.0"]) == 0

    _, kwargs = mock_run.call_args
    assert kwargs["host"] == "0.0.0.0"
    assert kwargs["port"] == 9100


def test_invalid_configuration_exits_with_one(monkeypatch):
    monkeypatch.setenv("MCP_HTTP_PORT", "not-a-port")
    assert main([]) == 1
# endregion
