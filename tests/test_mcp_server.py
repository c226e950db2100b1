"""
Tests for MCP Server HTTP endpoints

Tests cover:
- Tool listing and execution
- Resource listing and reading
- Prompt listing and retrieval
- Error envelopes
"""

import json
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

# Import the MCP server app
from demo_mcp_server.server import app, create_app

# Create test client
client = TestClient(app)


# ============================================================================
# Health Check Tests
# ============================================================================

def test_health_check():
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "demo-mcp-server"


def test_root_endpoint():
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert "service" in data
    assert "endpoints" in data


# ============================================================================
# Tool Endpoint Tests
# ============================================================================

def test_list_tools():
    """Test listing tools."""
    response = client.get("/tool/list")
    assert response.status_code == 200
    data = response.json()
    assert "tools" in data
    assert len(data["tools"]) == 4

    tool_names = [tool["name"] for tool in data["tools"]]
    assert tool_names == ["greeting", "calculator", "get_time", "generate_image"]

    get_time = next(tool for tool in data["tools"] if tool["name"] == "get_time")
    assert "timeZone" in get_time["inputSchema"]["properties"]


def test_call_tool_calculator():
    """Test calling the calculator tool."""
    request = {
        "name": "calculator",
        "arguments": {"operation": "multiply", "a": 6, "b": 7}
    }

    response = client.post("/tool/call", json=request)
    assert response.status_code == 200
    data = response.json()
    assert data["isError"] is False
    assert data["content"] == [{"type": "text", "text": "6 × 7 = 42"}]


def test_call_tool_greeting():
    """Test calling the greeting tool."""
    request = {
        "name": "greeting",
        "arguments": {"name": "Alice", "language": "en"}
    }

    response = client.post("/tool/call", json=request)
    assert response.status_code == 200
    assert response.json()["content"][0]["text"] == "Hello, Alice! 👋"


def test_call_tool_divide_by_zero():
    """Test that domain errors come back as an error envelope."""
    request = {
        "name": "calculator",
        "arguments": {"operation": "divide", "a": 1, "b": 0}
    }

    response = client.post("/tool/call", json=request)
    assert response.status_code == 200
    data = response.json()
    assert data["isError"] is True
    assert "Division by zero" in data["content"][0]["text"]


def test_call_tool_invalid_name():
    """Test calling non-existent tool."""
    request = {
        "name": "invalid_tool",
        "arguments": {}
    }

    response = client.post("/tool/call", json=request)
    assert response.status_code == 400
    data = response.json()
    assert data["data"]["type"] == "NotFoundError"


def test_call_tool_missing_arguments():
    """Test calling tool with missing required arguments."""
    request = {
        "name": "calculator",
        "arguments": {}
    }

    response = client.post("/tool/call", json=request)
    assert response.status_code == 200  # Tool handles error internally
    data = response.json()
    assert data["isError"] is True
    assert "operation" in data["content"][0]["text"]


def test_call_generate_image_without_token(monkeypatch):
    """Test that a missing credential is reported, not crashed on."""
    monkeypatch.delenv("HF_TOKEN", raising=False)

    response = client.post("/tool/call", json={"name": "generate_image", "arguments": {"prompt": "a cat"}})
    assert response.status_code == 200
    data = response.json()
    assert data["isError"] is True
    assert "HF_TOKEN" in data["content"][0]["text"]


@patch("demo_mcp_server.capabilities.tools.requests.post")
def test_call_generate_image(mock_post, monkeypatch):
    """Test image content is returned as base64 PNG."""
    monkeypatch.setenv("HF_TOKEN", "hf_test_token")
    mock_post.return_value = MagicMock(
        ok=True,
        status_code=200,
        headers={"Content-Type": "image/png"},
        content=b"\x89PNG\r\n\x1a\n",
    )

    response = client.post("/tool/call", json={"name": "generate_image", "arguments": {"prompt": "a cat"}})
    assert response.status_code == 200
    block = response.json()["content"][0]
    assert block["type"] == "image"
    assert block["mimeType"] == "image/png"
    assert block["data"] == "iVBORw0KGgo="


# ============================================================================
# Resource Endpoint Tests
# ============================================================================

def test_list_resources():
    """Test listing resources."""
    response = client.get("/resource/list")
    assert response.status_code == 200
    data = response.json()
    assert data["resources"] == [{
        "uri": "server://info",
        "name": "server_info",
        "description": "Server identity, registered capabilities and live process metrics",
        "mimeType": "application/json",
    }]


def test_read_resource_server_info():
    """Test reading the server info resource."""
    response = client.post("/resource/read", json={"uri": "server://info"})
    assert response.status_code == 200
    data = response.json()
    assert data["isError"] is False
    content = data["contents"][0]
    assert content["mimeType"] == "application/json"

    info = json.loads(content["text"])
    assert [tool["name"] for tool in info["tools"]] == ["greeting", "calculator", "get_time", "generate_image"]
    assert [res["name"] for res in info["resources"]] == ["server_info"]


def test_read_resource_not_found():
    """Test reading non-existent resource."""
    response = client.post("/resource/read", json={"uri": "server://nonexistent"})
    assert response.status_code == 400


# ============================================================================
# Prompt Endpoint Tests
# ============================================================================

def test_list_prompts():
    """Test listing prompts."""
    response = client.get("/prompt/list")
    assert response.status_code == 200
    data = response.json()
    prompt = data["prompts"][0]
    assert prompt["name"] == "code_review"

    arguments = {arg["name"]: arg["required"] for arg in prompt["arguments"]}
    assert arguments == {"code": True, "language": False, "focus": False}


def test_get_prompt_code_review():
    """Test rendering the code review prompt."""
    request = {
        "name": "code_review",
        "arguments": {"code": "def f(): pass", "language": "python", "focus": "performance"}
    }

    response = client.post("/prompt/get", json=request)
    assert response.status_code == 200
    data = response.json()
    assert data["isError"] is False
    assert len(data["messages"]) == 1
    message = data["messages"][0]
    assert message["role"] == "user"
    assert "```python\ndef f(): pass\n```" in message["content"]["text"]


def test_get_prompt_invalid_name():
    """Test getting non-existent prompt."""
    response = client.post("/prompt/get", json={"name": "nonexistent_prompt"})
    assert response.status_code == 400


def test_get_prompt_missing_code():
    """Test prompt argument validation."""
    response = client.post("/prompt/get", json={"name": "code_review", "arguments": {}})
    assert response.status_code == 400
    data = response.json()
    assert data["data"]["fields"][0]["field"] == "code"


# ============================================================================
# Integration Tests
# ============================================================================

def test_app_uses_given_registry(registry):
    """Test that the app serves the registry it is built with."""
    custom_client = TestClient(create_app(registry))
    assert custom_client.app.state.registry is registry

    response = custom_client.get("/tool/list")
    assert response.status_code == 200


def test_full_workflow():
    """Test a full workflow: list tools, call tool, list resources, list prompts."""
    response = client.get("/tool/list")
    assert response.status_code == 200
    tools = response.json()["tools"]
    assert len(tools) > 0

    response = client.post("/tool/call", json={"name": tools[0]["name"], "arguments": {"name": "Bob"}})
    assert response.status_code == 200

    response = client.get("/resource/list")
    assert response.status_code == 200
    resources = response.json()["resources"]
    assert len(resources) > 0

    response = client.get("/prompt/list")
    assert response.status_code == 200
    prompts = response.json()["prompts"]
    assert len(prompts) > 0
