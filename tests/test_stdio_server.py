"""
Tests for the MCP stdio server

Runs the low-level server against an in-memory client session, so the
protocol encoding is exercised exactly as an MCP host would see it.
"""

import json

import pytest
from mcp.shared.exceptions import McpError
from mcp.shared.memory import create_connected_server_and_client_session
from pydantic import AnyUrl

from demo_mcp_server.registry import Category
from demo_mcp_server.stdio import create_server


@pytest.mark.asyncio
async def test_lists_match_registry(registry):
    async with create_connected_server_and_client_session(create_server(registry)) as session:
        tools = await session.list_tools()
        resources = await session.list_resources()
        prompts = await session.list_prompts()

    assert [tool.name for tool in tools.tools] == registry.names(Category.TOOL)
    assert [str(res.uri) for res in resources.resources] == ["server://info"]
    assert [prompt.name for prompt in prompts.prompts] == ["code_review"]

    calculator = next(tool for tool in tools.tools if tool.name == "calculator")
    assert calculator.inputSchema["required"] == ["operation", "a", "b"]


@pytest.mark.asyncio
async def test_call_tool(registry):
    async with create_connected_server_and_client_session(create_server(registry)) as session:
        result = await session.call_tool("calculator", {"operation": "multiply", "a": 6, "b": 7})

    assert result.isError is False
    assert result.content[0].text == "6 × 7 = 42"


@pytest.mark.asyncio
async def test_tool_failures_are_error_results(registry, no_hf_token):
    async with create_connected_server_and_client_session(create_server(registry)) as session:
        divide = await session.call_tool("calculator", {"operation": "divide", "a": 1, "b": 0})
        invalid = await session.call_tool("greeting", {"language": "en"})
        image = await session.call_tool("generate_image", {"prompt": "a cat"})
        unknown = await session.call_tool("nope", {})

    assert divide.isError is True
    assert "Division by zero" in divide.content[0].text
    assert invalid.isError is True
    assert "name" in invalid.content[0].text
    assert image.isError is True
    assert "HF_TOKEN" in image.content[0].text
    assert unknown.isError is True


@pytest.mark.asyncio
async def test_read_server_info(registry):
    async with create_connected_server_and_client_session(create_server(registry)) as session:
        result = await session.read_resource(AnyUrl("server://info"))

    content = result.contents[0]
    assert content.mimeType == "application/json"
    info = json.loads(content.text)
    assert [tool["name"] for tool in info["tools"]] == registry.names(Category.TOOL)


@pytest.mark.asyncio
async def test_read_unknown_resource_is_protocol_error(registry):
    async with create_connected_server_and_client_session(create_server(registry)) as session:
        with pytest.raises(McpError) as exc_info:
            await session.read_resource(AnyUrl("server://missing"))

    assert exc_info.value.error.code == -32601


@pytest.mark.asyncio
async def test_get_prompt(registry):
    async with create_connected_server_and_client_session(create_server(registry)) as session:
        result = await session.get_prompt("code_review", {"code": "x = 1", "focus": "style"})

        with pytest.raises(McpError) as exc_info:
            await session.get_prompt("code_review", {"focus": "style"})

    assert len(result.messages) == 1
    assert result.messages[0].role == "user"
    assert "x = 1" in result.messages[0].content.text
    assert exc_info.value.error.code == -32602
