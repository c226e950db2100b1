"""
MCP Tool Endpoint Handlers

Handles tool listing and execution for MCP protocol.
"""

import logging

from ..models import (
    TextContent,
    ToolDefinition,
    ToolListResponse,
    ToolCallRequest,
    ToolCallResponse,
)
from ..registry import Category, Registry

logger = logging.getLogger(__name__)


async def list_tools(registry: Registry) -> ToolListResponse:
    """
    List all available tools.

    Returns:
        ToolListResponse with list of tool definitions
    """
    tools = [
        ToolDefinition(
            name=descriptor.name,
            description=descriptor.description,
            inputSchema=descriptor.input_schema()
        )
        for descriptor in registry.list(Category.TOOL)
    ]

    return ToolListResponse(tools=tools)


async def call_tool(registry: Registry, request: ToolCallRequest) -> ToolCallResponse:
    """
    Execute a tool call.

    Args:
        registry: Registry holding the tool
        request: Tool call request with name and arguments

    Returns:
        ToolCallResponse with tool output, or an isError envelope when the
        arguments are invalid or the tool fails

    Raises:
        NotFoundError: If tool name is not found
    """
    logger.info(f"Calling tool '{request.name}'")
    registry.get(Category.TOOL, request.name)

    result = await registry.dispatch(Category.TOOL, request.name, request.arguments)
    if not result.ok:
        return ToolCallResponse(
            content=[TextContent(text=f"Error: {result.error.message}")],
            isError=True
        )

    return ToolCallResponse(content=result.value, isError=False)
