"""
MCP stdio transport

Binds a registry to the MCP SDK's low-level server and serves it over
stdin/stdout. The SDK owns the wire encoding; this module only translates
between registry descriptors/results and the SDK's protocol types.

Failure translation:
- tool failures are raised back to the SDK, which answers with an
  isError tool result carrying the message
- resource and prompt failures are raised as McpError so the client gets a
  JSON-RPC error with the taxonomy code
"""

import logging
from typing import Dict, Iterable, List, Optional

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError
from pydantic import AnyUrl

from . import SERVER_NAME, __version__
from .capabilities import build_registry
from .errors import MCPServerError, NotFoundError
from .handlers.prompts import prompt_arguments
from .models import ContentBlock, ImageContent
from .registry import Category, DispatchResult, Registry

logger = logging.getLogger(__name__)


def _to_mcp_error(exc: MCPServerError) -> McpError:
    return McpError(types.ErrorData(code=exc.code, message=exc.message, data=exc.data or None))


def _unwrap(result: DispatchResult):
    if result.error is not None:
        raise _to_mcp_error(result.error)
    return result.value


def _to_sdk_content(block: ContentBlock):
    if isinstance(block, ImageContent):
        return types.ImageContent(type="image", data=block.data, mimeType=block.mimeType)
    return types.TextContent(type="text", text=block.text)


def _resource_key(registry: Registry, uri: AnyUrl) -> str:
    """Map a parsed URI back to the key it was registered under."""
    key = str(uri)
    registered = {descriptor.uri for descriptor in registry.list(Category.RESOURCE)}
    if key not in registered and key.rstrip("/") in registered:
        return key.rstrip("/")
    return key


def create_server(registry: Registry) -> Server:
    """Create a low-level MCP server answering from the given registry."""
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return [
            types.Tool(
                name=descriptor.name,
                description=descriptor.description,
                inputSchema=descriptor.input_schema(),
            )
            for descriptor in registry.list(Category.TOOL)
        ]

    # Arguments are validated by the registry against the pydantic schema.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: Dict) -> List[types.TextContent | types.ImageContent]:
        logger.info(f"Calling tool '{name}'")
        result = await registry.dispatch(Category.TOOL, name, arguments)
        blocks = result.unwrap()
        return [_to_sdk_content(block) for block in blocks]

    @server.list_resources()
    async def list_resources() -> List[types.Resource]:
        return [
            types.Resource(
                uri=descriptor.uri,
                name=descriptor.name,
                description=descriptor.description,
                mimeType=descriptor.mime_type,
            )
            for descriptor in registry.list(Category.RESOURCE)
        ]

    @server.read_resource()
    async def read_resource(uri: AnyUrl) -> Iterable[ReadResourceContents]:
        key = _resource_key(registry, uri)
        logger.info(f"Reading resource '{key}'")
        contents = _unwrap(await registry.dispatch(Category.RESOURCE, key))
        return [ReadResourceContents(content=item.text, mime_type=item.mimeType) for item in contents]

    @server.list_prompts()
    async def list_prompts() -> List[types.Prompt]:
        return [
            types.Prompt(
                name=descriptor.name,
                description=descriptor.description,
                arguments=[
                    types.PromptArgument(name=arg.name, description=arg.description, required=arg.required)
                    for arg in prompt_arguments(descriptor)
                ],
            )
            for descriptor in registry.list(Category.PROMPT)
        ]

    @server.get_prompt()
    async def get_prompt(name: str, arguments: Optional[Dict[str, str]]) -> types.GetPromptResult:
        logger.info(f"Rendering prompt '{name}'")
        try:
            descriptor = registry.get(Category.PROMPT, name)
        except NotFoundError as exc:
            raise _to_mcp_error(exc) from None
        messages = _unwrap(await registry.dispatch(Category.PROMPT, name, arguments or {}))
        return types.GetPromptResult(
            description=descriptor.description,
            messages=[
                types.PromptMessage(
                    role=message.role,
                    content=types.TextContent(type="text", text=message.content.text),
                )
                for message in messages
            ],
        )

    return server


async def run_stdio(registry: Optional[Registry] = None) -> None:
    """Serve the registry over stdin/stdout until the client disconnects."""
    server = create_server(registry or build_registry())
    async with stdio_server() as (read_stream, write_stream):
        logger.info(f"{SERVER_NAME} {__version__} running on stdio")
        await server.run(read_stream, write_stream, server.create_initialization_options())
