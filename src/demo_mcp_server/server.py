"""
MCP Server - HTTP Application

Implements Model Context Protocol server exposing:
- /tool/* endpoints for tools
- /resource/* endpoints for resources
- /prompt/* endpoints for prompts

All endpoints serve the same registry as the stdio transport.
"""

import logging
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import SERVER_NAME, __version__
from .capabilities import build_registry
from .errors import MCPServerError
from .models import (
    ToolListResponse,
    ToolCallRequest,
    ToolCallResponse,
    ResourceListResponse,
    ResourceReadRequest,
    ResourceReadResponse,
    PromptListResponse,
    PromptGetRequest,
    PromptGetResponse,
    MCPError,
)
from .handlers import tools, resources, prompts
from .registry import Registry

logger = logging.getLogger(__name__)


def get_registry(request: Request) -> Registry:
    """Dependency returning the registry bound to the application."""
    return request.app.state.registry


# ============================================================================
# Error Handlers
# ============================================================================

async def mcp_error_handler(request: Request, exc: MCPServerError):
    """Handle lookup and validation failures raised outside a tool call."""
    return JSONResponse(
        status_code=400,
        content=MCPError(**exc.to_dict()).model_dump()
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content=MCPError(
            code=500,
            message="Internal server error",
            data={"type": type(exc).__name__, "detail": str(exc)}
        ).model_dump()
    )


def create_app(registry: Optional[Registry] = None) -> FastAPI:
    """Build the HTTP application around a registry (a fresh one by default)."""
    app = FastAPI(
        title=f"MCP Server - {SERVER_NAME}",
        description="Model Context Protocol server exposing demo tools, resources, and prompts",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.registry = registry or build_registry()

    # CORS middleware for cross-origin requests
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(MCPServerError, mcp_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # ========================================================================
    # Health Check
    # ========================================================================

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "service": SERVER_NAME,
            "version": __version__
        }

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint with API information."""
        return {
            "service": SERVER_NAME,
            "version": __version__,
            "protocol": "Model Context Protocol",
            "endpoints": {
                "tools": "/tool/list, /tool/call",
                "resources": "/resource/list, /resource/read",
                "prompts": "/prompt/list, /prompt/get",
                "docs": "/docs"
            }
        }

    # ========================================================================
    # Tool Endpoints
    # ========================================================================

    @app.get(
        "/tool/list",
        response_model=ToolListResponse,
        tags=["Tools"],
        summary="List available tools"
    )
    async def list_tools_endpoint(registry: Registry = Depends(get_registry)):
        """
        List all available tools.

        Returns a list of tool definitions with their schemas.
        """
        return await tools.list_tools(registry)

    @app.post(
        "/tool/call",
        response_model=ToolCallResponse,
        tags=["Tools"],
        summary="Call a tool"
    )
    async def call_tool_endpoint(
        request: ToolCallRequest,
        registry: Registry = Depends(get_registry)
    ):
        """
        Execute a tool call.

        - **name**: Tool name to call
        - **arguments**: Tool arguments as JSON object

        Returns tool execution result.
        """
        return await tools.call_tool(registry, request)

    # ========================================================================
    # Resource Endpoints
    # ========================================================================

    @app.get(
        "/resource/list",
        response_model=ResourceListResponse,
        tags=["Resources"],
        summary="List available resources"
    )
    async def list_resources_endpoint(registry: Registry = Depends(get_registry)):
        """
        List all available resources.

        Returns a list of resource definitions with their URIs.
        """
        return await resources.list_resources(registry)

    @app.post(
        "/resource/read",
        response_model=ResourceReadResponse,
        tags=["Resources"],
        summary="Read a resource"
    )
    async def read_resource_endpoint(
        request: ResourceReadRequest,
        registry: Registry = Depends(get_registry)
    ):
        """
        Read a resource by URI.

        - **uri**: Resource URI (e.g., "server://info")

        Returns resource contents.
        """
        return await resources.read_resource(registry, request)

    # ========================================================================
    # Prompt Endpoints
    # ========================================================================

    @app.get(
        "/prompt/list",
        response_model=PromptListResponse,
        tags=["Prompts"],
        summary="List available prompts"
    )
    async def list_prompts_endpoint(registry: Registry = Depends(get_registry)):
        """
        List all available prompts.

        Returns a list of prompt definitions with their arguments.
        """
        return await prompts.list_prompts(registry)

    @app.post(
        "/prompt/get",
        response_model=PromptGetResponse,
        tags=["Prompts"],
        summary="Get a prompt"
    )
    async def get_prompt_endpoint(
        request: PromptGetRequest,
        registry: Registry = Depends(get_registry)
    ):
        """
        Render a prompt template.

        - **name**: Prompt name
        - **arguments**: Optional prompt arguments

        Returns prompt messages ready for LLM use.
        """
        return await prompts.get_prompt(registry, request)

    return app


app = create_app()
