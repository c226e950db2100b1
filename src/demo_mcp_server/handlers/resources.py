"""
MCP Resource Endpoint Handlers

Handles resource listing and reading for MCP protocol.
"""

import logging

from ..models import (
    ResourceContent,
    ResourceDefinition,
    ResourceListResponse,
    ResourceReadRequest,
    ResourceReadResponse,
)
from ..registry import Category, Registry

logger = logging.getLogger(__name__)


async def list_resources(registry: Registry) -> ResourceListResponse:
    """
    List all available resources.

    Returns:
        ResourceListResponse with list of resource definitions
    """
    resources = [
        ResourceDefinition(
            uri=descriptor.uri,
            name=descriptor.name,
            description=descriptor.description,
            mimeType=descriptor.mime_type
        )
        for descriptor in registry.list(Category.RESOURCE)
    ]

    return ResourceListResponse(resources=resources)


async def read_resource(registry: Registry, request: ResourceReadRequest) -> ResourceReadResponse:
    """
    Read a resource by URI.

    Args:
        registry: Registry holding the resource
        request: Resource read request with URI

    Returns:
        ResourceReadResponse with resource contents

    Raises:
        NotFoundError: If no resource is registered at the URI
    """
    logger.info(f"Reading resource '{request.uri}'")
    descriptor = registry.get(Category.RESOURCE, request.uri)

    result = await registry.dispatch(Category.RESOURCE, request.uri)
    if not result.ok:
        return ResourceReadResponse(
            contents=[ResourceContent(
                uri=descriptor.uri,
                mimeType="text/plain",
                text=f"Error: {result.error.message}"
            )],
            isError=True
        )

    return ResourceReadResponse(contents=result.value, isError=False)
