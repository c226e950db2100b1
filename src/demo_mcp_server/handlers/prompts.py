"""
MCP Prompt Endpoint Handlers

Handles prompt listing and retrieval for MCP protocol.
"""

import logging

from ..errors import ValidationError
from ..models import (
    PromptArgument,
    PromptDefinition,
    PromptListResponse,
    PromptGetRequest,
    PromptGetResponse,
    PromptMessage,
    TextContent,
)
from ..registry import Category, CapabilityDescriptor, Registry

logger = logging.getLogger(__name__)


def prompt_arguments(descriptor: CapabilityDescriptor) -> list:
    """Describe a prompt's schema fields as MCP prompt arguments."""
    return [
        PromptArgument(
            name=info.alias or field_name,
            description=info.description,
            required=info.is_required()
        )
        for field_name, info in descriptor.schema.model_fields.items()
    ]


async def list_prompts(registry: Registry) -> PromptListResponse:
    """
    List all available prompts.

    Returns:
        PromptListResponse with list of prompt definitions
    """
    prompts = [
        PromptDefinition(
            name=descriptor.name,
            description=descriptor.description,
            arguments=prompt_arguments(descriptor)
        )
        for descriptor in registry.list(Category.PROMPT)
    ]

    return PromptListResponse(prompts=prompts)


async def get_prompt(registry: Registry, request: PromptGetRequest) -> PromptGetResponse:
    """
    Render a prompt template with the given arguments.

    Args:
        registry: Registry holding the prompt
        request: Prompt get request with name and optional arguments

    Returns:
        PromptGetResponse with prompt messages

    Raises:
        NotFoundError: If prompt name is not found
        ValidationError: If the arguments do not match the prompt's schema
    """
    logger.info(f"Rendering prompt '{request.name}'")
    descriptor = registry.get(Category.PROMPT, request.name)

    result = await registry.dispatch(Category.PROMPT, request.name, request.arguments or {})
    if isinstance(result.error, ValidationError):
        raise result.error
    if not result.ok:
        return PromptGetResponse(
            description=descriptor.description,
            messages=[PromptMessage(
                role="assistant",
                content=TextContent(text=f"Error: {result.error.message}")
            )],
            isError=True
        )

    return PromptGetResponse(description=descriptor.description, messages=result.value, isError=False)
