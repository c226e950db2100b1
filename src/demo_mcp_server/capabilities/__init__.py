"""
Server capabilities.

build_registry() registers every tool, resource and prompt the server exposes
and returns the frozen registry shared by the transports.
"""

from .models import CalculatorArgs, CodeReviewArgs, GreetingArgs, ImageArgs, TimeArgs
from .prompts import code_review
from .resources import SERVER_INFO_URI, make_server_info
from .tools import calculator, generate_image, get_time, greeting
from ..registry import Category, NoArguments, Registry


def build_registry() -> Registry:
    """Create and freeze the registry of all server capabilities."""
    registry = Registry()

    # Tools
    registry.register(
        Category.TOOL,
        "greeting",
        GreetingArgs,
        greeting,
        description="Greet someone by name in Korean, English or Japanese",
    )
    registry.register(
        Category.TOOL,
        "calculator",
        CalculatorArgs,
        calculator,
        description="Perform basic arithmetic (add, subtract, multiply, divide) on two numbers",
    )
    registry.register(
        Category.TOOL,
        "get_time",
        TimeArgs,
        get_time,
        description="Get the current time in a time zone, as full, date, time or ISO-8601",
    )
    registry.register(
        Category.TOOL,
        "generate_image",
        ImageArgs,
        generate_image,
        description="Generate a PNG image from a text prompt using a Hugging Face text-to-image model",
    )

    # Resources
    registry.register(
        Category.RESOURCE,
        "server_info",
        NoArguments,
        make_server_info(registry),
        description="Server identity, registered capabilities and live process metrics",
        uri=SERVER_INFO_URI,
        mime_type="application/json",
    )

    # Prompts
    registry.register(
        Category.PROMPT,
        "code_review",
        CodeReviewArgs,
        code_review,
        description="Ask a model to review code for quality, performance, security and style",
    )

    return registry.freeze()


__all__ = ["build_registry"]
