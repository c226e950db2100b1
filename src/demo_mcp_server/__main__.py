"""
Command-line entry point.

Usage:
    demo-mcp-server                         # stdio transport (for MCP hosts)
    demo-mcp-server --transport http        # HTTP endpoints via uvicorn

Exit codes: 0 on normal shutdown, 1 when the transport cannot be started.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError

from . import SERVER_NAME, __version__
from .capabilities import build_registry
from .config import configure_logging, get_settings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=SERVER_NAME, description="Demo Model Context Protocol server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport to serve on (default: stdio)",
    )
    parser.add_argument("--host", default=None, help="HTTP bind host (default: MCP_HTTP_HOST or 127.0.0.1)")
    parser.add_argument("--port", type=int, default=None, help="HTTP bind port (default: MCP_HTTP_PORT or 8001)")
    parser.add_argument("--log-level", default=None, help="Logging level (default: LOG_LEVEL or INFO)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings()
    except PydanticValidationError as e:
        configure_logging(args.log_level or "INFO")
        logger.error(f"Invalid configuration: {e}")
        return 1

    configure_logging(args.log_level or settings.log_level)
    registry = build_registry()

    try:
        if args.transport == "http":
            import uvicorn
            from .server import create_app

            uvicorn.run(
                create_app(registry),
                host=args.host or settings.http_host,
                port=args.port or settings.http_port,
                log_level=(args.log_level or settings.log_level).lower(),
            )
        else:
            from .stdio import run_stdio

            asyncio.run(run_stdio(registry))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    except Exception as e:
        logger.error(f"Failed to run {args.transport} transport: {e}", exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
