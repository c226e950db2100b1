"""
Resource handlers

Exposes server://info, a read-only JSON snapshot of the server identity, its
registered tools and resources, and live process metrics. The snapshot is
computed on every read.
"""

import json
import logging
import os
import platform
import resource
import sys
import time
from datetime import datetime, timezone
from typing import Any, Callable, Dict

from .. import SERVER_NAME, __version__
from ..registry import Category, NoArguments, Registry

logger = logging.getLogger(__name__)

SERVER_INFO_URI = "server://info"
SERVER_DESCRIPTION = "Demo MCP server exposing greeting, calculator, time and image generation tools"

_STARTED_AT = time.monotonic()


def _memory_usage_kib() -> int:
    """Peak resident set size of this process in KiB."""
    max_rss = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # macOS reports bytes, Linux reports KiB
    if sys.platform == "darwin":
        return max_rss // 1024
    return max_rss


def process_metrics() -> Dict[str, Any]:
    return {
        "python_version": platform.python_version(),
        "platform": platform.platform(),
        "pid": os.getpid(),
        "uptime_seconds": round(time.monotonic() - _STARTED_AT, 3),
        "max_rss_kib": _memory_usage_kib(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def server_info_snapshot(registry: Registry) -> Dict[str, Any]:
    """Build the server://info document for a registry."""
    return {
        "server": {
            "name": SERVER_NAME,
            "version": __version__,
            "description": SERVER_DESCRIPTION,
        },
        "tools": [
            {
                "name": tool.name,
                "description": tool.description,
                "parameters": tool.parameters(),
            }
            for tool in registry.list(Category.TOOL)
        ],
        "resources": [
            {
                "uri": res.uri,
                "name": res.name,
                "description": res.description,
                "mimeType": res.mime_type,
            }
            for res in registry.list(Category.RESOURCE)
        ],
        "metrics": process_metrics(),
    }


def make_server_info(registry: Registry) -> Callable[[NoArguments], str]:
    """Bind the server://info handler to the registry it describes."""

    def server_info(_args: NoArguments) -> str:
        return json.dumps(server_info_snapshot(registry), indent=2, ensure_ascii=False, default=str)

    return server_info
