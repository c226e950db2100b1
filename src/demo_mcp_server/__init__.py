"""
Demo Model Context Protocol (MCP) Server

This package implements an MCP server that exposes:
- Tools: greeting, calculator, get_time, generate_image
- Resources: server://info (server identity, capabilities and live metrics)
- Prompts: code_review

Capabilities are held in an explicit registry built once at startup and
served over stdio (the MCP host transport) or over HTTP endpoints.
"""

__version__ = "1.0.0"

SERVER_NAME = "demo-mcp-server"
