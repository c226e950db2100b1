"""
MCP Endpoint Handlers

This package contains handlers for MCP protocol endpoints:
- tools: Tool listing and execution
- resources: Resource listing and reading
- prompts: Prompt listing and retrieval

Each handler works against the registry it is given and shapes the registry's
dispatch result into the protocol response envelope.
"""
