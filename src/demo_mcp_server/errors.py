"""
Error taxonomy for the MCP server.

Every failure raised by a capability handler or by argument validation is an
MCPServerError subclass. The registry converts them into protocol error
envelopes at the dispatch boundary; none of them terminate the process.
"""

from typing import Any, Dict, List, Optional


class MCPServerError(Exception):
    """Base class for all handler-level failures."""

    code: int = -32000

    def __init__(self, message: str, data: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.data = data or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "data": {"type": type(self).__name__, **self.data},
        }


class ValidationError(MCPServerError):
    """Arguments failed schema validation."""

    code = -32602

    def __init__(self, message: str, fields: Optional[List[Dict[str, str]]] = None):
        self.fields = fields or []
        super().__init__(message, data={"fields": self.fields})


class NotFoundError(MCPServerError):
    """No capability is registered under the requested name or URI."""

    code = -32601


class DomainError(MCPServerError):
    """Arguments are well-formed but outside the operation's domain."""

    code = -32000


class ConfigError(MCPServerError):
    """A required setting or credential is missing."""

    code = -32001


class GenerationError(MCPServerError):
    """The external inference endpoint call failed."""

    code = -32002


class ServerError(MCPServerError):
    """Unexpected exception raised inside a handler."""

    code = -32603


class RegistrationError(Exception):
    """Duplicate capability or registration after the registry was frozen."""
