"""
Error taxonomy for the Quartzy MCP server.

Every error raised while handling a tool call derives from QuartzyError so the
dispatcher can turn it into an error envelope in one place.
"""

from typing import List, Optional


class QuartzyError(Exception):
    """Base class for all adapter errors."""


class ConfigurationError(QuartzyError):
    """Raised when a required setting (the access token) is not configured."""

    def __init__(self, env_var: str, message: Optional[str] = None):
        self.env_var = env_var
        super().__init__(message or f"{env_var} environment variable is required")


class ValidationError(QuartzyError):
    """Raised when tool arguments are missing, mistyped or out of range."""

    def __init__(self, problems: List[str], *, parameter: Optional[str] = None):
        self.problems = list(problems)
        self.parameter = parameter
        super().__init__("; ".join(self.problems))


class UpstreamError(QuartzyError):
    """Raised for a non-2xx Quartzy response or a failed HTTP exchange."""

    def __init__(self, status_code: Optional[int], body: str, *, url: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        self.url = url
        if status_code is None:
            message = f"Request to {url} failed: {body}"
        else:
            message = f"HTTP {status_code}: {body}"
        super().__init__(message)


class UnknownToolError(QuartzyError):
    """Raised when a call names a tool that is not in the catalog."""

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")
