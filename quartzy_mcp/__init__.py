"""
Quartzy MCP Server - exposes the Quartzy lab inventory API as MCP tools.
"""

__version__ = "1.0.0"

from .client import QuartzyClient
from .config import QuartzyConfig
from .dispatcher import ToolDispatcher
from .errors import (
    ConfigurationError,
    QuartzyError,
    UnknownToolError,
    UpstreamError,
    ValidationError,
)
from .schemas import ToolDescriptor, ToolResponse

__all__ = [
    "__version__",
    "QuartzyClient",
    "QuartzyConfig",
    "ToolDispatcher",
    "ToolDescriptor",
    "ToolResponse",
    "QuartzyError",
    "ConfigurationError",
    "ValidationError",
    "UpstreamError",
    "UnknownToolError",
]
