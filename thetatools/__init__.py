"""
Theta EdgeCloud on-demand API tools for MCP.

Exposes service discovery, inference submission, status polling and
upload-URL issuance of the on-demand model API as MCP tools.
"""

from .api.client import ThetaApiClient, get_client, reset_client
from .core.errors import ApiError, ConfigError, NotFoundError, ThetaToolsError
from .core.registry import ToolRegistry
from .core.tool_manager import ToolManager, ToolResult
from .tools import default_registry

__version__ = "0.1.0"

__all__ = [
    "ThetaApiClient",
    "get_client",
    "reset_client",
    "ApiError",
    "ConfigError",
    "NotFoundError",
    "ThetaToolsError",
    "ToolRegistry",
    "ToolManager",
    "ToolResult",
    "default_registry",
]
