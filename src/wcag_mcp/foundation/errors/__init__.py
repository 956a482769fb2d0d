"""Unified error handling for wcag_mcp.

- ErrorCode: Standard error codes for tool failures
- ToolError/ToolException: Structured errors and exceptions
- JsonRpcError: Protocol-level failures with their wire codes
- BridgeUpstreamError: REST bridge backend failures
- DataLoadError: Startup failure loading the dataset
"""

from .errors import (
    INTERNAL_ERROR,
    PARSE_ERROR,
    BridgeUpstreamError,
    DataLoadError,
    ErrorCode,
    JsonRpcError,
    ToolError,
    ToolException,
)

__all__ = [
    # Core errors
    "ErrorCode", "ToolError", "ToolException",
    # Protocol
    "JsonRpcError", "PARSE_ERROR", "INTERNAL_ERROR",
    # Transports and startup
    "BridgeUpstreamError", "DataLoadError",
]
