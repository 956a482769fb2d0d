"""Foundation layer: tool abstractions, registry, errors, configuration, logging."""

from .core import BaseTool, EmptyParams, ServerInfo, ToolMetadata, ToolParams
from .errors import (
    BridgeUpstreamError,
    DataLoadError,
    ErrorCode,
    JsonRpcError,
    ToolError,
    ToolException,
)
from .registry import ToolRegistry

__all__ = [
    "BaseTool", "EmptyParams", "ServerInfo", "ToolMetadata", "ToolParams",
    "ToolRegistry",
    "BridgeUpstreamError", "DataLoadError", "ErrorCode", "JsonRpcError", "ToolError", "ToolException",
]
