"""Core tool abstractions."""

from .base import BaseTool, EmptyParams, ToolMetadata, ToolParams
from .info import DEFAULT_PROTOCOL_VERSION, ServerInfo

__all__ = ["BaseTool", "EmptyParams", "ToolMetadata", "ToolParams", "ServerInfo", "DEFAULT_PROTOCOL_VERSION"]
