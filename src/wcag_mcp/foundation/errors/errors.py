"""Standardized error handling for tools and transports.

Provides error codes, structured tool errors for LLM feedback, and the
exceptions used at the protocol seams (JSON-RPC, bridge upstream, startup).
"""

from __future__ import annotations

from enum import StrEnum
from typing import Self

from pydantic import BaseModel

# JSON-RPC 2.0 error codes used on the wire
PARSE_ERROR = -32700
INTERNAL_ERROR = -32603


class ErrorCode(StrEnum):
    """Standard error codes for tool and dispatch failures."""
    INVALID_PARAMS = "INVALID_PARAMS"
    UNKNOWN_TOOL = "UNKNOWN_TOOL"
    UNKNOWN = "UNKNOWN"


class ToolError(BaseModel):
    """Structured error response for tool failures."""

    model_config = {"frozen": True}

    tool_name: str
    message: str
    code: ErrorCode = ErrorCode.UNKNOWN


class ToolException(Exception):
    """Exception wrapping a ToolError for raising."""

    __slots__ = ("error",)

    def __init__(self, error: ToolError) -> None:
        self.error = error
        super().__init__(error.message)

    @classmethod
    def create(cls, tool_name: str, message: str, code: ErrorCode = ErrorCode.UNKNOWN) -> Self:
        """Create tool exception."""
        return cls(ToolError(tool_name=tool_name, message=message, code=code))

    @property
    def code(self) -> ErrorCode:
        return self.error.code


class JsonRpcError(Exception):
    """Failure that becomes a JSON-RPC ``error`` member."""

    __slots__ = ("code", "message")

    def __init__(self, message: str, code: int = INTERNAL_ERROR) -> None:
        self.code = code
        self.message = message
        super().__init__(message)


class BridgeUpstreamError(Exception):
    """The RPC backend behind the REST bridge failed.

    ``status`` is the HTTP status the bridge answers with: 400 when the
    backend blamed the caller, 502 for everything else.
    """

    __slots__ = ("message", "status")

    def __init__(self, message: str, status: int = 502) -> None:
        self.message = message
        self.status = status
        super().__init__(message)


class DataLoadError(Exception):
    """The dataset artifact could not be read or parsed. Fatal at startup."""
