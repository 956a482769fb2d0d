"""wcag-mcp: WCAG 2.2 guidelines as MCP tools.

Serves the W3C WCAG 2.2 dataset (principles, guidelines, success criteria,
techniques, glossary and Understanding documentation) through a catalog of
read-only tools, reachable over stdio JSON-RPC, stateless HTTP JSON-RPC,
or a REST bridge with an OpenAPI description.

Quick Start:
    >>> from wcag_mcp import WcagQuery, build_registry, load_document
    >>>
    >>> registry = build_registry(WcagQuery(load_document("data/wcag.json")))
    >>> print(registry.execute("get-criterion", {"ref_id": "1.4.3"}))
    # 1.4.3 Contrast (Minimum)
    ...

Serving:
    $ wcag-mcp stdio --data data/wcag.json
    $ wcag-mcp http --port 8000          # /mcp and /bridge
"""

from .foundation import (
    BaseTool,
    DataLoadError,
    ErrorCode,
    JsonRpcError,
    ServerInfo,
    ToolException,
    ToolMetadata,
    ToolRegistry,
)
from .model import WcagDocument, load_document, parse_document
from .query import WcagQuery
from .tools import build_registry

__version__ = "2.0.0"

__all__ = [
    "__version__",
    "BaseTool", "ToolMetadata", "ToolRegistry", "ServerInfo",
    "DataLoadError", "ErrorCode", "JsonRpcError", "ToolException",
    "WcagDocument", "load_document", "parse_document",
    "WcagQuery", "build_registry",
]
