"""Central registry for tool discovery and dispatch.

The registry provides:
- Tool registration and lookup by name
- Ordered enumeration (registration order is the order callers see)
- MCP tool descriptors for ``tools/list``
- Validated execution by name for ``tools/call``
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from pydantic import BaseModel

from ..core import BaseTool
from ..errors import ErrorCode, ToolException


class ToolRegistry:
    """Ordered catalog of available tools.

    Example:
        >>> registry = ToolRegistry()
        >>> registry.register(ListPrinciplesTool(query))
        >>> registry.get("list-principles")
        <ListPrinciplesTool list-principles>
        >>> registry.execute("list-principles", {})
        '# WCAG 2.2 Principles...'
    """

    __slots__ = ("_tools",)

    def __init__(self) -> None:
        self._tools: dict[str, BaseTool[BaseModel]] = {}

    def register(self, tool: BaseTool[BaseModel]) -> None:
        """Register a tool instance with validation."""
        name = tool.metadata.name
        if name in self._tools:
            raise ValueError(f"Tool '{name}' already registered.")
        if len(tool.metadata.description) < 10:
            raise ValueError(f"Tool '{name}' description too short for LLM selection.")
        self._tools[name] = tool

    def register_all(self, *tools: BaseTool[BaseModel]) -> None:
        """Register multiple tools at once."""
        for tool in tools:
            self.register(tool)

    def get(self, name: str) -> BaseTool[BaseModel] | None:
        """Get tool by name."""
        return self._tools.get(name)

    def __getitem__(self, name: str) -> BaseTool[BaseModel]:
        """Get tool by name, raises KeyError if not found."""
        return self._tools[name]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self) -> Iterator[BaseTool[BaseModel]]:
        return iter(self._tools.values())

    # ─────────────────────────────────────────────────────────────────
    # Querying
    # ─────────────────────────────────────────────────────────────────

    def names(self) -> list[str]:
        return list(self._tools)

    def list_tools(self) -> list[dict[str, object]]:
        """MCP descriptors for every tool, in registration order."""
        return [t.describe() for t in self._tools.values()]

    # ─────────────────────────────────────────────────────────────────
    # Execution
    # ─────────────────────────────────────────────────────────────────

    def execute(self, name: str, arguments: Mapping[str, object] | None = None) -> str:
        """Validate arguments and run the named tool.

        Raises:
            ToolException: unknown tool (UNKNOWN_TOOL) or invalid arguments
                (INVALID_PARAMS).
        """
        tool = self._tools.get(name)
        if tool is None:
            raise ToolException.create(name, f"Unknown tool: {name}", ErrorCode.UNKNOWN_TOOL)
        return tool.call(arguments)
