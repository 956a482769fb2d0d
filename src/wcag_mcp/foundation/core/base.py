"""Core tool abstractions: BaseTool, ToolMetadata, and parameter types.

Tools are defined by subclassing BaseTool with a typed parameter schema.
The schema doubles as the MCP ``inputSchema`` and as the validator the
dispatch layer runs before any handler sees its arguments.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import ClassVar, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import ErrorCode, ToolException

logger = logging.getLogger("wcag_mcp.tools")


class ToolMetadata(BaseModel):
    """Metadata describing a tool.

    Attributes:
        name: Unique identifier (kebab-case, e.g., "get-criterion")
        description: What the tool does (shown to the LLM for selection)
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., pattern=r"^[a-z][a-z0-9-]*$")
    description: str = Field(..., min_length=10)


class ToolParams(BaseModel):
    """Base for parameter schemas: unknown keys are ignored, never fatal."""

    model_config = ConfigDict(extra="ignore", frozen=True)


class EmptyParams(ToolParams):
    """Default parameter schema for tools with no inputs."""


TParams = TypeVar("TParams", bound=BaseModel)


class BaseTool(ABC, Generic[TParams]):
    """Abstract base class for all tools.

    Subclasses must:
    - Define `metadata` class variable with ToolMetadata
    - Define `params_schema` class variable with the Pydantic model type
    - Implement `_run(params)` returning Markdown text

    Example:
        >>> class LookupParams(ToolParams):
        ...     ref_id: str = Field(..., description="Success criterion number")
        ...
        >>> class LookupTool(BaseTool[LookupParams]):
        ...     metadata = ToolMetadata(
        ...         name="lookup",
        ...         description="Look up a success criterion",
        ...     )
        ...     params_schema = LookupParams
        ...
        ...     def _run(self, params: LookupParams) -> str:
        ...         return f"# {params.ref_id}"
    """

    metadata: ClassVar[ToolMetadata]
    params_schema: ClassVar[type[BaseModel]] = EmptyParams

    # ─────────────────────────────────────────────────────────────────
    # Schema
    # ─────────────────────────────────────────────────────────────────

    @classmethod
    def input_schema(cls) -> dict[str, object]:
        """JSON Schema of the parameters, stripped of Pydantic metadata."""
        schema = cls.params_schema.model_json_schema()
        properties = {
            name: _clean_property(prop)
            for name, prop in schema.get("properties", {}).items()
        }
        return {
            "type": "object",
            "properties": properties,
            "required": list(schema.get("required", [])),
        }

    def describe(self) -> dict[str, object]:
        """MCP tool descriptor (name, description, inputSchema)."""
        return {
            "name": self.metadata.name,
            "description": self.metadata.description,
            "inputSchema": self.input_schema(),
        }

    # ─────────────────────────────────────────────────────────────────
    # Execution
    # ─────────────────────────────────────────────────────────────────

    def validate(self, arguments: Mapping[str, object] | None) -> TParams:
        """Validate raw arguments against ``params_schema``."""
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, Mapping):
            raise ToolException.create(
                self.metadata.name, "Tool arguments must be an object", ErrorCode.INVALID_PARAMS,
            )
        try:
            return self.params_schema.model_validate(dict(arguments))  # type: ignore[return-value]
        except ValidationError as e:
            raise ToolException.create(
                self.metadata.name, f"Invalid parameters: {_summarize(e)}", ErrorCode.INVALID_PARAMS,
            ) from e

    @abstractmethod
    def _run(self, params: TParams) -> str:
        """Execute the tool. Return Markdown text for LLM consumption."""
        ...

    def run(self, params: TParams) -> str:
        """Execute with timing logs."""
        name = self.metadata.name
        start = time.perf_counter()
        try:
            result = self._run(params)
        except Exception:
            logger.exception(f"[{name}] EXCEPTION ({(time.perf_counter() - start) * 1000:.1f}ms)")
            raise
        logger.info(f"[{name}] OK ({(time.perf_counter() - start) * 1000:.1f}ms)")
        return result

    def call(self, arguments: Mapping[str, object] | None = None) -> str:
        """Validate then run. Raises ToolException on invalid input only."""
        return self.run(self.validate(arguments))

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.metadata.name}>"


def _clean_property(prop: dict[str, object]) -> dict[str, object]:
    """Drop titles and collapse ``Optional[X]`` to ``X`` with no null default."""
    prop = {k: v for k, v in prop.items() if k != "title"}
    variants = prop.get("anyOf")
    if isinstance(variants, list):
        non_null = [v for v in variants if v != {"type": "null"}]
        if len(non_null) == 1:
            prop.pop("anyOf")
            prop = {**non_null[0], **prop}
    if prop.get("default", ...) is None:
        prop.pop("default")
    return prop


def _summarize(exc: ValidationError) -> str:
    """One line per failing field, e.g. ``ref_id: Field required``."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "arguments"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)
