"""The WCAG tool catalog.

``build_registry`` wires every tool to one query facade in the order
callers see from ``tools/list``.
"""

from __future__ import annotations

from wcag_mcp.foundation.core import ServerInfo
from wcag_mcp.foundation.registry import ToolRegistry
from wcag_mcp.query import WcagQuery

from .base import WcagTool
from .criteria import (
    CountCriteriaTool,
    FullCriterionContextTool,
    GetCriteriaByLevelTool,
    GetCriterionTool,
    GetSuccessCriteriaDetailTool,
    ListSuccessCriteriaTool,
    SearchWcagTool,
    WhatsNewTool,
)
from .glossary import GetGlossaryTermTool, ListGlossaryTermsTool, SearchGlossaryTool
from .principles import GetGuidelineTool, ListGuidelinesTool, ListPrinciplesTool
from .server_info import ServerInfoTool
from .techniques import (
    FailuresForCriterionTool,
    GetTechniqueTool,
    ListTechniquesTool,
    SearchTechniquesTool,
    TechniquesForCriterionTool,
    format_tree,
)


def build_registry(query: WcagQuery, server_info: ServerInfo | None = None) -> ToolRegistry:
    """Registry holding the full catalog bound to ``query``."""
    registry = ToolRegistry()
    registry.register_all(
        # Core WCAG
        ListPrinciplesTool(query),
        ListGuidelinesTool(query),
        ListSuccessCriteriaTool(query),
        GetSuccessCriteriaDetailTool(query),
        GetCriterionTool(query),
        GetGuidelineTool(query),
        SearchWcagTool(query),
        GetCriteriaByLevelTool(query),
        CountCriteriaTool(query),
        # Techniques
        ListTechniquesTool(query),
        GetTechniqueTool(query),
        TechniquesForCriterionTool(query),
        SearchTechniquesTool(query),
        FailuresForCriterionTool(query),
        # Glossary
        GetGlossaryTermTool(query),
        ListGlossaryTermsTool(query),
        SearchGlossaryTool(query),
        # Context
        WhatsNewTool(query),
        FullCriterionContextTool(query),
        ServerInfoTool(query, server_info),
    )
    return registry


__all__ = [
    "build_registry", "WcagTool", "format_tree",
    "ListPrinciplesTool", "ListGuidelinesTool", "GetGuidelineTool",
    "ListSuccessCriteriaTool", "GetSuccessCriteriaDetailTool", "GetCriterionTool", "SearchWcagTool",
    "GetCriteriaByLevelTool", "CountCriteriaTool", "WhatsNewTool", "FullCriterionContextTool",
    "ListTechniquesTool", "GetTechniqueTool", "TechniquesForCriterionTool", "SearchTechniquesTool",
    "FailuresForCriterionTool",
    "GetGlossaryTermTool", "ListGlossaryTermsTool", "SearchGlossaryTool",
    "ServerInfoTool",
]
