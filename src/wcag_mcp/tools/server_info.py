"""Server information tool."""

from __future__ import annotations

from collections import Counter
from typing import ClassVar

from wcag_mcp.foundation.core import EmptyParams, ServerInfo, ToolMetadata
from wcag_mcp.model import LEVELS
from wcag_mcp.query import WcagQuery

from .base import WcagTool

ATTRIBUTION = (
    "## Attribution\n\n"
    "WCAG data from the [W3C WCAG Repository](https://github.com/w3c/wcag) "
    "([W3C Document License](https://www.w3.org/copyright/document-license/)).\n\n"
    "This software includes material copied from or derived from Web Content Accessibility Guidelines (WCAG) 2.2. "
    "Copyright © 2023 W3C® (MIT, ERCIM, Keio, Beihang)."
)


class ServerInfoTool(WcagTool[EmptyParams]):
    """Version, data source, dataset statistics and W3C attribution."""

    metadata = ToolMetadata(
        name="get-server-info",
        description="Returns information about this WCAG MCP server and data source.",
    )
    params_schema: ClassVar[type[EmptyParams]] = EmptyParams

    def __init__(self, query: WcagQuery, info: ServerInfo | None = None) -> None:
        super().__init__(query)
        self.info = info or ServerInfo()

    def _run(self, params: EmptyParams) -> str:
        rows = self.query.list_success_criteria()
        levels = Counter(r.level for r in rows)
        per_level = ", ".join(
            f"Level {lvl}: {levels[lvl]}" if i == 0 else f"{lvl}: {levels[lvl]}"
            for i, lvl in enumerate(LEVELS)
        )
        doc = self.query.document
        return (
            f"**WCAG MCP Server** v{self.info.version}\n\n"
            "A Model Context Protocol server providing comprehensive access to WCAG 2.2 guidelines "
            "with full Understanding documentation.\n\n"
            "## Data Source\n\n"
            "- **Source:** [W3C WCAG Repository](https://github.com/w3c/wcag)\n"
            "- **WCAG JSON:** [Published WCAG 2.2 JSON](https://www.w3.org/WAI/WCAG22/wcag.json)\n"
            "- **Understanding Docs:** Parsed from official W3C Understanding HTML files\n"
            "- **WCAG Version:** 2.2\n\n"
            "## Statistics\n\n"
            f"- **Principles:** {len(doc.principles)}\n"
            f"- **Guidelines:** {doc.guideline_count}\n"
            f"- **Success Criteria:** {len(rows)} ({per_level})\n"
            f"- **Techniques:** {len(self.query.list_techniques())}\n"
            f"- **Glossary Terms:** {len(doc.terms)}\n\n"
            f"{ATTRIBUTION}"
        )
