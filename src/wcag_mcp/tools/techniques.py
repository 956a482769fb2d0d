"""Technique tools."""

from __future__ import annotations

from collections.abc import Iterable
from itertools import groupby
from typing import ClassVar, Literal

from pydantic import Field

from wcag_mcp.foundation.core import ToolMetadata, ToolParams
from wcag_mcp.model import TechniqueRef
from wcag_mcp.query import strip_markup, technique_url

from .base import CriterionRefParams, QueryParams, WcagTool, criterion_not_found

Technology = Literal[
    "html", "aria", "css", "pdf", "general", "client-side-script",
    "server-side-script", "smil", "text", "failures",
]


def format_tree(refs: Iterable[TechniqueRef], indent: str = "") -> str:
    """Render a technique tree as nested Markdown bullets."""
    out: list[str] = []
    for ref in refs:
        if ref.title and not ref.id:
            out.append(f"{indent}**{strip_markup(ref.title)}**\n")
            out.append(format_tree(ref.techniques, indent + "  "))
            for group in ref.groups:
                out.append(f"{indent}  *{group.title}*\n")
                out.append(format_tree(group.techniques, indent + "    "))
        elif ref.id:
            out.append(f"{indent}- **{ref.id}**: {ref.title}\n")
            out.append(format_tree(ref.using, indent + "  "))
        elif ref.and_:
            out.append(f"{indent}- Combined techniques:\n")
            out.extend(f"{indent}  - **{part.id}**: {part.title}\n" for part in ref.and_ if part.id)
    return "".join(out)


class ListTechniquesParams(ToolParams):
    technology: Technology | None = Field(default=None, description="Filter by technology")
    type: Literal["sufficient", "advisory", "failure"] | None = Field(
        default=None, description="Filter by technique type",
    )


class ListTechniquesTool(WcagTool[ListTechniquesParams]):
    metadata = ToolMetadata(
        name="list-techniques",
        description=(
            "Lists WCAG techniques, optionally filtered by technology (html, aria, css, pdf, general, etc.) "
            "or type (sufficient, advisory, failure)."
        ),
    )
    params_schema: ClassVar[type[ListTechniquesParams]] = ListTechniquesParams

    def _run(self, params: ListTechniquesParams) -> str:
        techniques = self.query.list_techniques()
        if params.technology:
            techniques = [t for t in techniques if t.technology == params.technology]
        if params.type:
            techniques = [t for t in techniques if params.type in t.types]

        if not techniques:
            return "No techniques found matching your filters."

        out = [f"# WCAG Techniques ({len(techniques)} found)\n\n"]
        by_tech = sorted(techniques, key=lambda t: (t.technology or "other", t.id))
        for tech, group in groupby(by_tech, key=lambda t: t.technology or "other"):
            members = list(group)
            out.append(f"## {tech.upper()} ({len(members)})\n\n")
            out.extend(f"- **{t.id}**: {t.title}\n" for t in members)
            out.append("\n")
        return "".join(out)


class TechniqueIdParams(ToolParams):
    id: str = Field(..., description='Technique ID (e.g., "H37", "ARIA1", "G94", "F65")')


class GetTechniqueTool(WcagTool[TechniqueIdParams]):
    metadata = ToolMetadata(
        name="get-technique",
        description='Gets details for a specific technique by ID (e.g., "H37", "ARIA1", "G94", "F65").',
    )
    params_schema: ClassVar[type[TechniqueIdParams]] = TechniqueIdParams

    def _run(self, params: TechniqueIdParams) -> str:
        technique = self.query.find_technique(params.id)
        if technique is None:
            return f'No technique found with ID "{params.id}".'

        out = [
            f"# {technique.id}: {technique.title}\n\n",
            f"**Technology:** {technique.technology}\n",
            f"**Types:** {', '.join(sorted(technique.types))}\n",
            f"**Applies to:** {len(technique.criteria)} success criteria\n\n",
            "## Related Success Criteria\n\n",
        ]
        for num in technique.sorted_criteria():
            match = self.query.find_success_criterion(num)
            if match:
                out.append(f"- **{num}** {match.criterion.handle} (Level {match.criterion.level})\n")
        out.append("\n## Links\n\n")
        out.append(f"- [Full Technique Documentation]({technique_url(technique.technology, technique.id)})\n")
        return "".join(out)


class TechniquesForCriterionTool(WcagTool[CriterionRefParams]):
    metadata = ToolMetadata(
        name="get-techniques-for-criterion",
        description="Gets all techniques (sufficient, advisory, and failures) for a specific success criterion.",
    )
    params_schema: ClassVar[type[CriterionRefParams]] = CriterionRefParams

    def _run(self, params: CriterionRefParams) -> str:
        match = self.query.find_success_criterion(params.ref_id)
        if match is None:
            return criterion_not_found(params.ref_id)

        sc = match.criterion
        out = [f"# Techniques for {sc.num} {sc.handle}\n\n"]
        if sc.techniques is None:
            out.append("No techniques are documented for this success criterion.\n")
            return "".join(out)

        for kind, tree in sc.techniques.by_type():
            if tree:
                out.append(f"## {kind.capitalize()} Techniques\n\n")
                out.append(format_tree(tree))
                out.append("\n")
        return "".join(out)


class SearchTechniquesTool(WcagTool[QueryParams]):
    metadata = ToolMetadata(
        name="search-techniques",
        description="Searches techniques by keyword in titles.",
    )
    params_schema: ClassVar[type[QueryParams]] = QueryParams

    def _run(self, params: QueryParams) -> str:
        matches = self.query.search_techniques(params.query)
        if not matches:
            return f'No techniques found matching "{params.query}".'

        output = "\n".join(f"**{t.id}** ({t.technology}): {t.title}" for t in matches)
        return f'# Technique Search Results for "{params.query}" ({len(matches)} found)\n\n{output}'


class FailuresForCriterionTool(WcagTool[CriterionRefParams]):
    metadata = ToolMetadata(
        name="get-failures-for-criterion",
        description="Gets failure techniques (common mistakes) for a specific success criterion.",
    )
    params_schema: ClassVar[type[CriterionRefParams]] = CriterionRefParams

    def _run(self, params: CriterionRefParams) -> str:
        match = self.query.find_success_criterion(params.ref_id)
        if match is None:
            return criterion_not_found(params.ref_id)

        sc = match.criterion
        failures = [ref for ref in (sc.techniques.failure if sc.techniques else ()) if ref.id]
        if not failures:
            return f"No documented failure techniques for {sc.num} {sc.handle}."

        out = [
            f"# Failure Techniques for {sc.num} {sc.handle}\n\n",
            "These are common mistakes that would cause this success criterion to fail:\n\n",
        ]
        out.extend(f"- **{ref.id}**: {ref.title}\n" for ref in failures)
        return "".join(out)
