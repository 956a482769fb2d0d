"""Principle and guideline tools."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from wcag_mcp.foundation.core import EmptyParams, ToolMetadata, ToolParams
from wcag_mcp.query import spec_url, strip_markup, truncate

from .base import PrincipleNum, WcagTool


class ListPrinciplesTool(WcagTool[EmptyParams]):
    metadata = ToolMetadata(
        name="list-principles",
        description="Lists all four WCAG 2.2 principles: Perceivable, Operable, Understandable, and Robust.",
    )
    params_schema: ClassVar[type[EmptyParams]] = EmptyParams

    def _run(self, params: EmptyParams) -> str:
        output = "\n\n".join(
            f"**{p.num}. {p.handle}**\n{strip_markup(p.content)}\nURL: {spec_url(p.id)}"
            for p in self.query.principles
        )
        return f"# WCAG 2.2 Principles\n\n{output}"


class ListGuidelinesParams(ToolParams):
    principle: PrincipleNum | None = Field(
        default=None,
        description="Filter by principle number (1=Perceivable, 2=Operable, 3=Understandable, 4=Robust)",
    )


class ListGuidelinesTool(WcagTool[ListGuidelinesParams]):
    metadata = ToolMetadata(
        name="list-guidelines",
        description="Lists WCAG 2.2 guidelines, optionally filtered by principle number (1-4).",
    )
    params_schema: ClassVar[type[ListGuidelinesParams]] = ListGuidelinesParams

    def _run(self, params: ListGuidelinesParams) -> str:
        principles = list(self.query.principles)
        if params.principle:
            found = self.query.find_principle(params.principle)
            principles = [found] if found else []

        if not principles:
            return "No principles found matching your criteria."

        sections = []
        for p in principles:
            guidelines = "\n\n".join(
                f"  **{g.num} {g.handle}**\n  {strip_markup(g.content)}" for g in p.guidelines
            )
            sections.append(f"## Principle {p.num}: {p.handle}\n\n{guidelines}")
        return "# WCAG 2.2 Guidelines\n\n" + "\n\n---\n\n".join(sections)


class GuidelineRefParams(ToolParams):
    ref_id: str = Field(..., description='Guideline reference number (e.g., "1.1", "2.4", "4.1")')


class GetGuidelineTool(WcagTool[GuidelineRefParams]):
    metadata = ToolMetadata(
        name="get-guideline",
        description="Gets full details for a specific WCAG guideline including all its success criteria.",
    )
    params_schema: ClassVar[type[GuidelineRefParams]] = GuidelineRefParams

    def _run(self, params: GuidelineRefParams) -> str:
        match = self.query.find_guideline(params.ref_id)
        if match is None:
            return f'No guideline found with number "{params.ref_id}". Use format like "1.1" or "2.4".'

        principle, guideline = match
        out = [
            f"# Guideline {guideline.num}: {guideline.handle}\n\n",
            f"**Principle:** {principle.num} {principle.handle}\n\n",
            f"## Description\n\n{strip_markup(guideline.content)}\n\n",
            f"**URL:** {spec_url(guideline.id)}\n",
            f"\n## Success Criteria ({len(guideline.success_criteria)})\n\n",
        ]
        for sc in guideline.success_criteria:
            out.append(f"### {sc.num} {sc.handle} (Level {sc.level})\n{truncate(sc.title, 200)}\n\n")
        return "".join(out)
