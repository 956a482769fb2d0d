"""Success-criterion tools: listings, detail views, search and counts."""

from __future__ import annotations

from typing import ClassVar, Literal

from pydantic import Field

from wcag_mcp.foundation.core import EmptyParams, ToolMetadata, ToolParams
from wcag_mcp.model import LEVELS, levels_up_to
from wcag_mcp.query import CriteriaFilter, count_refs, truncate

from .base import (
    CriterionRefParams,
    Level,
    PrincipleNum,
    WcagTool,
    criterion_header,
    criterion_not_found,
    render_details,
    render_links,
)


class ListCriteriaParams(ToolParams):
    level: Level | None = Field(default=None, description="Filter by conformance level")
    guideline: str | None = Field(default=None, description='Filter by guideline number (e.g., "1.1", "2.4")')
    principle: PrincipleNum | None = Field(default=None, description="Filter by principle number (1-4)")


class ListSuccessCriteriaTool(WcagTool[ListCriteriaParams]):
    metadata = ToolMetadata(
        name="list-success-criteria",
        description=(
            "Lists WCAG 2.2 success criteria with optional filters by level (A, AA, AAA), "
            'guideline (e.g., "1.1"), or principle (1-4).'
        ),
    )
    params_schema: ClassVar[type[ListCriteriaParams]] = ListCriteriaParams

    def _run(self, params: ListCriteriaParams) -> str:
        rows = self.query.list_success_criteria(CriteriaFilter(
            principle=params.principle, guideline=params.guideline, level=params.level,
        ))
        if not rows:
            return "No success criteria found matching your filters."

        output = "\n\n".join(
            f"**{r.num} {r.handle}** (Level {r.level})\nGuideline: {r.guideline_num} {r.guideline_handle}"
            for r in rows
        )
        applied = [
            f"{label}: {value}"
            for label, value in (("Level", params.level), ("Guideline", params.guideline), ("Principle", params.principle))
            if value
        ]
        filter_text = f"\nFilters: {', '.join(applied)}\n" if applied else ""
        return f"# WCAG 2.2 Success Criteria ({len(rows)} found)\n{filter_text}\n{output}"


class GetSuccessCriteriaDetailTool(WcagTool[CriterionRefParams]):
    metadata = ToolMetadata(
        name="get-success-criteria-detail",
        description=(
            "Gets the normative success criterion requirements - just the title and exception "
            "details without Understanding documentation."
        ),
    )
    params_schema: ClassVar[type[CriterionRefParams]] = CriterionRefParams

    def _run(self, params: CriterionRefParams) -> str:
        match = self.query.find_success_criterion(params.ref_id)
        if match is None:
            return criterion_not_found(params.ref_id, hint=True)

        principle, guideline, sc = match
        return "".join((
            f"# {sc.num} {sc.handle}\n\n",
            criterion_header(principle, guideline, sc),
            f"## Success Criterion\n\n{sc.title}\n\n",
            render_details(sc),
            render_links(sc),
        ))


_BRIEF_LABELS = (
    ("goal", "Goal"),
    ("what to do", "What to do"),
    ("why it's important", "Why it's important"),
)


class GetCriterionTool(WcagTool[CriterionRefParams]):
    """Full criterion view including the Understanding documentation."""

    metadata = ToolMetadata(
        name="get-criterion",
        description=(
            "Gets full details for a specific WCAG success criterion by its reference number "
            '(e.g., "1.1.1", "2.4.7", "4.1.2"), including complete Understanding documentation.'
        ),
    )
    params_schema: ClassVar[type[CriterionRefParams]] = CriterionRefParams

    def _run(self, params: CriterionRefParams) -> str:
        match = self.query.find_success_criterion(params.ref_id)
        if match is None:
            return criterion_not_found(params.ref_id, hint=True)

        principle, guideline, sc = match
        understanding = sc.understanding
        out = [f"# {sc.num} {sc.handle}\n\n", criterion_header(principle, guideline, sc)]

        if understanding and understanding.brief:
            out.append("## In Brief\n\n")
            for key, label in _BRIEF_LABELS:
                if understanding.brief.get(key):
                    out.append(f"**{label}:** {understanding.brief[key]}\n")
            out.append("\n")

        out.append(f"## Description\n\n{sc.title}\n\n")
        out.append(render_details(sc))

        if understanding:
            if understanding.intent:
                out.append(f"## Intent\n\n{understanding.intent}\n\n")
            if understanding.benefits:
                out.append("## Benefits\n\n")
                out.extend(f"- {benefit}\n" for benefit in understanding.benefits)
                out.append("\n")
            if understanding.examples:
                out.append("## Examples\n\n")
                out.extend(
                    f"### Example {i}\n\n{example}\n\n"
                    for i, example in enumerate(understanding.examples, start=1)
                )
            if understanding.resources:
                out.append("## Resources\n\n")
                out.extend(f"- [{r.title}]({r.url})\n" for r in understanding.resources)
                out.append("\n")

        out.append(render_links(sc))
        return "".join(out)


class SearchWcagParams(ToolParams):
    query: str = Field(..., description="Search query (searches titles and descriptions)")
    level: Level | None = Field(default=None, description="Optional: Filter results by conformance level")


class SearchWcagTool(WcagTool[SearchWcagParams]):
    metadata = ToolMetadata(
        name="search-wcag",
        description="Searches WCAG 2.2 success criteria by keyword in titles and descriptions.",
    )
    params_schema: ClassVar[type[SearchWcagParams]] = SearchWcagParams

    def _run(self, params: SearchWcagParams) -> str:
        matches = self.query.search_success_criteria(params.query, level=params.level)
        if not matches:
            at_level = f" at level {params.level}" if params.level else ""
            return f'No success criteria found matching "{params.query}"{at_level}.'

        output = "\n\n---\n\n".join(
            f"**{r.num} {r.handle}** (Level {r.level})\n{truncate(r.title, 150)}" for r in matches
        )
        return f'# Search Results for "{params.query}" ({len(matches)} found)\n\n{output}'


class CriteriaByLevelParams(ToolParams):
    level: Level = Field(..., description="Conformance level to retrieve")
    include_lower: bool = Field(
        default=False,
        description="If true, includes criteria from lower levels (e.g., AA query returns both A and AA criteria)",
    )


class GetCriteriaByLevelTool(WcagTool[CriteriaByLevelParams]):
    metadata = ToolMetadata(
        name="get-criteria-by-level",
        description=(
            "Gets all success criteria for a specific conformance level. "
            "Optionally includes lower levels (e.g., AA includes A)."
        ),
    )
    params_schema: ClassVar[type[CriteriaByLevelParams]] = CriteriaByLevelParams

    def _run(self, params: CriteriaByLevelParams) -> str:
        levels = levels_up_to(params.level) if params.include_lower else (params.level,)
        rows = self.query.list_success_criteria(CriteriaFilter(levels=levels))
        if not rows:
            return f"No success criteria found for level {params.level}."

        suffix = " (including lower levels)" if params.include_lower else ""
        out = [f"# WCAG 2.2 Level {params.level}{suffix}\n\n", f"Total: {len(rows)} success criteria\n\n"]
        for level in levels:
            grouped = [r for r in rows if r.level == level]
            if grouped:
                out.append(f"## Level {level} ({len(grouped)} criteria)\n\n")
                out.extend(f"- **{r.num}** {r.handle}\n" for r in grouped)
                out.append("\n")
        return "".join(out)


class CountCriteriaParams(ToolParams):
    group_by: Literal["level", "principle", "guideline"] = Field(..., description="How to group the counts")


class CountCriteriaTool(WcagTool[CountCriteriaParams]):
    metadata = ToolMetadata(
        name="count-criteria",
        description="Returns counts of success criteria grouped by level, principle, or guideline.",
    )
    params_schema: ClassVar[type[CountCriteriaParams]] = CountCriteriaParams

    def _run(self, params: CountCriteriaParams) -> str:
        counts = self.query.count_criteria(params.group_by)
        total = sum(counts.values())
        output = "\n".join(f"- **{key}**: {count}" for key, count in counts.items())
        return (
            f"# WCAG 2.2 Success Criteria by {params.group_by.capitalize()}\n\n"
            f"Total: {total} success criteria\n\n{output}"
        )


class WhatsNewTool(WcagTool[EmptyParams]):
    metadata = ToolMetadata(
        name="whats-new-in-wcag22",
        description="Lists all success criteria that were added in WCAG 2.2.",
    )
    params_schema: ClassVar[type[EmptyParams]] = EmptyParams

    def _run(self, params: EmptyParams) -> str:
        rows = self.query.criteria_introduced_in("2.2")
        out = [
            "# What's New in WCAG 2.2\n\n",
            f"WCAG 2.2 added {len(rows)} new success criteria:\n\n",
        ]
        for level in LEVELS:
            grouped = [r for r in rows if r.level == level]
            if grouped:
                out.append(f"## Level {level}\n\n")
                out.extend(f"### {r.num} {r.handle}\n{truncate(r.title, 200)}\n\n" for r in grouped)
        return "".join(out)


class FullCriterionContextTool(WcagTool[CriterionRefParams]):
    metadata = ToolMetadata(
        name="get-full-criterion-context",
        description=(
            "Gets comprehensive context for a success criterion including its overview, "
            "technique counts, and reference links."
        ),
    )
    params_schema: ClassVar[type[CriterionRefParams]] = CriterionRefParams

    def _run(self, params: CriterionRefParams) -> str:
        match = self.query.find_success_criterion(params.ref_id)
        if match is None:
            return criterion_not_found(params.ref_id)

        principle, guideline, sc = match
        techniques = sc.techniques
        out = [
            f"# Complete Context: {sc.num} {sc.handle}\n\n",
            "## Overview\n\n",
            criterion_header(principle, guideline, sc),
            f"{sc.title}\n\n",
            "## Techniques Summary\n\n",
        ]
        for label, kind in (("Sufficient", "sufficient"), ("Advisory", "advisory"), ("Failure", "failure")):
            count = count_refs(getattr(techniques, kind)) if techniques else 0
            out.append(f"- **{label}:** {count} techniques\n")
        out.append("\n")
        out.append(render_links(sc))
        return "".join(out)
