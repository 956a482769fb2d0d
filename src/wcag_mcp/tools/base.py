"""Shared base and Markdown helpers for the WCAG tools."""

from __future__ import annotations

from typing import Literal, TypeVar

from pydantic import BaseModel, Field

from wcag_mcp.foundation.core import BaseTool, ToolParams
from wcag_mcp.model import Guideline, Principle, SuccessCriterion
from wcag_mcp.query import WcagQuery, quickref_url, spec_url, understanding_url

TParams = TypeVar("TParams", bound=BaseModel)

Level = Literal["A", "AA", "AAA"]
PrincipleNum = Literal["1", "2", "3", "4"]


class WcagTool(BaseTool[TParams]):
    """Tool bound to one query facade."""

    def __init__(self, query: WcagQuery) -> None:
        self.query = query


class CriterionRefParams(ToolParams):
    ref_id: str = Field(..., description='Success criterion reference number (e.g., "1.1.1", "2.4.7")')


class QueryParams(ToolParams):
    query: str = Field(..., description="Search query")


# ─────────────────────────────────────────────────────────────────────────────
# Markdown fragments
# ─────────────────────────────────────────────────────────────────────────────


def criterion_header(principle: Principle, guideline: Guideline, sc: SuccessCriterion) -> str:
    """Level, parents and versions block shown at the top of criterion views."""
    return (
        f"**Level:** {sc.level}\n"
        f"**Principle:** {principle.num} {principle.handle}\n"
        f"**Guideline:** {guideline.num} {guideline.handle}\n"
        f"**WCAG Versions:** {', '.join(sc.versions)}\n\n"
    )


def render_details(sc: SuccessCriterion) -> str:
    """Exceptions, notes and paragraphs under a criterion."""
    if not sc.details:
        return ""
    out = ["## Details\n\n"]
    for detail in sc.details:
        if detail.type == "ulist" and detail.items:
            for item in detail.items:
                out.append(f"- **{item.handle}:** {item.text}\n" if item.handle else f"- {item.text}\n")
            out.append("\n")
        elif detail.type == "note":
            out.append(f"> **{detail.handle}:** {detail.text}\n\n")
        elif detail.type == "p":
            out.append(f"{detail.text}\n\n")
    return "".join(out)


def render_links(sc: SuccessCriterion) -> str:
    return (
        "## Links\n\n"
        f"- [WCAG Specification]({spec_url(sc.id)})\n"
        f"- [Understanding {sc.num}]({understanding_url(sc.id)})\n"
        f"- [How to Meet {sc.num}]({quickref_url(sc.id)})\n"
    )


def criterion_not_found(ref_id: str, *, hint: bool = False) -> str:
    msg = f'No success criterion found with number "{ref_id}".'
    return f'{msg} Use format like "1.1.1" or "2.4.7".' if hint else msg
