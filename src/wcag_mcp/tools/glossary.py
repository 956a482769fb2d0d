"""Glossary tools."""

from __future__ import annotations

from itertools import groupby
from typing import ClassVar

from pydantic import Field

from wcag_mcp.foundation.core import EmptyParams, ToolMetadata, ToolParams
from wcag_mcp.query import spec_url, strip_markup, truncate

from .base import QueryParams, WcagTool

MAX_SUGGESTIONS = 5


class TermParams(ToolParams):
    term: str = Field(
        ..., description='The term to look up (e.g., "programmatically determined", "text alternative")',
    )


class GetGlossaryTermTool(WcagTool[TermParams]):
    metadata = ToolMetadata(
        name="get-glossary-term",
        description="Gets the definition of a WCAG glossary term.",
    )
    params_schema: ClassVar[type[TermParams]] = TermParams

    def _run(self, params: TermParams) -> str:
        term = self.query.find_term(params.term)
        if term is None:
            similar = self.query.search_terms(params.term)[:MAX_SUGGESTIONS]
            if similar:
                suggestions = "\n".join(f"- {t.name}" for t in similar)
                return f'Term "{params.term}" not found. Did you mean:\n\n{suggestions}'
            return f'Term "{params.term}" not found in the WCAG glossary.'

        return (
            f"# {term.name}\n\n"
            f"{strip_markup(term.definition)}\n\n"
            f"[View in WCAG 2.2 Glossary]({spec_url(term.id)})"
        )


class ListGlossaryTermsTool(WcagTool[EmptyParams]):
    metadata = ToolMetadata(
        name="list-glossary-terms",
        description="Lists all WCAG glossary terms.",
    )
    params_schema: ClassVar[type[EmptyParams]] = EmptyParams

    def _run(self, params: EmptyParams) -> str:
        terms = sorted((t for t in self.query.terms if t.name), key=lambda t: t.name.casefold())
        out = [f"# WCAG 2.2 Glossary ({len(terms)} terms)\n\n"]
        by_letter = sorted(terms, key=lambda t: t.name[0].upper())
        for letter, group in groupby(by_letter, key=lambda t: t.name[0].upper()):
            out.append(f"## {letter}\n\n")
            out.extend(f"- **{t.name}**\n" for t in group)
            out.append("\n")
        return "".join(out)


class SearchGlossaryTool(WcagTool[QueryParams]):
    metadata = ToolMetadata(
        name="search-glossary",
        description="Searches the WCAG glossary by keyword.",
    )
    params_schema: ClassVar[type[QueryParams]] = QueryParams

    def _run(self, params: QueryParams) -> str:
        matches = self.query.search_terms(params.query)
        if not matches:
            return f'No glossary terms found matching "{params.query}".'

        output = "\n\n---\n\n".join(
            f"**{t.name}**\n{truncate(strip_markup(t.definition), 150)}" for t in matches
        )
        return f'# Glossary Search Results for "{params.query}" ({len(matches)} found)\n\n{output}'
