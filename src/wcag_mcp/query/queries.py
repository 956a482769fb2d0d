"""Read-only lookups over the WCAG document.

Every method is a pure read. A lookup that does not resolve returns ``None``
or an empty list; callers turn that into a "not found" message.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass
from typing import Literal, NamedTuple

from wcag_mcp.model import (
    GlossaryTerm,
    Guideline,
    Principle,
    SuccessCriterion,
    TechniqueSet,
    WcagDocument,
    dotted_key,
    normalize_version,
)

from .filters import NO_FILTER, CriteriaFilter
from .techniques import TechniqueRecord, build_technique_index
from .text import strip_markup

GroupBy = Literal["level", "principle", "guideline"]

_SPACES = re.compile(r"\s+")


class GuidelineMatch(NamedTuple):
    principle: Principle
    guideline: Guideline


class CriterionMatch(NamedTuple):
    principle: Principle
    guideline: Guideline
    criterion: SuccessCriterion


@dataclass(frozen=True, slots=True)
class CriterionRow:
    """A success criterion flattened with its parent identifiers for display."""

    criterion: SuccessCriterion
    principle_num: str
    principle_handle: str
    guideline_num: str
    guideline_handle: str

    @property
    def num(self) -> str:
        return self.criterion.num

    @property
    def handle(self) -> str:
        return self.criterion.handle

    @property
    def level(self) -> str:
        return self.criterion.level

    @property
    def title(self) -> str:
        return self.criterion.title

    @property
    def versions(self) -> tuple[str, ...]:
        return self.criterion.versions


class WcagQuery:
    """Query facade over one immutable ``WcagDocument``."""

    __slots__ = ("_doc",)

    def __init__(self, document: WcagDocument) -> None:
        self._doc = document

    @property
    def document(self) -> WcagDocument:
        return self._doc

    @property
    def principles(self) -> tuple[Principle, ...]:
        return self._doc.principles

    @property
    def terms(self) -> tuple[GlossaryTerm, ...]:
        return self._doc.terms

    # ─────────────────────────────────────────────────────────────────
    # Hierarchy lookups
    # ─────────────────────────────────────────────────────────────────

    def find_principle(self, num: str | int) -> Principle | None:
        key = str(num)
        return next((p for p in self._doc.principles if p.num == key), None)

    def find_guideline(self, num: str) -> GuidelineMatch | None:
        for principle in self._doc.principles:
            for guideline in principle.guidelines:
                if guideline.num == num:
                    return GuidelineMatch(principle, guideline)
        return None

    def find_success_criterion(self, num: str) -> CriterionMatch | None:
        for principle, guideline, sc in self._doc.iter_criteria():
            if sc.num == num:
                return CriterionMatch(principle, guideline, sc)
        return None

    def find_success_criterion_by_slug(self, slug: str) -> CriterionMatch | None:
        for principle, guideline, sc in self._doc.iter_criteria():
            if sc.id == slug:
                return CriterionMatch(principle, guideline, sc)
        return None

    def list_success_criteria(self, filters: CriteriaFilter | None = None) -> list[CriterionRow]:
        """Criteria in document order matching every supplied filter."""
        f = filters or NO_FILTER
        rows: list[CriterionRow] = []
        for principle in self._doc.principles:
            if not f.accepts_principle(principle):
                continue
            for guideline in principle.guidelines:
                if not f.accepts_guideline(guideline):
                    continue
                rows.extend(
                    CriterionRow(sc, principle.num, principle.handle, guideline.num, guideline.handle)
                    for sc in guideline.success_criteria
                    if f.accepts(sc)
                )
        return rows

    def criteria_introduced_in(self, version: str) -> list[CriterionRow]:
        """Criteria that first appear in ``version`` (present there, absent from every earlier one)."""
        target = normalize_version(version)
        target_key = dotted_key(target)
        return [
            row for row in self.list_success_criteria()
            if target in row.versions
            and not any(dotted_key(v) < target_key for v in row.versions)
        ]

    def count_criteria(self, group_by: GroupBy) -> dict[str, int]:
        """Criterion counts per group label, labels sorted."""
        counts: Counter[str] = Counter()
        for row in self.list_success_criteria():
            match group_by:
                case "level": key = f"Level {row.level}"
                case "principle": key = f"{row.principle_num}. {row.principle_handle}"
                case "guideline": key = f"{row.guideline_num} {row.guideline_handle}"
                case _: raise ValueError(f"Unknown grouping: {group_by}")
            counts[key] += 1
        return dict(sorted(counts.items()))

    # ─────────────────────────────────────────────────────────────────
    # Techniques
    # ─────────────────────────────────────────────────────────────────

    def list_techniques(self) -> list[TechniqueRecord]:
        """Every referenced technique, one record per id, sorted by id."""
        return build_technique_index(sc for _, _, sc in self._doc.iter_criteria())

    def find_technique(self, technique_id: str) -> TechniqueRecord | None:
        key = technique_id.strip().lower()
        return next((t for t in self.list_techniques() if t.id.lower() == key), None)

    def techniques_for_criterion(self, num: str) -> TechniqueSet | None:
        """The criterion's technique trees; an empty set when it has none, ``None`` if no such criterion."""
        match = self.find_success_criterion(num)
        if match is None:
            return None
        return match.criterion.techniques or TechniqueSet()

    # ─────────────────────────────────────────────────────────────────
    # Glossary
    # ─────────────────────────────────────────────────────────────────

    def find_term(self, name: str) -> GlossaryTerm | None:
        """Exact, case-insensitive match on name or on the ``dfn-`` slug."""
        wanted = name.strip().lower()
        slug = f"dfn-{_SPACES.sub('-', wanted)}"
        return next(
            (t for t in self._doc.terms if t.name.lower() == wanted or t.id.lower() == slug),
            None,
        )

    # ─────────────────────────────────────────────────────────────────
    # Search
    # ─────────────────────────────────────────────────────────────────

    def search_terms(self, query: str) -> list[GlossaryTerm]:
        q = query.lower()
        return [
            t for t in self._doc.terms
            if q in t.name.lower() or q in strip_markup(t.definition).lower()
        ]

    def search_success_criteria(self, query: str, level: str | None = None) -> list[CriterionRow]:
        q = query.lower()
        return [
            row for row in self.list_success_criteria(CriteriaFilter(level=level))
            if q in row.handle.lower()
            or q in row.title.lower()
            or q in strip_markup(row.criterion.content).lower()
        ]

    def search_techniques(self, query: str) -> list[TechniqueRecord]:
        q = query.lower()
        return [t for t in self.list_techniques() if q in t.title.lower() or q in t.id.lower()]
