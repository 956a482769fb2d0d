"""Filter options for success-criteria listings."""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass

from wcag_mcp.model import Guideline, Principle, SuccessCriterion


@dataclass(frozen=True, slots=True)
class CriteriaFilter:
    """Constraints for ``WcagQuery.list_success_criteria``.

    Every field left as ``None`` means no constraint; set fields combine
    with AND.

    Attributes:
        principle: Principle number, e.g. ``"2"``
        guideline: Guideline number, e.g. ``"2.4"``
        level: Exactly this conformance level
        levels: Any of these conformance levels
        version: Criterion applies to this WCAG version, e.g. ``"2.1"``
    """

    principle: str | None = None
    guideline: str | None = None
    level: str | None = None
    levels: Collection[str] | None = None
    version: str | None = None

    def accepts_principle(self, principle: Principle) -> bool:
        return self.principle is None or principle.num == str(self.principle)

    def accepts_guideline(self, guideline: Guideline) -> bool:
        return self.guideline is None or guideline.num == self.guideline

    def accepts(self, sc: SuccessCriterion) -> bool:
        if self.level is not None and sc.level != self.level:
            return False
        if self.levels is not None and sc.level not in self.levels:
            return False
        if self.version is not None and self.version not in sc.versions:
            return False
        return True


NO_FILTER = CriteriaFilter()
