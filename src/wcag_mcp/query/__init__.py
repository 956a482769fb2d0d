"""Query layer: pure lookups, filters and the derived technique index."""

from .filters import CriteriaFilter
from .queries import CriterionMatch, CriterionRow, GroupBy, GuidelineMatch, WcagQuery
from .techniques import TechniqueIndex, TechniqueRecord, build_technique_index, count_refs, walk_refs
from .text import quickref_url, spec_url, strip_markup, technique_url, truncate, understanding_url

__all__ = [
    "WcagQuery", "CriteriaFilter", "CriterionMatch", "CriterionRow", "GuidelineMatch", "GroupBy",
    "TechniqueIndex", "TechniqueRecord", "build_technique_index", "count_refs", "walk_refs",
    "strip_markup", "truncate", "spec_url", "understanding_url", "quickref_url", "technique_url",
]
