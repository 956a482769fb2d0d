"""WCAG document model."""

from .document import (
    TECHNIQUE_TYPES,
    Detail,
    DetailItem,
    GlossaryTerm,
    Guideline,
    Principle,
    Resource,
    SuccessCriterion,
    TechniqueGroup,
    TechniqueRef,
    TechniqueSet,
    Understanding,
    WcagDocument,
    load_document,
    parse_document,
)
from .levels import LEVELS, ConformanceLevel, dotted_key, levels_up_to, normalize_version

__all__ = [
    "Detail", "DetailItem", "GlossaryTerm", "Guideline", "Principle", "Resource",
    "SuccessCriterion", "TechniqueGroup", "TechniqueRef", "TechniqueSet", "Understanding",
    "WcagDocument", "TECHNIQUE_TYPES", "load_document", "parse_document",
    "ConformanceLevel", "LEVELS", "dotted_key", "levels_up_to", "normalize_version",
]
