"""In-memory WCAG document: principles, guidelines, success criteria, glossary.

The shapes follow the published W3C ``wcag.json`` plus the Understanding
annotations merged in by the offline build. Every model is frozen; the
document is loaded once at startup and only read afterwards.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import orjson
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from wcag_mcp.foundation.errors import DataLoadError

TECHNIQUE_TYPES: tuple[str, ...] = ("sufficient", "advisory", "failure")


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


# ─────────────────────────────────────────────────────────────────────────────
# Success criterion annotations
# ─────────────────────────────────────────────────────────────────────────────


class DetailItem(_Node):
    handle: str | None = None
    text: str = ""


class Detail(_Node):
    """Note, paragraph, or bulleted exception list under a criterion."""

    type: str
    handle: str | None = None
    text: str | None = None
    items: tuple[DetailItem, ...] = ()


class Resource(_Node):
    title: str
    url: str


class Understanding(_Node):
    """Explanatory content from the Understanding documents."""

    brief: dict[str, str] | None = None
    intent: str | None = None
    benefits: tuple[str, ...] = ()
    examples: tuple[str, ...] = ()
    resources: tuple[Resource, ...] = ()


class TechniqueRef(_Node):
    """One node in a technique tree.

    With an ``id`` it references a technique; with only a ``title`` it is a
    section header whose children sit in ``techniques`` and ``groups``.
    ``using`` and ``and_`` hold nested references at any depth.
    """

    id: str | None = None
    technology: str | None = None
    title: str | None = None
    techniques: tuple[TechniqueRef, ...] = ()
    groups: tuple[TechniqueGroup, ...] = ()
    using: tuple[TechniqueRef, ...] = ()
    and_: tuple[TechniqueRef, ...] = Field(default=(), alias="and")


class TechniqueGroup(_Node):
    id: str | None = None
    title: str = ""
    techniques: tuple[TechniqueRef, ...] = ()


TechniqueRef.model_rebuild()


class TechniqueSet(_Node):
    sufficient: tuple[TechniqueRef, ...] = ()
    advisory: tuple[TechniqueRef, ...] = ()
    failure: tuple[TechniqueRef, ...] = ()

    def by_type(self) -> Iterator[tuple[str, tuple[TechniqueRef, ...]]]:
        """Yield ``(type, tree)`` for the three technique trees."""
        for kind in TECHNIQUE_TYPES:
            yield kind, getattr(self, kind)


# ─────────────────────────────────────────────────────────────────────────────
# Hierarchy
# ─────────────────────────────────────────────────────────────────────────────


class SuccessCriterion(_Node):
    id: str
    num: str
    handle: str
    title: str = ""
    content: str = ""
    level: str = ""
    versions: tuple[str, ...] = ()
    details: tuple[Detail, ...] = ()
    techniques: TechniqueSet | None = None
    understanding: Understanding | None = None


class Guideline(_Node):
    id: str
    num: str
    handle: str
    title: str = ""
    content: str = ""
    versions: tuple[str, ...] = ()
    success_criteria: tuple[SuccessCriterion, ...] = Field(default=(), alias="successcriteria")


class Principle(_Node):
    id: str
    num: str
    handle: str
    title: str = ""
    content: str = ""
    versions: tuple[str, ...] = ()
    guidelines: tuple[Guideline, ...] = ()


class GlossaryTerm(_Node):
    id: str
    name: str
    definition: str = ""


class WcagDocument(_Node):
    """Root of the dataset."""

    principles: tuple[Principle, ...] = ()
    terms: tuple[GlossaryTerm, ...] = ()

    def iter_criteria(self) -> Iterator[tuple[Principle, Guideline, SuccessCriterion]]:
        """Walk every success criterion in document order with its parents."""
        for principle in self.principles:
            for guideline in principle.guidelines:
                for sc in guideline.success_criteria:
                    yield principle, guideline, sc

    @property
    def guideline_count(self) -> int:
        return sum(len(p.guidelines) for p in self.principles)


def load_document(path: str | Path) -> WcagDocument:
    """Read and parse the dataset artifact.

    Raises:
        DataLoadError: file unreadable, not JSON, or not shaped like a
            WCAG document. Callers treat this as fatal.
    """
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise DataLoadError(f"Cannot read WCAG data at {path}: {e}") from e
    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise DataLoadError(f"WCAG data at {path} is not valid JSON: {e}") from e
    return parse_document(data, source=str(path))


def parse_document(data: object, *, source: str = "<memory>") -> WcagDocument:
    """Build a document from already-decoded JSON."""
    try:
        return WcagDocument.model_validate(data)
    except ValidationError as e:
        raise DataLoadError(f"WCAG data from {source} is malformed: {e}") from e
