"""Technique index derived from the success-criteria technique trees.

Techniques are not stored on their own in the dataset: each criterion holds
three trees (sufficient, advisory, failure) that reference techniques by id,
possibly nested in sections, groups, ``using`` chains and ``and``
combinations. ``TechniqueIndex`` flattens them into one record per id,
merging the type memberships and referencing criteria of every sighting.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from wcag_mcp.model import SuccessCriterion, TechniqueRef, dotted_key


@dataclass(frozen=True, slots=True)
class TechniqueRecord:
    """A technique with every criterion and type that references it."""

    id: str
    technology: str | None
    title: str
    types: frozenset[str]
    criteria: frozenset[str]

    def sorted_criteria(self) -> list[str]:
        return sorted(self.criteria, key=dotted_key)


@dataclass(slots=True)
class _Entry:
    id: str
    technology: str | None = None
    title: str = ""
    types: set[str] = field(default_factory=set)
    criteria: set[str] = field(default_factory=set)

    def merge(self, ref: TechniqueRef, kind: str, sc_num: str) -> None:
        # Lexically smallest non-empty value wins so the result does not
        # depend on which sighting came first.
        if ref.title and (not self.title or ref.title < self.title):
            self.title = ref.title
        if ref.technology and (not self.technology or ref.technology < self.technology):
            self.technology = ref.technology
        self.types.add(kind)
        self.criteria.add(sc_num)

    def freeze(self) -> TechniqueRecord:
        return TechniqueRecord(
            id=self.id,
            technology=self.technology,
            title=self.title,
            types=frozenset(self.types),
            criteria=frozenset(self.criteria),
        )


def walk_refs(refs: Iterable[TechniqueRef]) -> Iterator[TechniqueRef]:
    """Yield every node of a technique tree, depth first, at any nesting depth."""
    stack = list(reversed(tuple(refs)))
    while stack:
        ref = stack.pop()
        yield ref
        children: list[TechniqueRef] = [*ref.techniques]
        for group in ref.groups:
            children.extend(group.techniques)
        children.extend(ref.using)
        children.extend(ref.and_)
        stack.extend(reversed(children))


class TechniqueIndex:
    """Accumulator keyed by technique id.

    Example:
        >>> index = TechniqueIndex()
        >>> for _, _, sc in document.iter_criteria():
        ...     index.add_criterion(sc)
        >>> index.records()[0].id
        'ARIA1'
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: dict[str, _Entry] = {}

    def add(self, ref: TechniqueRef, kind: str, sc_num: str) -> None:
        """Merge one sighting; nodes without both id and title are skipped."""
        if not (ref.id and ref.title):
            return
        entry = self._entries.get(ref.id)
        if entry is None:
            entry = self._entries[ref.id] = _Entry(ref.id)
        entry.merge(ref, kind, sc_num)

    def add_criterion(self, sc: SuccessCriterion) -> None:
        if sc.techniques is None:
            return
        for kind, tree in sc.techniques.by_type():
            for ref in walk_refs(tree):
                self.add(ref, kind, sc.num)

    def records(self) -> list[TechniqueRecord]:
        """Frozen records sorted by id."""
        return [self._entries[key].freeze() for key in sorted(self._entries)]

    def __len__(self) -> int:
        return len(self._entries)


def build_technique_index(criteria: Iterable[SuccessCriterion]) -> list[TechniqueRecord]:
    index = TechniqueIndex()
    for sc in criteria:
        index.add_criterion(sc)
    return index.records()


def count_refs(refs: Iterable[TechniqueRef]) -> int:
    """Count technique references in a tree, as shown in criterion summaries.

    Every node with an id counts once per sighting. An ``and`` combination
    counts its members, with or without ids, and is not descended into.
    """
    count = 0
    stack = list(refs)
    while stack:
        ref = stack.pop()
        if ref.id:
            count += 1
        stack.extend(ref.techniques)
        for group in ref.groups:
            stack.extend(group.techniques)
        stack.extend(ref.using)
        count += len(ref.and_)
    return count
