"""Conformance levels and version ordering."""

from __future__ import annotations

from enum import StrEnum


class ConformanceLevel(StrEnum):
    """Ordinal grade of a success criterion: A < AA < AAA."""
    A = "A"
    AA = "AA"
    AAA = "AAA"

    @property
    def rank(self) -> int:
        return _ORDER.index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ConformanceLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, ConformanceLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, ConformanceLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, ConformanceLevel):
            return NotImplemented
        return self.rank >= other.rank


_ORDER: tuple[ConformanceLevel, ...] = (ConformanceLevel.A, ConformanceLevel.AA, ConformanceLevel.AAA)

LEVELS: tuple[str, ...] = tuple(level.value for level in _ORDER)


def levels_up_to(level: str | ConformanceLevel) -> tuple[str, ...]:
    """``"AA"`` -> ``("A", "AA")``."""
    target = ConformanceLevel(level)
    return tuple(lv.value for lv in _ORDER if lv <= target)


def dotted_key(num: str) -> tuple[tuple[int, int, str], ...]:
    """Sort key comparing dotted numbers segment by segment ("1.4.10" > "1.4.9")."""
    return tuple((0, int(part), "") if part.isdigit() else (1, 0, part) for part in num.split("."))


def normalize_version(version: str) -> str:
    """Accept ``"22"`` as shorthand for ``"2.2"``."""
    version = version.strip()
    if "." in version or not version.isdigit():
        return version
    return ".".join(version)
