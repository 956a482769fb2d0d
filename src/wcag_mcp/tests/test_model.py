"""Tests for the document model and its loader."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from wcag_mcp.foundation.errors import DataLoadError
from wcag_mcp.model import (
    LEVELS,
    ConformanceLevel,
    WcagDocument,
    dotted_key,
    levels_up_to,
    load_document,
    normalize_version,
    parse_document,
)


# ═════════════════════════════════════════════════════════════════════════════
# Loading
# ═════════════════════════════════════════════════════════════════════════════


class TestLoading:
    def test_hierarchy_shape(self, document: WcagDocument) -> None:
        assert [p.num for p in document.principles] == ["1", "2", "3", "4"]
        assert document.guideline_count == 6
        assert sum(1 for _ in document.iter_criteria()) == 11
        assert len(document.terms) == 5

    def test_successcriteria_alias(self, document: WcagDocument) -> None:
        guideline = document.principles[0].guidelines[1]
        assert guideline.num == "1.4"
        assert [sc.num for sc in guideline.success_criteria] == ["1.4.3", "1.4.6", "1.4.10"]

    def test_nested_technique_trees(self, document: WcagDocument) -> None:
        sc = document.principles[0].guidelines[0].success_criteria[0]
        section = sc.techniques.sufficient[0]
        assert section.id is None and section.title.startswith("Situation A")
        g94 = section.techniques[0]
        assert g94.id == "G94"
        assert [u.id for u in g94.using] == ["H37", "ARIA6"]

    def test_and_alias(self, document: WcagDocument) -> None:
        sc = next(sc for _, _, sc in document.iter_criteria() if sc.num == "2.5.8")
        combo = sc.techniques.sufficient[0]
        assert [r.id for r in combo.and_] == ["C42", "G207"]

    def test_optional_annotations_default_empty(self, document: WcagDocument) -> None:
        reflow = next(sc for _, _, sc in document.iter_criteria() if sc.num == "1.4.10")
        assert reflow.techniques is None
        assert reflow.understanding is None
        assert reflow.details == ()

    def test_models_are_frozen(self, document: WcagDocument) -> None:
        with pytest.raises(ValidationError):
            document.principles[0].handle = "Changed"  # type: ignore[misc]

    def test_unknown_keys_ignored(self) -> None:
        doc = parse_document({"principles": [], "terms": [], "act": {"rules": []}, "version": "2.2"})
        assert doc.principles == ()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(DataLoadError, match="Cannot read"):
            load_document(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(DataLoadError, match="not valid JSON"):
            load_document(path)

    def test_wrong_shape(self) -> None:
        with pytest.raises(DataLoadError, match="malformed"):
            parse_document({"principles": [{"num": "1"}]})


# ═════════════════════════════════════════════════════════════════════════════
# Levels and versions
# ═════════════════════════════════════════════════════════════════════════════


class TestLevels:
    def test_ordering(self) -> None:
        assert ConformanceLevel.A < ConformanceLevel.AA < ConformanceLevel.AAA
        assert max(ConformanceLevel("AA"), ConformanceLevel("A")) == ConformanceLevel.AA
        assert LEVELS == ("A", "AA", "AAA")

    def test_levels_up_to(self) -> None:
        assert levels_up_to("A") == ("A",)
        assert levels_up_to("AA") == ("A", "AA")
        assert levels_up_to(ConformanceLevel.AAA) == ("A", "AA", "AAA")

    def test_levels_up_to_rejects_unknown(self) -> None:
        with pytest.raises(ValueError):
            levels_up_to("AAAA")

    def test_dotted_key_is_numeric(self) -> None:
        nums = ["1.4.10", "1.4.3", "1.4.9", "1.1.1", "2.4.11", "2.4.7"]
        assert sorted(nums, key=dotted_key) == ["1.1.1", "1.4.3", "1.4.9", "1.4.10", "2.4.7", "2.4.11"]

    def test_normalize_version(self) -> None:
        assert normalize_version("22") == "2.2"
        assert normalize_version("2.1") == "2.1"
        assert normalize_version(" 2.0 ") == "2.0"
