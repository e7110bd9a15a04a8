"""
Unit tests for candidate collection.

Run: pytest tests/unit/test_candidate_service.py -v
"""

import re

from parsers.field_coercer import AI_UNKNOWN_NAME
from services.candidate_service import (
    DEFAULT_CANDIDATE_COLOR,
    CandidateCollector,
    generate_auto_code,
)


class TestGenerateAutoCode:

    def test_format(self):
        """Auto codes are AUTO- followed by up to four digits."""
        for _ in range(50):
            assert re.fullmatch(r"AUTO-\d{1,4}", generate_auto_code())


class TestCandidateCollector:
    """Tests for CandidateCollector.offer()"""

    def test_creates_candidate_with_defaults(self):
        collector = CandidateCollector(code_factory=lambda: "AUTO-1")

        candidate = collector.offer(code="", name="Flour", unit_id="u1", price="8")

        assert candidate.code == "AUTO-1"
        assert candidate.name == "Flour"
        assert candidate.unit_id == "u1"
        assert candidate.price == "8"
        assert candidate.color == DEFAULT_CANDIDATE_COLOR
        assert candidate.id

    def test_keeps_extracted_code(self):
        collector = CandidateCollector(code_factory=lambda: "AUTO-1")

        candidate = collector.offer(code="X9", name="Flour", unit_id="", price="0")

        assert candidate.code == "X9"

    def test_same_name_folds_into_first(self):
        """Later items with the same name reuse the first candidate."""
        collector = CandidateCollector(code_factory=lambda: "AUTO-1")

        first = collector.offer(code="A", name="Flour", unit_id="", price="5")
        second = collector.offer(code="B", name="Flour", unit_id="u1", price="9")

        assert second is first
        assert len(collector.candidates) == 1
        assert collector.candidates[0].code == "A"

    def test_names_compare_case_sensitively(self):
        collector = CandidateCollector()

        collector.offer(code="", name="Flour", unit_id="", price="0")
        collector.offer(code="", name="flour", unit_id="", price="0")

        assert len(collector.candidates) == 2

    def test_placeholder_and_empty_names_skipped(self):
        collector = CandidateCollector()

        assert collector.offer(code="1", name=AI_UNKNOWN_NAME, unit_id="", price="0") is None
        assert collector.offer(code="2", name="", unit_id="", price="0") is None
        assert collector.candidates == []

    def test_first_seen_order(self):
        collector = CandidateCollector()
        for name in ["C", "A", "B", "A"]:
            collector.offer(code="", name=name, unit_id="", price="0")

        assert [c.name for c in collector.candidates] == ["C", "A", "B"]
