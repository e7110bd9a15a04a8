"""
New-product candidates from AI imports.

Items the catalog does not know become PendingProductCandidate entries,
one per distinct name. The operator later picks which ones to save.
"""

import random
from typing import Callable, Optional
import structlog

from models.reconciliation import PendingProductCandidate
from parsers.field_coercer import AI_UNKNOWN_NAME

logger = structlog.get_logger(__name__)

DEFAULT_CANDIDATE_COLOR = "#ffffff"
AUTO_CODE_PREFIX = "AUTO-"


def generate_auto_code() -> str:
    """
    Placeholder code for a product scanned without one.

    Collisions with other auto codes or the catalog are tolerated.
    """
    return f"{AUTO_CODE_PREFIX}{random.randint(0, 9999)}"


class CandidateCollector:
    """
    Collect unmatched items as candidates, deduplicated by name.

    Names compare case-sensitively. The first occurrence of a name wins;
    later items with the same name are folded into it.

    Usage:
        collector = CandidateCollector()
        for item in unmatched:
            collector.offer(code, name, unit_id, price)
        collector.candidates
    """

    def __init__(self, code_factory: Callable[[], str] = generate_auto_code):
        self._code_factory = code_factory
        self._by_name: dict[str, PendingProductCandidate] = {}

    @property
    def candidates(self) -> list[PendingProductCandidate]:
        """Candidates in first-seen order."""
        return list(self._by_name.values())

    def offer(
        self,
        code: str,
        name: str,
        unit_id: str,
        price: str,
    ) -> Optional[PendingProductCandidate]:
        """
        Register an unmatched item.

        Args:
            code: Extracted code ("" gets an AUTO- code)
            name: Extracted name
            unit_id: Resolved unit id or ""
            price: Price text

        Returns:
            The candidate holding this name, or None for unusable names
        """
        if not name or name == AI_UNKNOWN_NAME:
            return None

        existing = self._by_name.get(name)
        if existing is not None:
            logger.debug("candidate_duplicate_folded", name=name, candidate_id=existing.id)
            return existing

        candidate = PendingProductCandidate(
            code=code or self._code_factory(),
            name=name,
            unit_id=unit_id,
            price=price,
            color=DEFAULT_CANDIDATE_COLOR,
        )
        self._by_name[name] = candidate
        return candidate
