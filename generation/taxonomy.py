"""
Bloom's Taxonomy catalog.

Six fixed levels, each more complex and more heavily weighted than the one
before it. Weights are relative and do not sum to 1.
"""

from typing import Tuple

from generation.schemas import TaxonomyLevel


BLOOM_LEVELS: Tuple[TaxonomyLevel, ...] = (
    TaxonomyLevel(
        code="L1",
        label="Remember",
        description="Recall basic facts, terms, concepts",
        weight=0.1,
    ),
    TaxonomyLevel(
        code="L2",
        label="Understand",
        description="Explain ideas, interpret information",
        weight=0.2,
    ),
    TaxonomyLevel(
        code="L3",
        label="Apply",
        description="Use information in new situations",
        weight=0.3,
    ),
    TaxonomyLevel(
        code="L4",
        label="Analyze",
        description="Draw connections, distinguish components",
        weight=0.4,
    ),
    TaxonomyLevel(
        code="L5",
        label="Evaluate",
        description="Justify, critique, make judgments",
        weight=0.5,
    ),
    TaxonomyLevel(
        code="L6",
        label="Create",
        description="Generate new ideas, design solutions",
        weight=0.6,
    ),
)

_BY_CODE = {level.code: level for level in BLOOM_LEVELS}


def level_at(position: int) -> TaxonomyLevel:
    """Return the level at a 0-based catalog position."""
    return BLOOM_LEVELS[position]


def level_by_code(code: str) -> TaxonomyLevel:
    """Return the level for a code such as "L3". Raises KeyError if unknown."""
    return _BY_CODE[code.strip().upper()]

