"""
Step 4 — Bloom Level Assignment

Deterministic cycling through the taxonomy: each (question, part) pair moves
one level up, wrapping after Create. Both sub-questions of a part share the
part's level.
"""

from generation.schemas import TaxonomyLevel
from generation.taxonomy import BLOOM_LEVELS, level_at

PART_SELECTORS: dict = {
    "a": 0,
    "b": 1,
}


def assign_bloom_level(question_index: int, part_selector: int) -> TaxonomyLevel:
    """
    Return the level for a 0-based question index and part selector.

    cycle = (question_index * 2 + part_selector) mod 6
    """
    base_index = question_index * 2 + part_selector
    return level_at(base_index % len(BLOOM_LEVELS))


def assign_bloom_level_for_part(question_index: int, part: str) -> TaxonomyLevel:
    return assign_bloom_level(question_index, PART_SELECTORS[part])
