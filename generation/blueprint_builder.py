"""
Step 1 — Blueprint Builder

Decides how many questions to request for a mark total and precomputes the
marks a sub-question earns at each Bloom level (deterministic, no LLM).

Every question is assumed to have exactly 4 sub-questions (a1, a2, b1, b2),
whatever the model later returns. The per-level figure is shared by every
sub-question tagged with that level, so the raw total drifts from the request;
the paper assembler reconciles it afterwards.
"""

import logging
from typing import List, Optional

from generation.schemas import AllocationEntry, AssessmentBlueprint
from generation.taxonomy import BLOOM_LEVELS

log = logging.getLogger("generation.pipeline")


# ─── Question count policy ─────────────────────────────────────────────────────

QUESTION_COUNT_BY_MARKS: dict = {
    25: 2,
    50: 3,
    100: 5,
}

DEFAULT_QUESTION_COUNT = 2

SUB_QUESTIONS_PER_QUESTION = 4   # 2 in part a, 2 in part b


def determine_question_count(total_marks: Optional[int]) -> int:
    """Map a requested mark total to a question count (lookup with default)."""
    if total_marks is None:
        return DEFAULT_QUESTION_COUNT
    return QUESTION_COUNT_BY_MARKS.get(total_marks, DEFAULT_QUESTION_COUNT)


# ─── Mark allocation ───────────────────────────────────────────────────────────

def allocate_marks(total_marks: int, num_questions: int) -> List[AllocationEntry]:
    """
    Compute marks per sub-question for every Bloom level.

    Args:
        total_marks:   Requested paper total (M)
        num_questions: Question count (N)

    Returns:
        One AllocationEntry per taxonomy level, in catalog order.
        marks_per_sub_question = (M / N / 4) * level.weight, unrounded.
    """
    if num_questions <= 0:
        raise ValueError(f"num_questions must be positive, got {num_questions}")

    question_marks = total_marks / num_questions
    base_marks_per_sub_question = question_marks / SUB_QUESTIONS_PER_QUESTION

    return [
        AllocationEntry(
            level=level.code,
            label=level.label,
            description=level.description,
            weight=level.weight,
            marks_per_sub_question=base_marks_per_sub_question * level.weight,
        )
        for level in BLOOM_LEVELS
    ]


def build_blueprint(total_marks: int) -> AssessmentBlueprint:
    """Select N for the mark total and precompute the allocation table."""
    num_questions = determine_question_count(total_marks)
    allocation = allocate_marks(total_marks, num_questions)
    log.info(
        f"[STEP 1] Blueprint: marks={total_marks} → questions={num_questions}, "
        f"base/sub={total_marks / num_questions / SUB_QUESTIONS_PER_QUESTION:.4f}"
    )
    return AssessmentBlueprint(
        total_marks=total_marks,
        question_count=num_questions,
        allocation=allocation,
    )
