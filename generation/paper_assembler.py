"""
Step 6 — Paper Assembly Engine

Turns parsed fragments into QuestionRecords (Bloom tag, marks, CO label) and
reconciles the total so the emitted marks add up to the requested figure.

Marks are rounded half-up to 2 decimal places. The reconciliation difference
is applied to the first record only.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List

from generation.bloom_assigner import assign_bloom_level_for_part
from generation.co_mapper import map_co
from generation.schemas import AssessmentBlueprint, QuestionFragment, QuestionRecord

log = logging.getLogger("generation.pipeline")

TWO_PLACES = Decimal("0.01")


def round_marks(value: float) -> float:
    """Round half-up to 2 decimal places."""
    return float(Decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def sum_marks(records: Iterable[QuestionRecord]) -> Decimal:
    """Exact decimal total of already-rounded record marks."""
    return sum((Decimal(str(r.marks)) for r in records), Decimal("0"))


def build_record(fragment: QuestionFragment, blueprint: AssessmentBlueprint) -> QuestionRecord:
    """Resolve level, marks and CO for a single fragment."""
    level = assign_bloom_level_for_part(fragment.question_index, fragment.part)
    entry = blueprint.entry_for(level.code)
    return QuestionRecord(
        question_number=fragment.question_index + 1,
        part=fragment.part,
        sub_part=fragment.sub_index + 1,
        text=fragment.raw_text,
        marks=round_marks(entry.marks_per_sub_question),
        bloom_level=level.code,
        bloom_description=level.label,
        bloom_weight=level.weight,
        course_tag=map_co(fragment.question_index),
    )


def assemble_records(
    fragments: List[QuestionFragment],
    blueprint: AssessmentBlueprint,
) -> List[QuestionRecord]:
    """Build one record per fragment, preserving parse order."""
    return [build_record(fragment, blueprint) for fragment in fragments]


def reconcile_marks(records: List[QuestionRecord], total_marks: int) -> List[QuestionRecord]:
    """
    Force the record total to equal total_marks.

    The signed difference goes onto records[0]; every other record is left
    as allocated. With no records there is nothing to carry the correction,
    so none is applied.

    Exactness holds for the 2-dp decimal values (see sum_marks). A plain
    float sum of the marks can be off by one ulp for some totals.

    Args:
        records:     Records in emission order (mutated in place)
        total_marks: Requested paper total

    Returns:
        The same list, for chaining.
    """
    if not records:
        log.warning(
            f"[STEP 6] No records to reconcile; emitted total 0 vs requested {total_marks}"
        )
        return records

    current = sum_marks(records)
    difference = Decimal(total_marks) - current
    if difference != 0:
        first = records[0]
        adjusted = Decimal(str(first.marks)) + difference.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
        first.marks = float(adjusted)
        log.info(
            f"[STEP 6] Reconciled: allocated={current}, requested={total_marks}, "
            f"Q{first.question_number}{first.part}{first.sub_part} adjusted by {difference:+}"
        )
    return records
