"""Tests for record assembly and total-mark reconciliation."""

from decimal import Decimal

import pytest

from generation.blueprint_builder import build_blueprint
from generation.paper_assembler import (
    assemble_records,
    build_record,
    reconcile_marks,
    round_marks,
    sum_marks,
)
from generation.response_parser import parse_response
from generation.schemas import QuestionFragment


def _records(raw: str, marks: int):
    bp = build_blueprint(marks)
    return assemble_records(parse_response(raw, bp.question_count), bp)


# ── Rounding ────────────────────────────────────────────────────


@pytest.mark.parametrize("value,expected", [
    (0.4166666666666667, 0.42),
    (0.625, 0.63),
    (0.3125, 0.31),
    (1.25, 1.25),
    (-0.125, -0.13),
])
def test_round_marks_half_up(value, expected):
    assert round_marks(value) == expected


# ── Single record ───────────────────────────────────────────────


def test_worked_example_first_fragment_is_remember():
    bp = build_blueprint(50)
    record = build_record(
        QuestionFragment(question_index=0, part="a", sub_index=0, raw_text="State the law."),
        bp,
    )
    assert record.bloom_description == "Remember"
    assert record.bloom_level == "L1"
    assert record.bloom_weight == 0.1
    assert record.marks == 0.42
    assert record.question_number == 1
    assert record.sub_part == 1
    assert record.course_tag == "CO1"
    assert record.text == "State the law."


def test_siblings_in_a_part_share_level_and_marks():
    bp = build_blueprint(100)
    first, second = (
        build_record(QuestionFragment(question_index=2, part="b", sub_index=i, raw_text="x"), bp)
        for i in range(2)
    )
    assert first.bloom_level == second.bloom_level == "L6"
    assert first.marks == second.marks == 3.0
    assert (first.sub_part, second.sub_part) == (1, 2)
    assert first.course_tag == "CO3"


# ── Assembly + reconciliation ───────────────────────────────────


def test_records_before_reconciliation_for_25_marks(make_reply):
    records = _records(make_reply(2), 25)
    assert [r.marks for r in records] == [0.31, 0.31, 0.63, 0.63, 0.94, 0.94, 1.25, 1.25]
    assert [r.bloom_description for r in records[::2]] == ["Remember", "Understand", "Apply", "Analyze"]
    assert [r.course_tag for r in records] == ["CO1"] * 4 + ["CO2"] * 4


def test_reconciliation_adjusts_first_record_only(make_reply):
    records = _records(make_reply(2), 25)
    before = [r.marks for r in records]

    reconcile_marks(records, 25)

    assert records[0].marks == 19.05
    assert [r.marks for r in records[1:]] == before[1:]
    assert sum_marks(records) == Decimal(25)


@pytest.mark.parametrize("marks,questions", [(25, 2), (50, 3), (100, 5), (20, 2), (37, 2)])
def test_reconciled_total_is_exact(make_reply, marks, questions):
    records = _records(make_reply(questions), marks)
    reconcile_marks(records, marks)
    assert sum_marks(records) == Decimal(marks)
    assert sum(r.marks for r in records) == pytest.approx(marks)


def test_reconciliation_handles_short_replies():
    records = _records("Q1:\na1) one\nQ2:\nb2) two\n", 50)
    reconcile_marks(records, 50)
    assert len(records) == 2
    assert sum_marks(records) == Decimal(50)
    assert records[1].bloom_description == "Analyze"


def test_reconciliation_can_reduce_the_first_record():
    bp = build_blueprint(100)
    records = [
        build_record(QuestionFragment(question_index=2, part="b", sub_index=i, raw_text="x"), bp)
        for i in range(40)
    ]
    reconcile_marks(records, 100)
    assert records[0].marks == pytest.approx(-17.0)
    assert sum_marks(records) == Decimal(100)


def test_exact_total_needs_no_adjustment():
    bp = build_blueprint(100)
    records = [
        build_record(QuestionFragment(question_index=0, part="a", sub_index=i, raw_text="x"), bp)
        for i in range(200)
    ]
    reconcile_marks(records, 100)
    assert all(r.marks == 0.5 for r in records)


def test_empty_sequence_applies_no_correction():
    assert reconcile_marks([], 50) == []


def test_record_serialises_with_camel_case_alias(make_reply):
    record = _records(make_reply(2), 25)[0]
    dumped = record.model_dump(by_alias=True)
    assert set(dumped) == {
        "questionNumber", "part", "subPart", "text", "marks",
        "bloomLevel", "bloomDescription", "bloomWeight", "courseTag",
    }


@pytest.mark.parametrize("marks,questions", [(25, 2), (50, 3), (100, 5)])
def test_float_total_is_exact_for_supported_marks(make_reply, marks, questions):
    records = _records(make_reply(questions), marks)
    reconcile_marks(records, marks)
    assert sum(r.marks for r in records) == marks
