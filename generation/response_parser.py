"""
Step 3 — Response Parser

Splits the model's free-text reply into sub-question fragments.

Expected layout (the model is asked for it but may not comply):

    Q1:
    a1) ...
    a2) ...
    b1) ...
    b2) ...
    Q2:
    ...

Parsing is permissive: the reply is cut on every literal "Q", lines that do
not start with "a" or "b" are dropped, and a part with no lines yields no
fragments. Nothing here raises on malformed input.
"""

import logging
import re
from typing import Dict, List, Optional

from generation.schemas import QuestionFragment

log = logging.getLogger("generation.pipeline")

QUESTION_DELIMITER = "Q"
PARTS = ("a", "b")

_PREFIX_RE: Dict[str, re.Pattern] = {
    part: re.compile(rf"^{part}\d*\)\s*") for part in PARTS
}


def _strip_prefix(line: str, part: str) -> str:
    """Remove a leading "a1) " / "b) " marker and trim."""
    return _PREFIX_RE[part].sub("", line, count=1).strip()


def split_question_blocks(raw: str) -> List[str]:
    """Cut the reply on "Q" and drop empty or whitespace-only segments."""
    return [block for block in raw.split(QUESTION_DELIMITER) if block.strip()]


def parse_block(block: str, question_index: int) -> List[QuestionFragment]:
    """Parse one question block into its part-a then part-b fragments."""
    lines = [line.strip() for line in block.splitlines() if line.strip()]

    fragments: List[QuestionFragment] = []
    for part in PARTS:
        part_lines = [line for line in lines if line.startswith(part)]
        if not part_lines:
            log.warning(f"[STEP 3] Block {question_index + 1}: no part-{part} lines")
        for sub_index, line in enumerate(part_lines):
            fragments.append(QuestionFragment(
                question_index=question_index,
                part=part,
                sub_index=sub_index,
                raw_text=_strip_prefix(line, part),
            ))
    return fragments


def parse_response(raw: str, expected_questions: Optional[int] = None) -> List[QuestionFragment]:
    """
    Step 3: Parse the raw model reply into ordered QuestionFragments.

    Args:
        raw:                Model reply text
        expected_questions: Count that was requested; only used for logging

    Returns:
        Fragments ordered by question, then part (a before b), then sub-index.
        Empty if the reply contains no "Q"-delimited segments.
    """
    blocks = split_question_blocks(raw or "")

    fragments: List[QuestionFragment] = []
    for question_index, block in enumerate(blocks):
        fragments.extend(parse_block(block, question_index))

    if expected_questions is not None and len(blocks) != expected_questions:
        log.warning(
            f"[STEP 3] Reply has {len(blocks)} question block(s), expected {expected_questions}"
        )
    log.info(f"[STEP 3] Parsed {len(fragments)} fragment(s) from {len(blocks)} block(s)")
    return fragments
