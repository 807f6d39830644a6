"""
Step 5 — CO (Course Outcome) Mapper

Positional default: the first generated question maps to CO1, the second to
CO2, and so on. Every sub-question of a question shares its CO label.
"""


def map_co(question_index: int) -> str:
    """Return the CO label for a 0-based question index, e.g. 0 → "CO1"."""
    if question_index < 0:
        raise ValueError(f"question_index must be >= 0, got {question_index}")
    return f"CO{question_index + 1}"
