"""
Pydantic schemas for the assessment synthesis pipeline.

Internal types use snake_case; the API document is serialised with the
camelCase aliases the frontend reads (questions, totalQuestions, ...).
"""

from typing import Awaitable, Callable, List, Literal

from pydantic import BaseModel, ConfigDict, Field


# ─── Taxonomy ──────────────────────────────────────────────────────────────────

class TaxonomyLevel(BaseModel):
    """One entry of the fixed Bloom's taxonomy catalog."""
    model_config = ConfigDict(frozen=True)

    code: str            # "L1" .. "L6"
    label: str           # "Remember" .. "Create"
    description: str
    weight: float = Field(..., gt=0)


# ─── Allocation ────────────────────────────────────────────────────────────────

class AllocationEntry(BaseModel):
    """Marks one sub-question earns when tagged with this level."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    level: str
    label: str
    description: str
    weight: float
    marks_per_sub_question: float = Field(..., alias="marksPerSubQuestion")


class AssessmentBlueprint(BaseModel):
    """Question count + per-level allocation computed before generation."""
    total_marks: int
    question_count: int
    allocation: List[AllocationEntry]

    def entry_for(self, level_code: str) -> AllocationEntry:
        for entry in self.allocation:
            if entry.level == level_code:
                return entry
        raise KeyError(level_code)


# ─── Parser output ─────────────────────────────────────────────────────────────

class QuestionFragment(BaseModel):
    """One sub-question line as parsed from the model reply."""
    model_config = ConfigDict(frozen=True)

    question_index: int = Field(..., ge=0)
    part: Literal["a", "b"]
    sub_index: int = Field(..., ge=0)
    raw_text: str


# ─── Final records ─────────────────────────────────────────────────────────────

class QuestionRecord(BaseModel):
    """A fully resolved sub-question: text, Bloom tag, marks and CO label."""
    model_config = ConfigDict(populate_by_name=True)

    question_number: int = Field(..., alias="questionNumber")
    part: Literal["a", "b"]
    sub_part: int = Field(..., alias="subPart")
    text: str
    marks: float
    bloom_level: str = Field(..., alias="bloomLevel")
    bloom_description: str = Field(..., alias="bloomDescription")
    bloom_weight: float = Field(..., alias="bloomWeight")
    course_tag: str = Field(..., alias="courseTag")


class AssessmentResponse(BaseModel):
    """Complete synthesis result returned to the caller."""
    model_config = ConfigDict(populate_by_name=True)

    questions: List[QuestionRecord] = Field(default_factory=list)
    total_questions: int = Field(..., alias="totalQuestions")
    marks_requested: int = Field(..., alias="marksRequested")
    total_marks: int = Field(..., alias="totalMarks")
    marks_allocation: List[AllocationEntry] = Field(..., alias="marksAllocation")


# ─── Model capability ──────────────────────────────────────────────────────────

class ImagePayload(BaseModel):
    """Decoded, size-capped image ready to be sent to the model."""
    data: bytes
    mime_type: str = "image/png"
    width: int = 0
    height: int = 0


# async generate(prompt, image) -> raw reply text
QuestionGenerator = Callable[[str, ImagePayload], Awaitable[str]]
