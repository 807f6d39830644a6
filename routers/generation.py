"""
Generation Router

Endpoints:
  POST /generate-questions   — image + maxMarks → weighted question paper
"""

import logging
import os
import re
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from generation.exceptions import (
    GenerationFailedError, ImageTooLargeError, InvalidImageError, MissingImageError,
)
from generation.gpt_client import call_gpt_vision
from generation.image_utils import MAX_IMAGE_BYTES
from generation.pipeline import synthesize_assessment
from generation.schemas import AssessmentResponse, QuestionGenerator

router = APIRouter(tags=["generation"])

# Use Python's standard logger so output appears in the uvicorn console
log = logging.getLogger("generation.pipeline")
logging.basicConfig(level=logging.INFO, format="%(asctime)s  %(levelname)s  %(message)s")

DEFAULT_MAX_MARKS = int(os.getenv("DEFAULT_MAX_MARKS", "20"))

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def parse_max_marks(raw: Optional[str], default: int = DEFAULT_MAX_MARKS) -> int:
    """
    Read the leading integer of a form value ("50", " 25 marks", "12.5" → 12).
    Falls back to `default` when absent, non-numeric or zero.
    """
    if raw is None:
        return default
    match = _LEADING_INT_RE.match(raw)
    if not match:
        return default
    return int(match.group(1)) or default


def get_question_generator() -> QuestionGenerator:
    """Default model capability; tests override this dependency."""
    return call_gpt_vision


@router.post("/generate-questions", response_model=AssessmentResponse)
async def generate_questions(
    image: Optional[UploadFile] = File(None, description="Source image"),
    max_marks: Optional[str] = Form(None, alias="maxMarks", description="Total marks (25 | 50 | 100)"),
    generate: QuestionGenerator = Depends(get_question_generator),
):
    """
    Generate a Bloom-tagged question paper from an uploaded image.

    Input: multipart `image` file + optional `maxMarks` (default 20)
    Output: questions, totalQuestions, marksRequested, totalMarks, marksAllocation
    """
    marks = parse_max_marks(max_marks)

    # One byte past the limit is enough to detect an oversized upload
    data = await image.read(MAX_IMAGE_BYTES + 1) if image is not None else b""

    try:
        return await synthesize_assessment(data, marks, generate, max_image_bytes=MAX_IMAGE_BYTES)
    except MissingImageError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ImageTooLargeError as e:
        raise HTTPException(status_code=413, detail=str(e))
    except InvalidImageError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except GenerationFailedError as e:
        raise HTTPException(status_code=500, detail=str(e))
