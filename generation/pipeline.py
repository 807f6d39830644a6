"""
Assessment synthesis pipeline: image + mark total → weighted question paper.

    1. Blueprint        — question count + per-level mark table
    2. Generation       — one vision-model call (injected)
    3. Parse            — reply text → fragments
    4–5. Bloom / CO     — per fragment, inside assembly
    6. Assemble         — records + total reconciliation
"""

import logging
from typing import Optional

from generation.blueprint_builder import build_blueprint
from generation.exceptions import MissingImageError
from generation.image_utils import MAX_IMAGE_BYTES, prepare_image
from generation.paper_assembler import assemble_records, reconcile_marks
from generation.question_generator import build_prompt, request_questions
from generation.response_parser import parse_response
from generation.schemas import AssessmentResponse, QuestionGenerator

log = logging.getLogger("generation.pipeline")


async def synthesize_assessment(
    image: Optional[bytes],
    total_marks: int,
    generate: QuestionGenerator,
    max_image_bytes: int = MAX_IMAGE_BYTES,
) -> AssessmentResponse:
    """
    Run the full pipeline for one request.

    Args:
        image:       Raw uploaded image bytes (None or empty → rejected)
        total_marks: Requested paper total
        generate:    async (prompt, image) -> text
        max_image_bytes: Upload size limit passed to prepare_image

    Returns:
        AssessmentResponse whose record marks sum to total_marks whenever at
        least one fragment was parsed.

    Raises:
        MissingImageError / InvalidImageError: before any model call
        GenerationFailedError: the model call failed
    """
    if not image:
        raise MissingImageError("No image file uploaded.")

    log.info("=" * 60)
    log.info(f"[PIPELINE START] marks={total_marks}, image={len(image)} bytes")

    payload = prepare_image(image, max_bytes=max_image_bytes)
    blueprint = build_blueprint(total_marks)

    raw = await request_questions(build_prompt(blueprint.question_count), payload, generate)

    fragments = parse_response(raw, blueprint.question_count)
    records = assemble_records(fragments, blueprint)
    reconcile_marks(records, total_marks)

    log.info(f"[PIPELINE DONE] {len(records)} sub-question(s), requested={blueprint.question_count} question(s)")
    return AssessmentResponse(
        questions=records,
        total_questions=blueprint.question_count,
        marks_requested=total_marks,
        total_marks=total_marks,
        marks_allocation=blueprint.allocation,
    )
