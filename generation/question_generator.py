"""
Step 2 — Question Generation

Builds the instruction for the vision model and runs the (injected)
QuestionGenerator once. No retries: any failure here aborts the request.
"""

import logging

from generation.exceptions import GenerationFailedError
from generation.schemas import ImagePayload, QuestionGenerator

log = logging.getLogger("generation.pipeline")


# ─── Prompt ────────────────────────────────────────────────────────────────────

QUESTION_PROMPT = """Generate {num_questions} comprehensive, academically rigorous questions based on the image content.
Ensure questions are:
- Precise and clear
- Directly related to the image
- Avoid using words like 'module', 'textbook', or referencing specific learning materials
- Demonstrate deep analytical thinking

For each question, create two main parts (a and b).
Each part should have two sub-questions.

Format the output as:
Q1:
a1) First sub-question of part a
a2) Second sub-question of part a
b1) First sub-question of part b
b2) Second sub-question of part b

Focus on extracting and analyzing key information from the image."""

GENERIC_FAILURE_MESSAGE = "Failed to generate questions."


def build_prompt(num_questions: int) -> str:
    return QUESTION_PROMPT.format(num_questions=num_questions)


async def request_questions(
    prompt: str,
    image: ImagePayload,
    generate: QuestionGenerator,
) -> str:
    """
    Step 2: Send prompt + image to the model and return its raw reply.

    Args:
        prompt:   Instruction built by build_prompt()
        image:    Prepared image
        generate: async (prompt, image) -> text

    Returns:
        Raw reply text (possibly malformed; the parser handles that)

    Raises:
        GenerationFailedError: the call raised or returned something that is not text
    """
    log.info(f"[STEP 2] Requesting questions ({image.mime_type}, {len(image.data)} bytes)...")
    try:
        raw = await generate(prompt, image)
    except Exception as e:
        log.error(f"[STEP 2] FAILED: {e}")
        raise GenerationFailedError(GENERIC_FAILURE_MESSAGE) from e

    if not isinstance(raw, str):
        log.error(f"[STEP 2] FAILED: model returned {type(raw).__name__}, expected text")
        raise GenerationFailedError(GENERIC_FAILURE_MESSAGE)

    log.info(f"[STEP 2] OK — {len(raw)} chars received")
    return raw
