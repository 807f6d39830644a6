"""
Shared OpenAI GPT helper for the generation pipeline.

Used by:
  - question_generator.py   (Step 2, as the default QuestionGenerator)

Model: gpt-4o-mini  (override with GPT_MODEL env var, e.g. "gpt-4o").
The model must accept image input.
"""

import base64
import os

from openai import AsyncOpenAI

from generation.schemas import ImagePayload

# ── Model config ───────────────────────────────────────────────────────────────
GPT_MODEL = os.getenv("GPT_MODEL", "gpt-4o-mini")
GPT_TIMEOUT_SECONDS = float(os.getenv("GPT_TIMEOUT_SECONDS", "60"))

DEFAULT_SYSTEM_PROMPT = "You are an expert university exam question setter. Output only what is asked."

# Lazy singleton
_client: AsyncOpenAI | None = None


def _get_client() -> AsyncOpenAI:
    global _client
    if _client is None:
        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            raise RuntimeError(
                "OPENAI_API_KEY is not set. Add it to your .env file."
            )
        # No SDK-level retries: an upstream failure aborts the request.
        _client = AsyncOpenAI(api_key=api_key, timeout=GPT_TIMEOUT_SECONDS, max_retries=0)
    return _client


def image_data_url(image: ImagePayload) -> str:
    """Encode an image as a data: URL for inline vision input."""
    encoded = base64.b64encode(image.data).decode("utf-8")
    return f"data:{image.mime_type};base64,{encoded}"


async def call_gpt_vision(
    prompt: str,
    image: ImagePayload,
    system: str = DEFAULT_SYSTEM_PROMPT,
    temperature: float = 0.4,
    max_tokens: int = 2048,
) -> str:
    """
    Call OpenAI Chat Completions with one text part and one image part.

    Args:
        prompt:      User-turn instruction
        image:       Image sent inline alongside the prompt
        system:      System prompt
        temperature: Sampling temperature (lower = more deterministic)
        max_tokens:  Max response tokens

    Returns:
        Raw string content of the model response
    """
    client = _get_client()
    response = await client.chat.completions.create(
        model=GPT_MODEL,
        messages=[
            {"role": "system", "content": system},
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": prompt},
                    {"type": "image_url", "image_url": {"url": image_data_url(image)}},
                ],
            },
        ],
        temperature=temperature,
        max_tokens=max_tokens,
    )
    return response.choices[0].message.content or ""
