"""Shared pytest fixtures for the assessment synthesis tests.

Provides:
- ``png_bytes``: a small real PNG image
- ``make_reply``: builds a model reply in the requested Q/a/b layout
- ``stub_generator``: deterministic async generator that records its calls
"""

from __future__ import annotations

import io

import pytest
from PIL import Image


def _image_bytes(size=(64, 48), fmt="PNG", mode="RGB") -> bytes:
    buf = io.BytesIO()
    Image.new(mode, size, color=(200, 120, 40) if mode == "RGB" else 128).save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    return _image_bytes()


@pytest.fixture
def image_bytes():
    """Factory: image_bytes(size=(w, h), fmt="JPEG")."""
    return _image_bytes


def build_reply(num_questions: int) -> str:
    lines = []
    for q in range(1, num_questions + 1):
        lines.append(f"Q{q}:")
        lines.append(f"a1) Describe the main structure shown in figure {q}.")
        lines.append(f"a2) Name two labelled components of figure {q}.")
        lines.append(f"b1) Explain how the components of figure {q} interact.")
        lines.append(f"b2) Predict what happens if one component of figure {q} fails.")
    return "\n".join(lines)


@pytest.fixture
def make_reply():
    return build_reply


class StubGenerator:
    """Async (prompt, image) -> text stand-in for the vision model."""

    def __init__(self, reply: str = ""):
        self.reply = reply
        self.calls = []

    async def __call__(self, prompt, image):
        self.calls.append((prompt, image))
        return self.reply


@pytest.fixture
def stub_generator() -> StubGenerator:
    return StubGenerator()
