"""
Error types raised by the assessment synthesis pipeline.

The router converts these into HTTP responses; parser anomalies never raise.
"""


class SynthesisError(Exception):
    """Base class for assessment synthesis failures."""


class MissingImageError(SynthesisError):
    """Raised when a request arrives without an image payload."""


class InvalidImageError(SynthesisError):
    """Raised when the uploaded bytes cannot be decoded as an image."""


class ImageTooLargeError(InvalidImageError):
    """Raised when the uploaded image exceeds the configured byte limit."""


class GenerationFailedError(SynthesisError):
    """Raised when the generative model call fails or returns nothing usable."""
