from typing import Any, Optional


class SimilarityError(Exception):
    """Base class for similarity engine errors."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        self.message = message
        self.field = field
        self.value = value
        super().__init__(self.message)


class UnknownStrategy(SimilarityError, ValueError):
    """Raised for an unrecognized tokenizer, vectorizer or metric name."""


class ParameterValidationError(SimilarityError, ValueError):
    """Raised for invalid numeric parameters such as k, w or worker count."""


class DimensionMismatch(SimilarityError):
    """Raised when a vector metric receives vectors of different lengths."""


class LengthMismatch(SimilarityError):
    """Raised when a Hamming metric receives strings of different lengths."""


class DegenerateInput(SimilarityError):
    """Raised when a ratio would divide by zero."""


class GenerationCancelled(SimilarityError):
    """Raised when matrix generation is cancelled between pairs."""
