"""Exception hierarchy for cvpress."""

from __future__ import annotations


class CvPressError(Exception):
    """Base class for every error raised by cvpress."""


class ModelValidationError(CvPressError, ValueError):
    """Raised when raw input cannot be coerced into a document model.

    Attributes:
        model_name: Name of the model being built ("CvDocModel", "LmModel").
        locations: Dotted field paths that failed, e.g. ``["xp.0.role"]``.
    """

    def __init__(
        self,
        message: str,
        model_name: str | None = None,
        locations: list[str] | None = None,
    ):
        self.message = message
        self.model_name = model_name
        self.locations = locations or []

        parts = [message]
        if model_name:
            parts.append(f"Model: {model_name}")
        if self.locations:
            parts.append("Fields: " + ", ".join(self.locations))
        super().__init__("\n".join(parts))


class FontResourceError(CvPressError):
    """Raised when the font table required by the PDF backend cannot be built."""


class RenderError(CvPressError):
    """Raised when the PDF backend fails or cannot read a PDF it is given."""


class MergeError(CvPressError, ValueError):
    """Raised when documents cannot be merged (e.g. an empty input list)."""


class FitCancelled(CvPressError):
    """Raised when a scale-fitting search is cancelled between two renders."""
