"""cvpress: one-page CV and cover letter PDF rendering."""

from cvpress.errors import (
    CvPressError,
    FitCancelled,
    FontResourceError,
    MergeError,
    ModelValidationError,
    RenderError,
)
from cvpress.export import count_pages, merge_documents, render_to_bytes
from cvpress.models import CvDocModel, LmModel, normalize_cv, normalize_letter
from cvpress.pipeline import (
    FitOptions,
    FittedArtifact,
    GeneratedBundle,
    fit_one_page,
    generate_cv_and_letter,
)
from cvpress.templates.letter import build_letter_document
from cvpress.templates.registry import (
    LayoutHint,
    TemplateId,
    build_cv_document,
    list_templates,
)
from cvpress.theme import PdfColors, make_colors

__version__ = "0.1.0"

__all__ = [
    "CvDocModel",
    "CvPressError",
    "FitCancelled",
    "FitOptions",
    "FittedArtifact",
    "FontResourceError",
    "GeneratedBundle",
    "LayoutHint",
    "LmModel",
    "MergeError",
    "ModelValidationError",
    "PdfColors",
    "RenderError",
    "TemplateId",
    "build_cv_document",
    "build_letter_document",
    "count_pages",
    "fit_one_page",
    "generate_cv_and_letter",
    "list_templates",
    "make_colors",
    "merge_documents",
    "normalize_cv",
    "normalize_letter",
    "render_to_bytes",
]
