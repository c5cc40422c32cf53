"""Fitting and generation pipeline."""
from cvpress.pipeline.fitting import (
    LETTER_FIT,
    FitOptions,
    FittedArtifact,
    FitTrial,
    fit_one_page,
)
from cvpress.pipeline.generate import GeneratedBundle, generate_cv_and_letter

__all__ = [
    "LETTER_FIT",
    "FitOptions",
    "FitTrial",
    "FittedArtifact",
    "GeneratedBundle",
    "fit_one_page",
    "generate_cv_and_letter",
]
