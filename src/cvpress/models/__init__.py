"""Data models for CVs and cover letters."""

from cvpress.models.cv import SKILL_CATEGORIES, CvDocModel, CvSkills, XpEntry
from cvpress.models.letter import Lang, LmModel
from cvpress.models.normalize import (
    clean_bullet,
    clean_text,
    normalize_cv,
    normalize_lang,
    normalize_letter,
)

__all__ = [
    "SKILL_CATEGORIES",
    "CvDocModel",
    "CvSkills",
    "Lang",
    "LmModel",
    "XpEntry",
    "clean_bullet",
    "clean_text",
    "normalize_cv",
    "normalize_lang",
    "normalize_letter",
]
