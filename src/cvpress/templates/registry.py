"""Template catalogue and dispatch.

Every TemplateId is bound to exactly one renderer. The binding is checked when
this module is imported, so adding an id without a renderer fails immediately.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from cvpress.layout.document import LayoutDocument
from cvpress.models.cv import CvDocModel
from cvpress.models.letter import Lang
from cvpress.models.normalize import normalize_lang
from cvpress.templates import (
    ats,
    classic,
    creative,
    elegant,
    minimalist,
    modern,
    pro_max,
    tech,
)
from cvpress.theme import PdfColors

logger = logging.getLogger(__name__)

MIN_SCALE = 0.75
MAX_SCALE = 1.6


class TemplateId(str, Enum):
    ATS = "ats"
    CLASSIC = "classic"
    MODERN = "modern"
    MINIMALIST = "minimalist"
    CREATIVE = "creative"
    ELEGANT = "elegant"
    TECH = "tech"
    PRO_MAX = "pro_max"


class LayoutHint(str, Enum):
    AUTO = "auto"
    TIGHT = "tight"
    SPACIOUS = "spacious"


HINT_FACTORS = {
    LayoutHint.TIGHT: 0.92,
    LayoutHint.AUTO: 1.0,
    LayoutHint.SPACIOUS: 1.08,
}

_ATS_MODES = {
    LayoutHint.TIGHT: ats.AtsMode.COMPACT,
    LayoutHint.AUTO: ats.AtsMode.AUTO,
    LayoutHint.SPACIOUS: ats.AtsMode.EXPANDED,
}

Renderer = Callable[[CvDocModel, Lang, PdfColors, float], LayoutDocument]

RENDERERS: dict[TemplateId, Renderer] = {
    TemplateId.ATS: ats.render,
    TemplateId.CLASSIC: classic.render,
    TemplateId.MODERN: modern.render,
    TemplateId.MINIMALIST: minimalist.render,
    TemplateId.CREATIVE: creative.render,
    TemplateId.ELEGANT: elegant.render,
    TemplateId.TECH: tech.render,
    TemplateId.PRO_MAX: pro_max.render,
}

_unbound = [t.value for t in TemplateId if t not in RENDERERS]
if _unbound:
    raise RuntimeError(f"Templates without a renderer: {', '.join(_unbound)}")


@dataclass(frozen=True)
class TemplateMeta:
    id: TemplateId
    label: str
    description: str
    preview_src: str
    badge: str | None = None


def _preview(template_id: TemplateId) -> str:
    return f"/cv-templates/cv-template-{template_id.value.replace('_', '-')}.png"


_CATALOGUE = (
    (TemplateId.ATS, "ATS (Standard)", "Template 1 colonne très lisible, optimisé pour les ATS.", "Recommandé"),
    (TemplateId.CLASSIC, "Classic (Sidebar)", "Colonne latérale, structure pro et lisible.", None),
    (TemplateId.MODERN, "Modern (Design)", "Header moderne, blocs aérés, idéal profils tech/produit.", None),
    (TemplateId.MINIMALIST, "Minimalist", "CV ultra épuré, typographie clean, parfait pour cabinets.", None),
    (TemplateId.CREATIVE, "Creative", "Mise en page en cartes / blocs, look plus dynamique.", None),
    (TemplateId.ELEGANT, "Elegant", "Style plus premium, hiérarchie douce, très corporate.", None),
    (TemplateId.TECH, "Tech (Dark)", "Palette sombre, vibe engineering / cybersécurité.", None),
    (TemplateId.PRO_MAX, "Pro Max", "Version premium inspirée des CV design (header fort, cartes).", "Nouveau"),
)


def list_templates() -> list[TemplateMeta]:
    """Catalogue entries in TemplateId order."""
    return [
        TemplateMeta(id=tid, label=label, description=desc, preview_src=_preview(tid), badge=badge)
        for tid, label, desc, badge in _CATALOGUE
    ]


def apply_hint(scale: float, hint: LayoutHint) -> float:
    return max(MIN_SCALE, min(MAX_SCALE, scale * HINT_FACTORS[hint]))


def build_cv_document(
    template_id: TemplateId | str,
    model: CvDocModel,
    lang: Lang | str,
    colors: PdfColors,
    layout_hint: LayoutHint | str = LayoutHint.AUTO,
    scale: float = 1.0,
) -> LayoutDocument:
    """Render ``model`` with one template.

    The ATS template maps the hint to its compact/expanded typography and
    applies ``scale`` as is; the others multiply ``scale`` by the hint factor
    and clamp it to [0.75, 1.6].

    Raises:
        ValueError: unknown template id or layout hint.
    """
    template = TemplateId(template_id)
    hint = LayoutHint(layout_hint)
    lang = normalize_lang(lang)
    if template is TemplateId.ATS:
        return ats.render(model, lang, colors, scale, mode=_ATS_MODES[hint])
    return RENDERERS[template](model, lang, colors, apply_hint(scale, hint))
