"""Tech template: the modern layout on a dark page."""

from __future__ import annotations

from cvpress.layout.document import LayoutDocument
from cvpress.models.cv import CvDocModel
from cvpress.models.letter import Lang
from cvpress.templates.modern import ModernPalette, build
from cvpress.theme import PdfColors

PAGE = "#020617"  # slate-950
HEADER = "#0f172a"
LINE = "#1e293b"
INK = "#f9fafb"
MUTED = "#94a3b8"


def render(model: CvDocModel, lang: Lang, colors: PdfColors, scale: float) -> LayoutDocument:
    palette = ModernPalette(
        ink=INK,
        muted=MUTED,
        accent=colors.brand,
        header=HEADER,
        rule=LINE,
        background=PAGE,
    )
    return build(model, lang, colors, scale, palette)
