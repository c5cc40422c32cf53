"""PDF render backend (fpdf2) and page-count oracle (pypdf)."""

from __future__ import annotations

import logging
from dataclasses import fields, is_dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from io import BytesIO

from fontTools.ttLib import TTLibError
from fpdf import FPDF
from fpdf.errors import FPDFException
from pypdf import PdfReader
from pypdf.errors import PyPdfError

from cvpress.errors import FontResourceError, RenderError
from cvpress.export.drawing import draw_flag, draw_icon, fill, stroke
from cvpress.export.fonts import FontTable, get_fonts
from cvpress.export.layout_engine import (
    CircleOp,
    FlagOp,
    IconOp,
    LineOp,
    PageLayout,
    RectOp,
    TextOp,
    layout_document,
)
from cvpress.layout.document import Band, Disc, LayoutDocument
from cvpress.theme import hex_to_rgb

logger = logging.getLogger(__name__)

# Fixed metadata keeps the output byte-identical across runs.
CREATION_DATE = datetime(2024, 1, 1, tzinfo=timezone.utc)
PRODUCER = "cvpress"


class _Measurer:
    def __init__(self, pdf: FPDF, fonts: FontTable):
        self.pdf = pdf
        self.fonts = fonts
        self._cache: dict[tuple[str, str, float], float] = {}

    def __call__(self, text: str, style: str, size: float) -> float:
        key = (text, style, size)
        width = self._cache.get(key)
        if width is None:
            self.pdf.set_font(self.fonts.family, style, size)
            width = self.pdf.get_string_width(text)
            self._cache[key] = width
        return width


def _sanitize(doc: LayoutDocument, fonts: FontTable) -> LayoutDocument:
    """Core fonts only cover cp1252; replace anything else before measuring."""
    if not fonts.core:
        return doc

    def walk(value):
        if isinstance(value, Enum):
            return value
        if isinstance(value, str):
            return fonts.sanitize(value)
        if isinstance(value, tuple):
            return tuple(walk(v) for v in value)
        if is_dataclass(value) and not isinstance(value, type):
            changes = {}
            for f in fields(value):
                current = getattr(value, f.name)
                if isinstance(current, (str, tuple)) or is_dataclass(current):
                    new = walk(current)
                    if new != current:
                        changes[f.name] = new
            return replace(value, **changes) if changes else value
        return value

    return replace(doc, blocks=walk(doc.blocks))


def _new_pdf(
    doc: LayoutDocument, fonts: FontTable, producer: str, author: str | None = None
) -> FPDF:
    pdf = FPDF(unit="pt", format=(doc.page.width, doc.page.height))
    pdf.set_auto_page_break(False)
    pdf.set_margins(doc.page.margins.left, doc.page.margins.top, doc.page.margins.right)
    pdf.set_creation_date(CREATION_DATE)
    pdf.set_producer(producer)
    if doc.title:
        pdf.set_title(fonts.sanitize(doc.title))
    author = author or doc.author
    if author:
        pdf.set_author(fonts.sanitize(author))
    try:
        fonts.install(pdf)
    except (OSError, FPDFException, TTLibError) as exc:
        raise FontResourceError(f"Could not load font family {fonts.family!r}: {exc}") from exc
    return pdf


def _draw_decorations(pdf: FPDF, doc: LayoutDocument, first_page: bool) -> None:
    if doc.background:
        fill(pdf, doc.background)
        pdf.rect(0, 0, doc.page.width, doc.page.height, style="F")
    for deco in doc.decorations:
        if not (deco.every_page or first_page):
            continue
        fill(pdf, deco.color)
        if isinstance(deco, Band):
            pdf.rect(deco.x, deco.y, deco.w, deco.h, style="F")
        elif isinstance(deco, Disc):
            pdf.circle(deco.x, deco.y, deco.radius, style="F")


def _style_for(fill_color: str | None, stroke_color: str | None) -> str:
    if fill_color and stroke_color:
        return "DF"
    return "F" if fill_color else "D"


def _draw_page(pdf: FPDF, page: PageLayout, fonts: FontTable) -> None:
    for op in page.ops:
        if isinstance(op, TextOp):
            pdf.set_font(fonts.family, op.style, op.size)
            pdf.set_text_color(*hex_to_rgb(op.color))
            pdf.text(op.x, op.y, op.text)
        elif isinstance(op, RectOp):
            if op.fill:
                fill(pdf, op.fill)
            if op.stroke:
                stroke(pdf, op.stroke, op.line_width)
            pdf.rect(op.x, op.y, op.w, op.h, style=_style_for(op.fill, op.stroke))
        elif isinstance(op, LineOp):
            stroke(pdf, op.color, op.width)
            pdf.line(op.x1, op.y1, op.x2, op.y2)
        elif isinstance(op, CircleOp):
            if op.fill:
                fill(pdf, op.fill)
            if op.stroke:
                stroke(pdf, op.stroke, op.line_width)
            pdf.circle(op.cx, op.cy, op.r, style=_style_for(op.fill, op.stroke))
        elif isinstance(op, IconOp):
            draw_icon(pdf, op.icon, op.x, op.y, op.size, op.color)
        elif isinstance(op, FlagOp):
            draw_flag(pdf, op.flag, op.x, op.y, op.w, op.h)


def render_to_bytes(
    doc: LayoutDocument,
    fonts: FontTable | None = None,
    producer: str = PRODUCER,
    author: str | None = None,
) -> bytes:
    """Lay out and draw ``doc``; returns a complete PDF or raises.

    ``author`` overrides the document author in the PDF metadata.

    Raises:
        FontResourceError: the font table cannot be built or installed.
        RenderError: fpdf2 failed while drawing or serializing.
    """
    fonts = fonts or get_fonts()
    doc = _sanitize(doc, fonts)
    pdf = _new_pdf(doc, fonts, producer, author)
    try:
        pages = layout_document(doc, _Measurer(pdf, fonts))
        for page in pages:
            pdf.add_page()
            _draw_decorations(pdf, doc, first_page=page.index == 0)
            _draw_page(pdf, page, fonts)
        data = bytes(pdf.output())
    except FPDFException as exc:
        raise RenderError(f"PDF rendering failed: {exc}") from exc
    logger.debug("Rendered %d page(s), %d bytes", len(pages), len(data))
    return data


def count_pages(data: bytes) -> int:
    """Page-count oracle: number of pages in a serialized PDF."""
    try:
        return len(PdfReader(BytesIO(data)).pages)
    except (PyPdfError, ValueError, OSError) as exc:
        raise RenderError(f"Could not read PDF: {exc}") from exc
