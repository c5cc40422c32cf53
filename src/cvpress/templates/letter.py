"""Cover letter template, for a structured LmModel or plain text."""

from __future__ import annotations

import re

from cvpress.layout.document import (
    Block,
    Column,
    Columns,
    LayoutDocument,
    Margins,
    PageSpec,
    Paragraph,
    Rule,
    Run,
    Spacer,
)
from cvpress.models.letter import LmModel
from cvpress.theme import PdfColors

MARGINS = Margins(40, 36, 40, 36)
RIGHT_COLUMN_WIDTH = 210


def split_paragraphs(text: str) -> list[str]:
    text = re.sub(r"\n{3,}", "\n\n", text or "")
    return [p.strip() for p in re.split(r"\n\s*\n", text) if p.strip()]


def date_line(lm: LmModel) -> str:
    """``À Paris, le 3 mars 2025`` / ``At London, March 3, 2025``."""
    en = lm.lang == "en"
    prefix = (lm.a_prefix or ("At" if en else "À")).strip()
    if not lm.city:
        return lm.date_str
    if not lm.date_str:
        return f"{prefix} {lm.city}"
    if en:
        return f"{prefix} {lm.city}, {lm.date_str}"
    return f"{prefix} {lm.city}, le {lm.date_str}"


class _Style:
    def __init__(self, colors: PdfColors, size: float, line_height: float):
        self.colors = colors
        self.size = size
        self.line_height = line_height

    def para(
        self,
        text: str,
        bold: bool = False,
        color: str | None = None,
        size: float | None = None,
        align: str = "L",
        before: float = 0,
        after: float = 0,
    ) -> Paragraph:
        return Paragraph(
            runs=(Run(text, bold=bold),),
            size=size or self.size,
            color=color or self.colors.ink,
            line_height=self.line_height,
            align=align,
            space_before=before,
            space_after=after,
        )

    def brand_bar(self) -> Rule:
        return Rule(color=self.colors.brand, thickness=3, space_after=10)


def _header(st: _Style, lm: LmModel, scale: float) -> list[Block]:
    c = st.colors
    left: list[Block] = []
    if lm.name:
        left.append(st.para(lm.name, bold=True, color=c.muted, size=12 * scale))
    left += [st.para(line) for line in lm.contact_lines]

    right: list[Block] = []
    if lm.service:
        right.append(st.para(lm.service, color=c.muted, align="R"))
    if lm.company_name:
        right.append(st.para(lm.company_name, bold=True, color=c.muted, align="R"))
    right += [st.para(line, align="R") for line in lm.company_addr_lines]
    if right:
        right.insert(0, Spacer(28))

    if not left and not right:
        return []
    return [
        Columns(
            columns=(
                Column(tuple(left)),
                Column(tuple(right), width=RIGHT_COLUMN_WIDTH),
            ),
            gap=15,
        )
    ]


def build_styled_letter(lm: LmModel, colors: PdfColors, scale: float = 1.0) -> LayoutDocument:
    st = _Style(colors, 10.5 * scale, 1.24)
    blocks: list[Block] = [st.brand_bar(), *_header(st, lm, scale)]
    blocks.append(Rule(color=colors.hair, thickness=1, space_before=6, space_after=10))

    line = date_line(lm)
    if line:
        blocks.append(st.para(line, after=8))
    if lm.subject:
        blocks.append(st.para(lm.subject, bold=True, color=colors.brand, after=10))
    if lm.salutation:
        blocks.append(st.para(lm.salutation, after=8))
    blocks += [st.para(p, after=6) for p in split_paragraphs(lm.body)]
    if lm.closing:
        blocks.append(st.para(lm.closing, align="R", before=12, after=2))
    if lm.signature:
        blocks.append(st.para(lm.signature, bold=True, align="R"))

    return LayoutDocument(
        page=PageSpec(margins=MARGINS), blocks=tuple(blocks), title=lm.subject, author=lm.name
    )


def build_plain_letter(text: str, colors: PdfColors, scale: float = 1.0) -> LayoutDocument:
    st = _Style(colors, 10.5 * scale, 1.26)
    blocks: list[Block] = [
        st.brand_bar(),
        Rule(color=colors.hair, thickness=1, space_after=12),
        *(st.para(p, after=7) for p in split_paragraphs(text)),
    ]
    return LayoutDocument(page=PageSpec(margins=MARGINS), blocks=tuple(blocks))


def build_letter_document(
    letter: LmModel | str, colors: PdfColors, scale: float = 1.0
) -> LayoutDocument:
    """Styled layout for an LmModel, plain paragraphs for raw text."""
    if isinstance(letter, LmModel):
        return build_styled_letter(letter, colors, scale)
    return build_plain_letter(str(letter or ""), colors, scale)
