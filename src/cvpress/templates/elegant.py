"""Elegant template: the classic sidebar on a soft panel, uppercase muted headings."""

from __future__ import annotations

from cvpress.layout.document import (
    Block,
    Column,
    Columns,
    LayoutDocument,
    PageSpec,
    Rule,
)
from cvpress.models.cv import CvDocModel
from cvpress.models.letter import Lang
from cvpress.templates.classic import SIDEBAR_WIDTH, main_blocks, sidebar_blocks
from cvpress.templates.common import Kit
from cvpress.theme import PdfColors


def _double_rule(kit: Kit, color: str) -> list[Block]:
    return [
        Rule(color=color, thickness=1.4, space_after=1.5),
        Rule(color=color, thickness=0.5, space_after=kit.s(10)),
    ]


def render(model: CvDocModel, lang: Lang, colors: PdfColors, scale: float) -> LayoutDocument:
    kit = Kit.create(
        lang,
        colors,
        scale,
        accent=colors.brand_dark,
        rule=colors.hair,
        uppercase_headings=True,
        title_size=9.8,
    )
    heading = {"color": colors.muted}
    columns = Columns(
        columns=(
            Column(
                tuple(sidebar_blocks(kit, model, heading=heading)),
                width=kit.s(SIDEBAR_WIDTH),
                fill=colors.bg_soft,
                padding=kit.s(10),
            ),
            Column(tuple(main_blocks(kit, model, heading=heading))),
        ),
        gap=kit.s(20),
    )
    return LayoutDocument(
        page=PageSpec(margins=kit.margins(34, 30, 34, 26)),
        blocks=(*_double_rule(kit, colors.brand), columns),
        title=model.name,
    )
