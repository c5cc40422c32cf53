"""Classic template: narrow sidebar with identity and skills, main column with the rest."""

from __future__ import annotations

from cvpress.layout.document import Block, Column, Columns, LayoutDocument, PageSpec
from cvpress.models.cv import CvDocModel
from cvpress.models.letter import Lang
from cvpress.templates.common import (
    Kit,
    certs_section,
    education_section,
    hobbies_section,
    identity_blocks,
    languages_section,
    profile_section,
    skills_section,
    xp_section,
)
from cvpress.theme import PdfColors

SIDEBAR_WIDTH = 170


def sidebar_blocks(kit: Kit, model: CvDocModel, heading: dict | None = None) -> list[Block]:
    blocks = identity_blocks(kit, model, name_size=18)
    if blocks:
        blocks.append(kit.rule_block())
    return [
        *blocks,
        *skills_section(kit, model, heading=heading),
        *languages_section(kit, model, heading=heading),
        *hobbies_section(kit, model, heading=heading),
    ]


def main_blocks(kit: Kit, model: CvDocModel, heading: dict | None = None) -> list[Block]:
    blocks: list[Block] = []
    for section in (
        profile_section(kit, model, heading=heading),
        xp_section(kit, model, heading=heading),
        education_section(kit, model, heading=heading),
    ):
        if section and blocks:
            blocks.append(kit.rule_block())
        blocks += section
    blocks += certs_section(kit, model, heading=heading)
    return blocks


def render(model: CvDocModel, lang: Lang, colors: PdfColors, scale: float) -> LayoutDocument:
    kit = Kit.create(lang, colors, scale)
    columns = Columns(
        columns=(
            Column(tuple(sidebar_blocks(kit, model)), width=kit.s(SIDEBAR_WIDTH)),
            Column(tuple(main_blocks(kit, model))),
        ),
        gap=kit.s(18),
    )
    return LayoutDocument(
        page=PageSpec(margins=kit.margins(34, 30, 34, 26)),
        blocks=(columns,),
        title=model.name,
    )
