"""Minimalist template: one column, no icons, hairline under each heading."""

from __future__ import annotations

from cvpress.layout.document import Block, LayoutDocument, PageSpec
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


def render(model: CvDocModel, lang: Lang, colors: PdfColors, scale: float) -> LayoutDocument:
    kit = Kit.create(lang, colors, scale, accent=colors.muted, rule=colors.hair, icons=False)
    heading = {"rule": True}

    blocks: list[Block] = identity_blocks(
        kit, model, name_size=20, title_color=colors.muted
    )
    if blocks:
        blocks.append(kit.rule_block(colors.border))
    blocks += [
        *profile_section(kit, model, heading=heading),
        *xp_section(kit, model, marker="dash", heading=heading),
        *education_section(kit, model, heading=heading),
        *skills_section(kit, model, heading=heading),
        *languages_section(kit, model, heading=heading),
        *hobbies_section(kit, model, heading=heading),
        *certs_section(kit, model, heading=heading),
    ]
    return LayoutDocument(
        page=PageSpec(margins=kit.margins(40, 32, 40, 32)),
        blocks=tuple(blocks),
        title=model.name,
    )
