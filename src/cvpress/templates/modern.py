"""Modern template: soft header band, main column and a right-hand column.

The dark ``tech`` template reuses this layout with another palette.
"""

from __future__ import annotations

from dataclasses import dataclass

from cvpress.layout.document import (
    Block,
    Column,
    Columns,
    LayoutDocument,
    PageSpec,
    Panel,
)
from cvpress.models.cv import CvDocModel
from cvpress.models.letter import Lang
from cvpress.templates.common import (
    Kit,
    certs_section,
    education_section,
    hobbies_section,
    languages_section,
    profile_section,
    skills_section,
    xp_section,
)
from cvpress.theme import PdfColors

RIGHT_COLUMN_WIDTH = 180


@dataclass(frozen=True)
class ModernPalette:
    ink: str
    muted: str
    accent: str
    header: str
    rule: str
    background: str | None = None

    @classmethod
    def light(cls, colors: PdfColors) -> ModernPalette:
        return cls(
            ink=colors.ink,
            muted=colors.muted,
            accent=colors.brand,
            header=colors.bg_soft,
            rule=colors.border,
        )


def header_panel(kit: Kit, model: CvDocModel, fill: str) -> list[Block]:
    left: list[Block] = []
    if model.name:
        left.append(kit.text(model.name, size=20, bold=True, space_after=2))
    if model.title:
        left.append(kit.text(model.title, size=11, bold=True, color=kit.accent))
    right: list[Block] = []
    if model.contact_line:
        right.append(kit.text(model.contact_line, color=kit.muted, align="R"))
    if not left and not right:
        return []
    return [
        Panel(
            children=(
                Columns(columns=(Column(tuple(left)), Column(tuple(right))), gap=kit.s(12)),
            ),
            fill=fill,
            padding=kit.s(10),
            space_after=kit.s(10),
        )
    ]


def build(
    model: CvDocModel,
    lang: Lang,
    colors: PdfColors,
    scale: float,
    palette: ModernPalette,
) -> LayoutDocument:
    kit = Kit.create(
        lang,
        colors,
        scale,
        ink=palette.ink,
        muted=palette.muted,
        accent=palette.accent,
        rule=palette.rule,
    )
    main = [
        *profile_section(kit, model),
        *xp_section(kit, model),
    ]
    side = [
        *skills_section(kit, model, key="key_skills"),
        *education_section(kit, model),
        *certs_section(kit, model),
        *languages_section(kit, model),
        *hobbies_section(kit, model),
    ]
    blocks: list[Block] = header_panel(kit, model, palette.header)
    blocks.append(
        Columns(
            columns=(
                Column(tuple(main)),
                Column(tuple(side), width=kit.s(RIGHT_COLUMN_WIDTH)),
            ),
            gap=kit.s(18),
        )
    )
    return LayoutDocument(
        page=PageSpec(margins=kit.margins(30, 28, 30, 28)),
        blocks=tuple(blocks),
        background=palette.background,
        title=model.name,
    )


def render(model: CvDocModel, lang: Lang, colors: PdfColors, scale: float) -> LayoutDocument:
    return build(model, lang, colors, scale, ModernPalette.light(colors))
