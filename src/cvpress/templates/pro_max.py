"""Pro Max template: strong brand header, carded main sections, slightly larger type."""

from __future__ import annotations

from cvpress.layout.document import (
    A4_WIDTH,
    Band,
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
from cvpress.theme import WHITE, PdfColors, gradient_bands, mix

SCALE_BOOST = 1.02
RIGHT_COLUMN_WIDTH = 175
STRIP_STEPS = 24
STRIP_HEIGHT = 6


def boosted_scale(scale: float) -> float:
    return max(0.75, min(1.6, scale * SCALE_BOOST))


def _top_strip(colors: PdfColors) -> list[Band]:
    width = A4_WIDTH / STRIP_STEPS
    return [
        Band(i * width, 0, width + 0.5, STRIP_HEIGHT, color)
        for i, color in enumerate(gradient_bands(colors.brand, colors.brand_dark, STRIP_STEPS))
    ]


def _header(kit: Kit, model: CvDocModel, colors: PdfColors) -> list[Block]:
    light = mix(WHITE, colors.brand, 0.15)
    children: list[Block] = []
    if model.name:
        children.append(kit.text(model.name, size=22, bold=True, color=WHITE, space_after=2))
    if model.title:
        children.append(kit.text(model.title, size=11.5, bold=True, color=light, space_after=4))
    if model.contact_line:
        children.append(kit.text(model.contact_line, color=light, space_after=0))
    if not children:
        return []
    return [
        Panel(
            children=tuple(children),
            fill=colors.brand_dark,
            padding=kit.s(12),
            space_after=kit.s(12),
        )
    ]


def _card(kit: Kit, blocks: list[Block], colors: PdfColors) -> list[Block]:
    if not blocks:
        return []
    return [
        Panel(
            children=tuple(blocks),
            fill=colors.bg_soft,
            accent=colors.brand,
            padding=kit.s(8),
            space_after=kit.s(8),
        )
    ]


def render(model: CvDocModel, lang: Lang, colors: PdfColors, scale: float) -> LayoutDocument:
    kit = Kit.create(lang, colors, boosted_scale(scale), accent=colors.brand)
    heading = {"color": colors.brand_dark, "space_before": 0}

    main = [
        *_card(kit, profile_section(kit, model, heading=heading), colors),
        *_card(kit, xp_section(kit, model, heading=heading), colors),
    ]
    side = [
        *skills_section(kit, model, key="key_skills", as_bullets=True),
        *languages_section(kit, model),
        *education_section(kit, model),
        *certs_section(kit, model),
        *hobbies_section(kit, model),
    ]
    blocks = [
        *_header(kit, model, colors),
        Columns(
            columns=(
                Column(tuple(main)),
                Column(tuple(side), width=kit.s(RIGHT_COLUMN_WIDTH)),
            ),
            gap=kit.s(16),
        ),
    ]
    return LayoutDocument(
        page=PageSpec(margins=kit.margins(28, 24, 28, 24)),
        blocks=tuple(blocks),
        decorations=tuple(_top_strip(colors)),
        title=model.name,
    )
