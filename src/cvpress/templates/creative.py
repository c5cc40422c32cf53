"""Creative template: full-height gradient sidebar and card-style headings.

The gradient is a stack of flat bands from the brand color to its dark
variant; the backend has no native gradient or alpha fill.
"""

from __future__ import annotations

from cvpress.layout.document import (
    A4_HEIGHT,
    A4_WIDTH,
    Band,
    Block,
    Column,
    Columns,
    Decoration,
    Disc,
    LayoutDocument,
    PageSpec,
)
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
from cvpress.theme import WHITE, PdfColors, gradient_bands, mix

SIDEBAR_WIDTH = 175
GRADIENT_STEPS = 28


def sidebar_gradient(colors: PdfColors, width: float, steps: int = GRADIENT_STEPS) -> list[Band]:
    band_h = A4_HEIGHT / steps
    return [
        # Overlap by half a point so no seam shows between bands.
        Band(0, i * band_h, width, band_h + 0.5, color, every_page=True)
        for i, color in enumerate(gradient_bands(colors.brand, colors.brand_dark, steps))
    ]


def render(model: CvDocModel, lang: Lang, colors: PdfColors, scale: float) -> LayoutDocument:
    main_kit = Kit.create(lang, colors, scale, accent=colors.brand)
    side_kit = Kit.create(
        lang,
        colors,
        scale,
        ink=WHITE,
        muted=mix(WHITE, colors.brand, 0.2),
        accent=WHITE,
        rule=mix(WHITE, colors.brand, 0.5),
    )
    card = {"fill": colors.bg_soft, "color": colors.brand_dark}

    side: list[Block] = identity_blocks(
        side_kit, model, name_size=18, title_color=WHITE, contact_color=side_kit.muted
    )
    if side:
        side.append(side_kit.rule_block())
    side += [
        *skills_section(side_kit, model, as_bullets=True),
        *languages_section(side_kit, model),
        *hobbies_section(side_kit, model),
    ]
    main = [
        *profile_section(main_kit, model, heading=card),
        *xp_section(main_kit, model, heading=card),
        *education_section(main_kit, model, heading=card),
        *certs_section(main_kit, model, heading=card),
    ]

    margins = main_kit.margins(22, 28, 28, 26)
    gap = main_kit.s(26)
    sidebar_w = main_kit.s(SIDEBAR_WIDTH)
    decorations: list[Decoration] = [
        *sidebar_gradient(colors, margins.left + sidebar_w + gap / 2),
        Disc(A4_WIDTH - 30, 30, main_kit.s(70), mix(colors.brand, WHITE, 0.92)),
    ]
    columns = Columns(
        columns=(Column(tuple(side), width=sidebar_w), Column(tuple(main))),
        gap=gap,
    )
    return LayoutDocument(
        page=PageSpec(margins=margins),
        blocks=(columns,),
        decorations=tuple(decorations),
        title=model.name,
    )
