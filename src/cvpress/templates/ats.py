"""Single-column ATS template with content-volume based typography.

Sizes come from an 8-bucket table keyed on the character count of the CV,
then every size is multiplied by the render scale.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from cvpress.layout.document import (
    Block,
    Bullet,
    Column,
    Columns,
    Heading,
    LayoutDocument,
    Margins,
    PageSpec,
    Paragraph,
    Rule,
    Run,
)
from cvpress.models.cv import CvDocModel, XpEntry
from cvpress.models.letter import Lang
from cvpress.templates.common import Kit, compact_profile, content_volume, language_rows
from cvpress.templates.languages import parse_languages
from cvpress.theme import PdfColors


class AtsMode(str, Enum):
    AUTO = "auto"
    COMPACT = "compact"
    EXPANDED = "expanded"


@dataclass(frozen=True)
class Typography:
    font_size: float
    head_size: float
    title_size: float
    line_height: float
    margins: tuple[float, float, float, float]  # left, top, right, bottom


EXPANDED = Typography(11.4, 22.5, 15.2, 1.26, (30, 26, 30, 28))
COMPACT = Typography(9.0, 18.0, 11.8, 1.04, (16, 12, 16, 12))

BUCKETS: tuple[tuple[int, Typography], ...] = (
    (1900, EXPANDED),
    (2200, Typography(11.1, 22.0, 14.8, 1.22, (28, 24, 28, 26))),
    (2600, Typography(10.8, 21.2, 14.4, 1.18, (26, 22, 26, 24))),
    (3000, Typography(10.5, 20.6, 14.0, 1.15, (24, 20, 24, 22))),
    (3400, Typography(10.1, 19.8, 13.4, 1.12, (22, 18, 22, 18))),
    (3800, Typography(9.8, 19.2, 12.8, 1.08, (20, 16, 20, 16))),
    (4300, Typography(9.4, 18.6, 12.4, 1.06, (18, 14, 18, 14))),
)

_LABELS = {
    "fr": {
        "profile": "Profil",
        "skills": "Compétences clés",
        "experience": "Expériences professionnelles",
        "education": "Formation",
        "certs": "Certifications",
        "languages": "Langues",
        "interests": "Centres d’intérêt / Hobbies",
        "cloud": "Architecture & Cloud",
        "security": "Cybersécurité",
        "soft": "Soft skills",
        "systems": "Systèmes & Réseaux",
        "automation": "Automatisation & Outils (IA/API)",
    },
    "en": {
        "profile": "Profile",
        "skills": "Key Skills",
        "experience": "Professional Experience",
        "education": "Education",
        "certs": "Certifications",
        "languages": "Languages",
        "interests": "Interests",
        "cloud": "Architecture & Cloud",
        "security": "Cybersecurity",
        "soft": "Soft skills",
        "systems": "Systems & Networks",
        "automation": "Automation & Tools (AI/API)",
    },
}


def pick_typography(volume: int, mode: AtsMode = AtsMode.AUTO) -> Typography:
    if mode is AtsMode.COMPACT:
        return COMPACT
    if mode is AtsMode.EXPANDED:
        return EXPANDED
    for threshold, typo in BUCKETS:
        if volume < threshold:
            return typo
    return COMPACT


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def scale_typography(typo: Typography, scale: float) -> Typography:
    """Apply the render scale; line height and margins move more gently."""
    return Typography(
        font_size=round(typo.font_size * scale, 2),
        head_size=round(typo.head_size * scale, 2),
        title_size=round(typo.title_size * scale, 2),
        line_height=round(1 + (typo.line_height - 1) * (0.8 + 0.2 * scale), 3),
        margins=tuple(
            max(12, _round_half_up(m * (0.95 + 0.05 * scale))) for m in typo.margins
        ),
    )


class _Ats:
    def __init__(self, lang: Lang, colors: PdfColors, typo: Typography):
        self.labels = _LABELS["en" if lang == "en" else "fr"]
        self.colors = colors
        self.typo = typo
        self.kit = Kit.create(
            lang, colors, 1.0, body_size=typo.font_size, line_height=typo.line_height
        )

    def para(self, text: str, bold=False, color=None, size=None, align="L", before=0.0, after=0.0):
        return Paragraph(
            runs=(Run(text, bold=bold),),
            size=size or self.typo.font_size,
            color=color or self.colors.ink,
            line_height=self.typo.line_height,
            align=align,
            space_before=before,
            space_after=after,
        )

    def heading(self, key: str) -> Heading:
        return Heading(
            text=self.labels[key],
            size=max(10.6, self.typo.font_size + 0.6),
            color=self.colors.brand,
            space_before=6,
            space_after=3,
        )

    def skills_grid(self, model: CvDocModel) -> list[Block]:
        s = model.skills
        left = [("cloud", s.cloud), ("security", s.security), ("soft", s.soft)]
        right = [("systems", s.systems), ("automation", [*s.automation, *s.tools])]

        def stack(groups) -> tuple[Block, ...]:
            blocks: list[Block] = []
            for key, items in groups:
                if not items:
                    continue
                blocks.append(
                    self.para(
                        self.labels[key],
                        bold=True,
                        color=self.colors.muted,
                        before=5 if blocks else 0,
                        after=1,
                    )
                )
                blocks.append(self.para(", ".join(items), align="J"))
            return tuple(blocks)

        left_blocks, right_blocks = stack(left), stack(right)
        if not left_blocks and not right_blocks:
            return []
        return [
            self.heading("skills"),
            Columns(columns=(Column(left_blocks), Column(right_blocks)), gap=14),
        ]

    def xp_blocks(self, x: XpEntry) -> list[Block]:
        header = " — ".join(part for part in (x.company, x.city, x.role) if part)
        if x.dates:
            header = f"{header} | {x.dates}" if header else x.dates
        blocks: list[Block] = []
        if header:
            blocks.append(self.para(header, bold=True, before=0.5, after=1))
        blocks.extend(
            self.para(f"- {bullet}", align="J", after=0.4) for bullet in x.bullets
        )
        return blocks

    def build(self, model: CvDocModel) -> list[Block]:
        c = self.colors
        blocks: list[Block] = []
        if model.name:
            blocks.append(self.para(model.name, bold=True, size=self.typo.head_size, align="C"))
        if model.title:
            blocks.append(
                self.para(
                    model.title,
                    bold=True,
                    color=c.brand,
                    size=self.typo.title_size,
                    align="C",
                    before=1,
                    after=3,
                )
            )
        if model.contact_line:
            blocks.append(self.para(model.contact_line, bold=True, align="C", after=4))
        blocks.append(Rule(color=c.border, thickness=0.7, space_before=2, space_after=6))

        profile = compact_profile(model)
        if profile:
            blocks += [self.heading("profile"), self.para(profile, align="J", after=2)]

        blocks += self.skills_grid(model)

        xp = [b for x in model.xp for b in self.xp_blocks(x)]
        if xp:
            blocks += [self.heading("experience"), *xp]

        if model.education:
            blocks.append(self.heading("education"))
            blocks += [
                Bullet(
                    runs=(Run(line),),
                    size=self.typo.font_size,
                    color=c.ink,
                    line_height=self.typo.line_height,
                    indent=10,
                    space_after=1 if i == len(model.education) - 1 else 0,
                )
                for i, line in enumerate(model.education)
            ]

        if model.certs:
            blocks += [self.heading("certs"), self.para(model.certs, align="J", after=1)]

        languages = parse_languages(model.lang_line)
        if languages:
            blocks += [self.heading("languages"), *language_rows(self.kit, languages)]

        if model.hobbies:
            blocks += [
                self.heading("interests"),
                self.para(" • ".join(model.hobbies), after=1),
            ]
        return blocks


def render(
    model: CvDocModel,
    lang: Lang,
    colors: PdfColors,
    scale: float = 1.0,
    mode: AtsMode = AtsMode.AUTO,
) -> LayoutDocument:
    typo = scale_typography(pick_typography(content_volume(model), mode), scale)
    left, top, right, bottom = typo.margins
    return LayoutDocument(
        page=PageSpec(margins=Margins(left, top, right, bottom)),
        blocks=tuple(_Ats(lang, colors, typo).build(model)),
        title=model.name,
    )
