"""Building blocks shared by the CV templates.

Templates differ in typography, color, iconography and ordering only. Every
text fragment of the model goes through the section builders below, so the
same content reaches every template.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace

from cvpress.layout.document import (
    Block,
    Bullet,
    Heading,
    Icon,
    IconText,
    LanguageRow,
    Margins,
    Marker,
    Paragraph,
    Rule,
    Run,
)
from cvpress.models.cv import CvDocModel, XpEntry
from cvpress.models.letter import Lang
from cvpress.templates.languages import LanguageEntry, parse_languages
from cvpress.theme import PdfColors

LABELS: dict[str, dict[str, str]] = {
    "fr": {
        "profile": "Profil",
        "experience": "Expérience professionnelle",
        "skills": "Compétences",
        "key_skills": "Compétences clés",
        "education": "Formation",
        "certs": "Certifications",
        "languages": "Langues",
        "interests": "Centres d’intérêt",
    },
    "en": {
        "profile": "Profile",
        "experience": "Experience",
        "skills": "Skills",
        "key_skills": "Key Skills",
        "education": "Education",
        "certs": "Certifications",
        "languages": "Languages",
        "interests": "Interests",
    },
}

SECTION_ICONS = {
    "profile": Icon.USER,
    "experience": Icon.CALENDAR,
    "education": Icon.CAP,
    "certs": Icon.MEDAL,
    "languages": Icon.GLOBE,
}

_TRAILING_PARTIAL_RE = re.compile(r"\s+\S*$")
ELLIPSIS = "…"


# ---------------------------------------------------------------------------
# Content volume and profile compaction
# ---------------------------------------------------------------------------


def _xp_volume(x: XpEntry) -> str:
    return x.role + x.company + x.city + x.dates + " ".join(x.bullets)


def content_volume(model: CvDocModel) -> int:
    """Character count over every textual field, used to pick a size bucket."""
    return (
        len(model.profile)
        + len(model.certs)
        + len(model.lang_line)
        + len(" ".join(model.hobbies))
        + len(" ".join(model.education))
        + len(" ".join(_xp_volume(x) for x in model.xp))
        + len(" ".join(model.skills.flatten()))
    )


def _cut(text: str, limit: int) -> str:
    return _TRAILING_PARTIAL_RE.sub(ELLIPSIS, text[:limit], count=1)


def compact_profile(model: CvDocModel) -> str:
    """Shorten a long profile when the whole CV is dense.

    Depends on the model only, so every template prints the same profile.
    """
    profile = model.profile
    volume = content_volume(model)
    if volume > 3600 and len(profile) > 420:
        return _cut(profile, 420)
    if volume > 3000 and len(profile) > 480:
        return _cut(profile, 480)
    return profile


# ---------------------------------------------------------------------------
# Style kit
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Kit:
    """Colors, language and scale of one render, plus block factories."""

    lang: Lang
    colors: PdfColors
    scale: float
    ink: str
    muted: str
    accent: str
    rule: str
    body_size: float = 9.0
    title_size: float = 10.5
    line_height: float = 1.22
    icons: bool = True
    uppercase_headings: bool = False

    @classmethod
    def create(
        cls,
        lang: Lang,
        colors: PdfColors,
        scale: float,
        ink: str | None = None,
        muted: str | None = None,
        accent: str | None = None,
        rule: str | None = None,
        **kwargs,
    ) -> Kit:
        return cls(
            lang=lang,
            colors=colors,
            scale=scale,
            ink=ink or colors.ink,
            muted=muted or colors.muted,
            accent=accent or colors.brand,
            rule=rule or colors.border,
            **kwargs,
        )

    def s(self, value: float) -> float:
        return value * self.scale

    def label(self, key: str) -> str:
        text = LABELS["en" if self.lang == "en" else "fr"][key]
        return text.upper() if self.uppercase_headings else text

    def margins(self, left: float, top: float, right: float, bottom: float) -> Margins:
        return Margins(self.s(left), self.s(top), self.s(right), self.s(bottom))

    def heading(
        self,
        key: str,
        color: str | None = None,
        rule: bool = False,
        fill: str | None = None,
        space_before: float = 4,
    ) -> Heading:
        return Heading(
            text=self.label(key),
            size=self.s(self.title_size),
            color=color or self.ink,
            icon=SECTION_ICONS.get(key) if self.icons else None,
            icon_color=self.accent,
            rule_color=self.rule if rule else None,
            fill=fill,
            space_before=self.s(space_before),
            space_after=self.s(3),
        )

    def text(
        self,
        text: str,
        size: float | None = None,
        color: str | None = None,
        bold: bool = False,
        align: str = "L",
        space_before: float = 0,
        space_after: float = 2,
    ) -> Paragraph:
        return Paragraph(
            runs=(Run(text, bold=bold),),
            size=self.s(size or self.body_size),
            color=color or self.ink,
            line_height=self.line_height,
            align=align,
            space_before=self.s(space_before),
            space_after=self.s(space_after),
        )

    def rule_block(self, color: str | None = None, thickness: float = 0.6) -> Rule:
        return Rule(
            color=color or self.rule,
            thickness=thickness,
            space_before=self.s(4),
            space_after=self.s(4),
        )


# ---------------------------------------------------------------------------
# Sections (each returns [] when its field is empty)
# ---------------------------------------------------------------------------


def profile_section(kit: Kit, model: CvDocModel, heading: dict | None = None) -> list[Block]:
    profile = compact_profile(model)
    if not profile:
        return []
    return [
        kit.heading("profile", **(heading or {})),
        kit.text(profile, size=9.5, align="J", space_after=6),
    ]


def xp_entry_blocks(kit: Kit, x: XpEntry, marker: Marker = "dot") -> list[Block]:
    blocks: list[Block] = []
    title = " — ".join(part for part in (x.role, x.company) if part)
    if title:
        blocks.append(kit.text(title, size=9.8, bold=True, space_after=1.5))
    if kit.icons and (x.dates or x.city):
        if x.dates:
            blocks.append(_icon_line(kit, Icon.CALENDAR, x.dates))
        if x.city:
            blocks.append(_icon_line(kit, Icon.PIN, x.city))
    else:
        meta = " • ".join(part for part in (x.city, x.dates) if part)
        if meta:
            blocks.append(kit.text(meta, color=kit.muted, space_after=2))
    for bullet in x.bullets:
        blocks.append(
            Bullet(
                runs=(Run(bullet),),
                size=kit.s(kit.body_size),
                color=kit.ink,
                line_height=kit.line_height,
                marker=marker,
                marker_color=kit.accent,
                indent=kit.s(10),
                space_after=kit.s(1),
            )
        )
    if blocks:
        last = blocks[-1]
        if isinstance(last, (Paragraph, Bullet, IconText)):
            blocks[-1] = _with_space_after(last, kit.s(5))
    return blocks


def _with_space_after(block, value: float):
    return replace(block, space_after=value)


def _icon_line(kit: Kit, icon: Icon, text: str) -> IconText:
    return IconText(
        icon=icon,
        icon_color=kit.accent,
        runs=(Run(text),),
        size=kit.s(kit.body_size - 0.5),
        color=kit.muted,
        line_height=kit.line_height,
        space_after=kit.s(1),
    )


def xp_section(
    kit: Kit, model: CvDocModel, marker: Marker = "dot", heading: dict | None = None
) -> list[Block]:
    entries = [b for x in model.xp for b in xp_entry_blocks(kit, x, marker)]
    if not entries:
        return []
    return [kit.heading("experience", **(heading or {})), *entries]


def education_section(kit: Kit, model: CvDocModel, heading: dict | None = None) -> list[Block]:
    if not model.education:
        return []
    return [
        kit.heading("education", **(heading or {})),
        *(kit.text(line, space_after=4) for line in model.education),
    ]


def certs_section(kit: Kit, model: CvDocModel, heading: dict | None = None) -> list[Block]:
    if not model.certs:
        return []
    return [kit.heading("certs", **(heading or {})), kit.text(model.certs, space_after=4)]


def skills_section(
    kit: Kit,
    model: CvDocModel,
    key: str = "skills",
    as_bullets: bool = False,
    heading: dict | None = None,
) -> list[Block]:
    skills = model.skills.flatten()
    if not skills:
        return []
    if as_bullets:
        body: list[Block] = [
            Bullet(
                runs=(Run(skill),),
                size=kit.s(kit.body_size),
                color=kit.ink,
                line_height=kit.line_height,
                marker="square",
                marker_color=kit.accent,
                indent=kit.s(9),
                space_after=kit.s(0.5),
            )
            for skill in skills
        ]
    else:
        body = [kit.text(" • ".join(skills), color=kit.muted, space_after=6)]
    return [kit.heading(key, **(heading or {})), *body]


def language_rows(kit: Kit, entries: list[LanguageEntry]) -> list[Block]:
    return [
        LanguageRow(
            name=entry.name,
            level_label=entry.level_label,
            flag=entry.flag,
            level=entry.level,
            size=kit.s(kit.body_size),
            color=kit.ink,
            muted=kit.muted,
            dot_color=kit.accent,
            dot_empty=kit.colors.border,
            space_after=kit.s(2),
        )
        for entry in entries
    ]


def languages_section(kit: Kit, model: CvDocModel, heading: dict | None = None) -> list[Block]:
    entries = parse_languages(model.lang_line)
    if not entries:
        return []
    return [kit.heading("languages", **(heading or {})), *language_rows(kit, entries)]


def hobbies_section(kit: Kit, model: CvDocModel, heading: dict | None = None) -> list[Block]:
    if not model.hobbies:
        return []
    return [
        kit.heading("interests", **(heading or {})),
        kit.text(" • ".join(model.hobbies), color=kit.muted, space_after=4),
    ]


def identity_blocks(
    kit: Kit,
    model: CvDocModel,
    name_size: float = 18,
    name_color: str | None = None,
    title_color: str | None = None,
    contact_color: str | None = None,
    align: str = "L",
) -> list[Block]:
    blocks: list[Block] = []
    if model.name:
        blocks.append(
            kit.text(model.name, size=name_size, color=name_color, bold=True, align=align, space_after=2)
        )
    if model.title:
        blocks.append(
            kit.text(
                model.title,
                size=11,
                color=title_color or kit.accent,
                bold=True,
                align=align,
                space_after=4,
            )
        )
    if model.contact_line:
        blocks.append(
            kit.text(
                model.contact_line,
                color=contact_color or kit.muted,
                align=align,
                space_after=6,
            )
        )
    return blocks
