"""Parsing of the free-form language line into rows with flag and level."""

from __future__ import annotations

import re
from dataclasses import dataclass

from cvpress.layout.document import Flag

_SEPARATORS = ",·•|;"
_PAREN_RE = re.compile(r"^(?P<name>.*?)\s*\((?P<level>.*)\)\s*$")
_DELIM_RE = re.compile(r"^(?P<name>[^:\-–—]+?)\s*[:\-–—]\s*(?P<level>.+)$")
_CEFR_RE = re.compile(r"\b([abc][12])\b")

_CEFR_LEVELS = {"c2": 5, "c1": 4, "b2": 3, "b1": 3, "a2": 2, "a1": 1}

_LEVEL_WORDS = (
    (5, ("natif", "native", "maternelle", "bilingue", "bilingual", "mother tongue")),
    (4, ("courant", "fluent", "avancé", "advanced")),
    (3, ("professionnel", "professional", "intermédiaire", "intermediate")),
    (2, ("notions", "basic", "élémentaire", "elementary", "scolaire", "débutant", "beginner")),
)
DEFAULT_LEVEL = 3

_FLAG_KEYS = (
    (Flag.FR, ("fran", "french")),
    (Flag.EN, ("angl", "engl")),
    (Flag.ES, ("espa", "span")),
    (Flag.DE, ("allem", "german", "deutsch")),
    (Flag.IT, ("ital",)),
    (Flag.PT, ("portu",)),
    (Flag.AR, ("arab",)),
    (Flag.ZH, ("chin", "mandarin")),
)


@dataclass(frozen=True)
class LanguageEntry:
    name: str
    level_label: str
    level: int
    flag: Flag


def split_top_level(text: str, separators: str = _SEPARATORS) -> list[str]:
    """Split on separators that are not inside parentheses."""
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for ch in text:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth = max(0, depth - 1)
        if ch in separators and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(ch)
    parts.append("".join(current))
    return [p.strip() for p in parts if p.strip()]


def level_from_label(label: str) -> int:
    text = label.casefold()
    match = _CEFR_RE.search(text)
    if match:
        return _CEFR_LEVELS[match.group(1)]
    for level, words in _LEVEL_WORDS:
        if any(word in text for word in words):
            return level
    return DEFAULT_LEVEL


def flag_for(name: str) -> Flag:
    text = name.casefold()
    for flag, keys in _FLAG_KEYS:
        if any(key in text for key in keys):
            return flag
    return Flag.GENERIC


def parse_language(part: str) -> LanguageEntry:
    match = _PAREN_RE.match(part) or _DELIM_RE.match(part)
    if match and match.group("name").strip():
        name = match.group("name").strip()
        label = match.group("level").strip()
    else:
        name, label = part.strip(), ""
    return LanguageEntry(name, label, level_from_label(label), flag_for(name))


def parse_languages(lang_line: str) -> list[LanguageEntry]:
    """``"Français (Natif), Anglais (Courant)"`` -> two entries, levels 5 and 4."""
    return [parse_language(part) for part in split_top_level(lang_line or "")]
