"""Coercion of loosely shaped input into CvDocModel / LmModel.

Input usually comes from JSON produced by a form or a language model, so the
same field can arrive as a string, a list or a nested mapping. Everything that
can be coerced is; anything that cannot raises ModelValidationError listing the
offending field paths.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from cvpress.errors import ModelValidationError
from cvpress.models.cv import SKILL_CATEGORIES, CvDocModel
from cvpress.models.letter import Lang, LmModel

logger = logging.getLogger(__name__)

_NBSP_RE = re.compile(r"[\u00a0\u2007\u202f\u2060\ufeff]")
_INLINE_WS_RE = re.compile(r"[ \t\f\v]+")
_MD_RULES = (
    (re.compile(r"\*\*(.*?)\*\*"), r"\1"),
    (re.compile(r"\*(.*?)\*"), r"\1"),
    (re.compile(r"`(.*?)`"), r"\1"),
    (re.compile(r"\[(.*?)\]\(.*?\)"), r"\1"),
)
_BULLET_MARK_RE = re.compile(r"^[•\-–]\s*")
_NEWLINES_RE = re.compile(r"\n+")
_COMMAS_RE = re.compile(r"[,\n]+")

# Category keys are matched by prefix/substring, first hit wins.
_SKILL_KEYWORDS = (
    ("cloud", ("cloud", "archi")),
    ("security", ("sec", "cyber")),
    ("systems", ("sys", "network", "réseau", "reseau", "infra")),
    ("automation", ("auto",)),
    ("soft", ("soft",)),
    ("tools", ("tool", "outil")),
)


class _FieldError(Exception):
    def __init__(self, path: str):
        super().__init__(path)
        self.path = path


# ---------------------------------------------------------------------------
# Text cleaning
# ---------------------------------------------------------------------------


def strip_markdown(text: str) -> str:
    for pattern, repl in _MD_RULES:
        text = pattern.sub(repl, text)
    return text


def clean_text(value: str) -> str:
    """Trim, turn non-breaking spaces into spaces, collapse runs, drop markdown."""
    text = value.replace("\r\n", "\n").replace("\r", "\n")
    text = strip_markdown(_NBSP_RE.sub(" ", text))
    lines = [_INLINE_WS_RE.sub(" ", line).strip() for line in text.split("\n")]
    return "\n".join(lines).strip()


def clean_bullet(value: str) -> str:
    return _BULLET_MARK_RE.sub("", clean_text(value)).strip()


def normalize_lang(value: Any) -> Lang:
    if isinstance(value, str) and value.strip().casefold().startswith("en"):
        return "en"
    return "fr"


# ---------------------------------------------------------------------------
# Field coercion helpers
# ---------------------------------------------------------------------------


def _pick(raw: Mapping, *keys: str) -> Any:
    for key in keys:
        if key in raw and raw[key] is not None:
            return raw[key]
    return None


def _text(value: Any, path: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return clean_text(value)
    if isinstance(value, (int, float)):
        return str(value)
    raise _FieldError(path)


def _string_list(
    value: Any,
    path: str,
    split: re.Pattern = _NEWLINES_RE,
    clean=clean_text,
) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        parts: list[Any] = split.split(value)
    elif isinstance(value, (list, tuple)):
        parts = list(value)
    else:
        raise _FieldError(path)

    out: list[str] = []
    for i, item in enumerate(parts):
        if item is None:
            continue
        if isinstance(item, (int, float)) and not isinstance(item, bool):
            item = str(item)
        if not isinstance(item, str):
            raise _FieldError(f"{path}.{i}")
        text = clean(item)
        if text:
            out.append(text)
    return out


def _skill_category(key: str) -> str:
    k = key.strip().casefold()
    if k in SKILL_CATEGORIES:
        return k
    for category, keywords in _SKILL_KEYWORDS:
        if any(word in k for word in keywords):
            return category
    logger.debug("Unknown skill category %r folded into tools", key)
    return "tools"


def _skill_items(value: Any, path: str) -> list[str]:
    if isinstance(value, Mapping):
        items: list[str] = []
        for key, sub in value.items():
            items.extend(_skill_items(sub, f"{path}.{key}"))
        return items
    if isinstance(value, (list, tuple)):
        items = []
        for i, item in enumerate(value):
            if isinstance(item, Mapping):
                name = _pick(item, "name", "label", "skill")
                items.extend(_string_list([name], f"{path}.{i}"))
            else:
                items.extend(_string_list([item], f"{path}.{i}"))
        return items
    return _string_list(value, path, split=_COMMAS_RE)


def _skills(value: Any, path: str = "skills") -> dict[str, list[str]]:
    out: dict[str, list[str]] = {key: [] for key in SKILL_CATEGORIES}
    if value is None:
        return out

    if isinstance(value, Mapping):
        for key, sub in value.items():
            out[_skill_category(str(key))].extend(_skill_items(sub, f"{path}.{key}"))
        return out

    if isinstance(value, str):
        out["tools"].extend(_string_list(value, path, split=_COMMAS_RE))
        return out

    if not isinstance(value, (list, tuple)):
        raise _FieldError(path)

    for i, item in enumerate(value):
        if item is None:
            continue
        if isinstance(item, Mapping):
            label = _pick(item, "category", "name", "label")
            items = _pick(item, "items", "skills", "values")
            category = _skill_category(str(label)) if label is not None else "tools"
            out[category].extend(_skill_items(items, f"{path}.{i}.items"))
        else:
            out["tools"].extend(_string_list([item], f"{path}.{i}"))
    return out


def _education_entry(item: Any, path: str) -> str:
    if isinstance(item, Mapping):
        dates = _text(_pick(item, "dates", "period", "year"), f"{path}.dates")
        degree = _text(_pick(item, "degree", "title", "diploma"), f"{path}.degree")
        school = _text(_pick(item, "school", "institution"), f"{path}.school")
        tail = " – ".join(part for part in (degree, school) if part)
        return " · ".join(part for part in (dates, tail) if part)
    return _text(item, path)


def _education(value: Any, path: str = "education") -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return _string_list(value, path)
    if isinstance(value, Mapping):
        value = [value]
    if not isinstance(value, (list, tuple)):
        raise _FieldError(path)
    out = []
    for i, item in enumerate(value):
        if item is None:
            continue
        text = _education_entry(item, f"{path}.{i}")
        if text:
            out.append(text)
    return out


def _certs(value: Any, path: str = "certs") -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(_string_list(value, path))
    return _text(value, path)


def _xp(value: Any, errors: list[str], path: str = "xp") -> list[dict]:
    if value is None:
        return []
    if isinstance(value, Mapping):
        value = [value]
    if not isinstance(value, (list, tuple)):
        errors.append(path)
        return []

    entries = []
    for i, item in enumerate(value):
        if item is None:
            continue
        item_path = f"{path}.{i}"
        if not isinstance(item, Mapping):
            errors.append(item_path)
            continue
        entry: dict[str, Any] = {}
        fields = {
            "company": ("company", "employer"),
            "city": ("city", "location"),
            "role": ("role", "title", "position"),
            "dates": ("dates", "period"),
        }
        for name, keys in fields.items():
            try:
                entry[name] = _text(_pick(item, *keys), f"{item_path}.{name}")
            except _FieldError as exc:
                errors.append(exc.path)
                entry[name] = ""
        try:
            entry["bullets"] = _string_list(
                _pick(item, "bullets", "highlights"),
                f"{item_path}.bullets",
                clean=clean_bullet,
            )
        except _FieldError as exc:
            errors.append(exc.path)
            entry["bullets"] = []
        if any(entry.values()):
            entries.append(entry)
    return entries


def _validate(model_cls, data: dict, model_name: str):
    try:
        return model_cls.model_validate(data)
    except ValidationError as exc:
        locations = [".".join(str(p) for p in err["loc"]) for err in exc.errors()]
        raise ModelValidationError(
            "Input could not be coerced", model_name, locations
        ) from exc


def _require_mapping(raw: Any, model_name: str) -> Mapping:
    if not isinstance(raw, Mapping):
        raise ModelValidationError(
            f"Expected a mapping, got {type(raw).__name__}", model_name, ["<root>"]
        )
    return raw


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def normalize_cv(raw: Any) -> CvDocModel:
    """Build a CvDocModel from loosely shaped input.

    Unknown keys are ignored. Raises ModelValidationError when a field holds a
    value of the wrong shape, e.g. a mapping where a string is expected.
    """
    if isinstance(raw, CvDocModel):
        return raw
    raw = _require_mapping(raw, "CvDocModel")
    errors: list[str] = []
    data: dict[str, Any] = {}

    scalar_fields = {
        "name": ("name", "fullName"),
        "title": ("title", "headline"),
        "contact_line": ("contact_line", "contactLine", "contact"),
        "profile": ("profile", "summary"),
        "lang_line": ("lang_line", "langLine", "languages"),
    }
    for name, keys in scalar_fields.items():
        try:
            data[name] = _text(_pick(raw, *keys), name)
        except _FieldError as exc:
            errors.append(exc.path)

    coercers = {
        "skills": lambda: _skills(_pick(raw, "skills")),
        "education": lambda: _education(_pick(raw, "education")),
        "certs": lambda: _certs(_pick(raw, "certs", "certifications")),
        "hobbies": lambda: _string_list(
            _pick(raw, "hobbies", "interests"), "hobbies", split=_COMMAS_RE
        ),
    }
    for name, coerce in coercers.items():
        try:
            data[name] = coerce()
        except _FieldError as exc:
            errors.append(exc.path)

    data["xp"] = _xp(_pick(raw, "xp", "experience", "experiences"), errors)

    if errors:
        raise ModelValidationError("Input could not be coerced", "CvDocModel", errors)
    return _validate(CvDocModel, data, "CvDocModel")


def normalize_letter(raw: Any) -> LmModel:
    """Build an LmModel from loosely shaped input (camelCase keys accepted)."""
    if isinstance(raw, LmModel):
        return raw
    raw = _require_mapping(raw, "LmModel")
    errors: list[str] = []
    data: dict[str, Any] = {"lang": normalize_lang(_pick(raw, "lang", "language"))}

    scalar_fields = {
        "name": ("name",),
        "service": ("service",),
        "company_name": ("company_name", "companyName"),
        "city": ("city",),
        "date_str": ("date_str", "dateStr", "date"),
        "a_prefix": ("a_prefix", "aPrefix"),
        "subject": ("subject",),
        "salutation": ("salutation",),
        "body": ("body",),
        "closing": ("closing",),
        "signature": ("signature",),
    }
    for name, keys in scalar_fields.items():
        try:
            data[name] = _text(_pick(raw, *keys), name)
        except _FieldError as exc:
            errors.append(exc.path)

    try:
        addr = _pick(raw, "company_addr", "companyAddr")
        if isinstance(addr, (list, tuple)):
            data["company_addr"] = "\n".join(_string_list(addr, "company_addr"))
        else:
            data["company_addr"] = _text(addr, "company_addr")
    except _FieldError as exc:
        errors.append(exc.path)

    try:
        data["contact_lines"] = _string_list(
            _pick(raw, "contact_lines", "contactLines"), "contact_lines"
        )
    except _FieldError as exc:
        errors.append(exc.path)

    if errors:
        raise ModelValidationError("Input could not be coerced", "LmModel", errors)
    return _validate(LmModel, data, "LmModel")
