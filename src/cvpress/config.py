"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from cvpress.theme import DEFAULT_BRAND


@dataclass(frozen=True)
class FontConfig:
    family: str = "helvetica"
    directory: str | None = None
    regular: str | None = None
    bold: str | None = None
    italic: str | None = None
    bold_italic: str | None = None

    @property
    def resolved_directory(self) -> Path | None:
        return Path(self.directory).expanduser() if self.directory else None


@dataclass(frozen=True)
class FitConfig:
    min_scale: float = 0.8
    max_scale: float = 1.6
    iterations: int = 8
    initial: float = 1.0


@dataclass(frozen=True)
class ThemeConfig:
    default_brand: str = DEFAULT_BRAND


@dataclass(frozen=True)
class OutputConfig:
    author: str = ""
    producer: str = "cvpress"


@dataclass(frozen=True)
class AppConfig:
    fonts: FontConfig = field(default_factory=FontConfig)
    fit: FitConfig = field(default_factory=FitConfig)
    letter_fit: FitConfig = field(
        default_factory=lambda: FitConfig(min_scale=0.85, iterations=6)
    )
    theme: ThemeConfig = field(default_factory=ThemeConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        candidate = Path.cwd() / "config.yaml"
        if candidate.exists():
            path = candidate

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}

    defaults = AppConfig()
    letter_raw = raw.get("letter_fit", {})
    return AppConfig(
        fonts=FontConfig(**raw.get("fonts", {})),
        fit=FitConfig(**raw.get("fit", {})),
        letter_fit=FitConfig(
            **{
                "min_scale": defaults.letter_fit.min_scale,
                "iterations": defaults.letter_fit.iterations,
                **letter_raw,
            }
        ),
        theme=ThemeConfig(**raw.get("theme", {})),
        output=OutputConfig(**raw.get("output", {})),
    )
