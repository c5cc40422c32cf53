"""Font resources for the PDF backend.

Text measurement during layout and drawing must use the same metrics, so the
font table is resolved once per process and shared. A family is either one of
the PDF core fonts (metrics shipped with fpdf2) or a TrueType family with four
faces on disk. Nothing is ever substituted: a missing face is an error.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path

from fpdf import FPDF
from fpdf.fonts import CORE_FONTS

from cvpress.config import FontConfig
from cvpress.errors import FontResourceError

logger = logging.getLogger(__name__)

FACE_STYLES = ("", "B", "I", "BI")
CORE_ENCODING = "cp1252"

_DEFAULT_FACE_SUFFIXES = {
    "": "Regular",
    "B": "Bold",
    "I": "Italic",
    "BI": "BoldItalic",
}


@dataclass(frozen=True)
class FontTable:
    family: str
    core: bool = True
    faces: tuple[tuple[str, str], ...] = ()

    def install(self, pdf: FPDF) -> None:
        """Register the family on ``pdf`` so ``set_font(self.family, ...)`` works."""
        if self.core:
            pdf.core_fonts_encoding = CORE_ENCODING
            return
        for style, path in self.faces:
            pdf.add_font(self.family, style, path)

    def sanitize(self, text: str) -> str:
        """Replace characters the core font encoding cannot represent."""
        if not self.core:
            return text
        return text.encode(CORE_ENCODING, "replace").decode(CORE_ENCODING)


class FontRegistry:
    """Lazily builds one FontTable and hands out the same instance afterwards."""

    def __init__(
        self,
        family: str = "helvetica",
        directory: str | Path | None = None,
        files: dict[str, str] | None = None,
    ):
        self.family = family.strip().lower()
        self.directory = Path(directory).expanduser() if directory else None
        self.files = files or {}
        self._table: FontTable | None = None
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: FontConfig) -> FontRegistry:
        files = {
            style: name
            for style, name in (
                ("", config.regular),
                ("B", config.bold),
                ("I", config.italic),
                ("BI", config.bold_italic),
            )
            if name
        }
        return cls(config.family, config.resolved_directory, files)

    def get(self) -> FontTable:
        table = self._table
        if table is not None:
            return table
        with self._lock:
            if self._table is None:
                self._table = self._build()
            return self._table

    def _build(self) -> FontTable:
        if self.directory is None:
            missing = [s for s in FACE_STYLES if f"{self.family}{s}" not in CORE_FONTS]
            if missing:
                raise FontResourceError(
                    f"Unknown core font family {self.family!r}; "
                    f"available: helvetica, times, courier"
                )
            logger.debug("Using core font family %s", self.family)
            return FontTable(family=self.family)

        faces = []
        missing_paths = []
        stem = self.family.capitalize()
        for style in FACE_STYLES:
            name = self.files.get(style) or f"{stem}-{_DEFAULT_FACE_SUFFIXES[style]}.ttf"
            path = self.directory / name
            if not path.is_file():
                missing_paths.append(str(path))
            faces.append((style, str(path)))
        if missing_paths:
            raise FontResourceError(
                "Missing font files for family "
                f"{self.family!r}: {', '.join(missing_paths)}"
            )
        logger.info("Loaded TrueType family %s from %s", self.family, self.directory)
        return FontTable(family=self.family, core=False, faces=tuple(faces))


_default_registry = FontRegistry()


def get_fonts(registry: FontRegistry | None = None) -> FontTable:
    """Return the font table of ``registry``, or of the process-wide default."""
    return (registry or _default_registry).get()
