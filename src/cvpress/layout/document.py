"""Backend-agnostic description of a rendered document.

A LayoutDocument is a tree of frozen blocks produced by a template and read
only by the render backend. Sizes are in PDF points, colors are ``#rrggbb``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Union

Align = Literal["L", "C", "R", "J"]
Marker = Literal["dot", "dash", "square"]

A4_WIDTH = 595.28
A4_HEIGHT = 841.89


class Icon(str, Enum):
    CALENDAR = "calendar"
    PIN = "pin"
    CAP = "cap"
    MEDAL = "medal"
    GLOBE = "globe"
    USER = "user"


class Flag(str, Enum):
    FR = "fr"
    EN = "en"
    ES = "es"
    DE = "de"
    IT = "it"
    PT = "pt"
    AR = "ar"
    ZH = "zh"
    GENERIC = "generic"


@dataclass(frozen=True)
class Margins:
    left: float
    top: float
    right: float
    bottom: float


@dataclass(frozen=True)
class PageSpec:
    margins: Margins
    width: float = A4_WIDTH
    height: float = A4_HEIGHT

    @property
    def content_width(self) -> float:
        return self.width - self.margins.left - self.margins.right


# ---------------------------------------------------------------------------
# Page decorations (absolute coordinates, drawn before the flow content)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Band:
    """Flat filled rectangle. Gradients are sequences of adjacent bands."""

    x: float
    y: float
    w: float
    h: float
    color: str
    every_page: bool = False


@dataclass(frozen=True)
class Disc:
    x: float
    y: float
    radius: float
    color: str
    every_page: bool = False


Decoration = Union[Band, Disc]


# ---------------------------------------------------------------------------
# Flow blocks
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Run:
    text: str
    bold: bool = False
    italic: bool = False
    color: str | None = None


@dataclass(frozen=True)
class Paragraph:
    runs: tuple[Run, ...]
    size: float
    color: str
    line_height: float = 1.2
    align: Align = "L"
    indent: float = 0.0
    space_before: float = 0.0
    space_after: float = 0.0


@dataclass(frozen=True)
class Bullet:
    runs: tuple[Run, ...]
    size: float
    color: str
    line_height: float = 1.2
    marker: Marker = "dot"
    marker_color: str | None = None
    indent: float = 10.0
    align: Align = "L"
    space_after: float = 0.0


@dataclass(frozen=True)
class Heading:
    text: str
    size: float
    color: str
    icon: Icon | None = None
    icon_color: str | None = None
    rule_color: str | None = None
    fill: str | None = None
    align: Align = "L"
    space_before: float = 0.0
    space_after: float = 0.0


@dataclass(frozen=True)
class Rule:
    color: str
    thickness: float = 0.6
    space_before: float = 0.0
    space_after: float = 0.0


@dataclass(frozen=True)
class Spacer:
    height: float


@dataclass(frozen=True)
class IconText:
    icon: Icon
    icon_color: str
    runs: tuple[Run, ...]
    size: float
    color: str
    line_height: float = 1.2
    space_after: float = 0.0


@dataclass(frozen=True)
class LanguageRow:
    name: str
    level_label: str
    flag: Flag
    level: int
    size: float
    color: str
    muted: str
    dot_color: str
    dot_empty: str
    space_after: float = 0.0


@dataclass(frozen=True)
class Panel:
    """Vertical stack of blocks on an optional filled background."""

    children: tuple[Block, ...]
    fill: str | None = None
    padding: float = 0.0
    accent: str | None = None
    space_after: float = 0.0


@dataclass(frozen=True)
class Column:
    blocks: tuple[Block, ...]
    width: float | None = None
    fill: str | None = None
    padding: float = 0.0


@dataclass(frozen=True)
class Columns:
    """Side-by-side columns; ``width=None`` columns share the remaining space."""

    columns: tuple[Column, ...]
    gap: float = 12.0
    space_after: float = 0.0


Block = Union[
    Paragraph, Bullet, Heading, Rule, Spacer, IconText, LanguageRow, Panel, Columns
]


@dataclass(frozen=True)
class LayoutDocument:
    page: PageSpec
    blocks: tuple[Block, ...]
    decorations: tuple[Decoration, ...] = field(default_factory=tuple)
    background: str | None = None
    title: str = ""
    author: str = ""


# ---------------------------------------------------------------------------
# Text extraction
# ---------------------------------------------------------------------------


def _block_texts(block: Block) -> list[str]:
    if isinstance(block, (Paragraph, Bullet, IconText)):
        return ["".join(run.text for run in block.runs)]
    if isinstance(block, Heading):
        return [block.text]
    if isinstance(block, LanguageRow):
        return [block.name, block.level_label]
    if isinstance(block, Panel):
        return [t for child in block.children for t in _block_texts(child)]
    if isinstance(block, Columns):
        return [
            t for col in block.columns for child in col.blocks for t in _block_texts(child)
        ]
    return []


def texts(doc: LayoutDocument) -> list[str]:
    """Every text fragment of the document in reading order."""
    return [t for block in doc.blocks for t in _block_texts(block) if t]


def plain_text(doc: LayoutDocument) -> str:
    return "\n".join(texts(doc))
