"""Flow layout: turns a LayoutDocument into absolutely positioned drawing ops.

The engine measures text through a callable (the PDF backend passes fpdf2's
``get_string_width``), wraps runs greedily, and paginates with a simple
cursor. Headings are kept with the start of the following block. Columns are
laid out from the same start cursor and the tallest one wins. Panel and column
fills are split into one rectangle per page they cover.
"""

from __future__ import annotations

import logging
import re
from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, Union

from cvpress.layout.document import (
    Align,
    Block,
    Bullet,
    Columns,
    Flag,
    Heading,
    Icon,
    IconText,
    LanguageRow,
    LayoutDocument,
    Panel,
    Paragraph,
    Rule,
    Run,
    Spacer,
)

logger = logging.getLogger(__name__)

# (text, style, size) -> width in points
Measure = Callable[[str, str, float], float]

_EPS = 0.01
_SPLIT_RE = re.compile(r"(\s+)")
_BASELINE_RATIO = 0.8


# ---------------------------------------------------------------------------
# Drawing ops
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TextOp:
    x: float
    y: float  # baseline
    text: str
    style: str
    size: float
    color: str


@dataclass(frozen=True)
class RectOp:
    x: float
    y: float
    w: float
    h: float
    fill: str | None = None
    stroke: str | None = None
    line_width: float = 0.5


@dataclass(frozen=True)
class LineOp:
    x1: float
    y1: float
    x2: float
    y2: float
    color: str
    width: float


@dataclass(frozen=True)
class CircleOp:
    cx: float
    cy: float
    r: float
    fill: str | None = None
    stroke: str | None = None
    line_width: float = 0.5


@dataclass(frozen=True)
class IconOp:
    icon: Icon
    x: float
    y: float
    size: float
    color: str


@dataclass(frozen=True)
class FlagOp:
    flag: Flag
    x: float
    y: float
    w: float
    h: float


Op = Union[TextOp, RectOp, LineOp, CircleOp, IconOp, FlagOp]


@dataclass(frozen=True)
class PageLayout:
    index: int
    ops: tuple[Op, ...]


# ---------------------------------------------------------------------------
# Word wrapping
# ---------------------------------------------------------------------------


@dataclass
class _Frag:
    text: str
    style: str
    color: str
    width: float


@dataclass
class _Word:
    frags: list[_Frag]

    @property
    def width(self) -> float:
        return sum(f.width for f in self.frags)


@dataclass
class _Line:
    words: list[_Word]
    hard_break: bool = False


def _style(run: Run) -> str:
    return ("B" if run.bold else "") + ("I" if run.italic else "")


class _Wrapper:
    def __init__(self, measure: Measure):
        self.measure = measure

    def space(self, style: str, size: float) -> float:
        return self.measure(" ", style, size)

    def tokenize(
        self, runs: tuple[Run, ...], size: float, color: str
    ) -> list[_Word | None]:
        """Words in order; ``None`` marks a hard line break."""
        tokens: list[_Word | None] = []
        current: _Word | None = None
        for run in runs:
            style = _style(run)
            run_color = run.color or color
            for part in _SPLIT_RE.split(run.text):
                if not part:
                    continue
                if part.isspace():
                    current = None
                    for _ in range(part.count("\n")):
                        tokens.append(None)
                    continue
                frag = _Frag(part, style, run_color, self.measure(part, style, size))
                if current is None:
                    current = _Word([frag])
                    tokens.append(current)
                else:
                    current.frags.append(frag)
        return tokens

    def _split_long(self, word: _Word, size: float, width: float) -> list[_Word]:
        pieces: list[_Word] = []
        current: list[_Frag] = []
        used = 0.0
        for frag in word.frags:
            for ch in frag.text:
                w = self.measure(ch, frag.style, size)
                if current and used + w > width:
                    pieces.append(_Word(current))
                    current, used = [], 0.0
                if current and current[-1].style == frag.style and current[-1].color == frag.color:
                    last = current[-1]
                    current[-1] = _Frag(last.text + ch, last.style, last.color, last.width + w)
                else:
                    current.append(_Frag(ch, frag.style, frag.color, w))
                used += w
        if current:
            pieces.append(_Word(current))
        return pieces

    def wrap(
        self, runs: tuple[Run, ...], size: float, color: str, width: float
    ) -> list[_Line]:
        lines: list[_Line] = []
        line: list[_Word] = []
        used = 0.0
        for token in self.tokenize(runs, size, color):
            if token is None:
                lines.append(_Line(line, hard_break=True))
                line, used = [], 0.0
                continue
            words = [token]
            if token.width > width:
                words = self._split_long(token, size, width)
            for word in words:
                gap = self.space(line[-1].frags[-1].style, size) if line else 0.0
                if line and used + gap + word.width > width + _EPS:
                    lines.append(_Line(line))
                    line, used, gap = [], 0.0, 0.0
                line.append(word)
                used += gap + word.width
        if line:
            lines.append(_Line(line))
        return [ln for ln in lines if ln.words]


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


Cursor = tuple[int, float]


class LayoutEngine:
    """Lays out one document. Instances are single use."""

    def __init__(self, doc: LayoutDocument, measure: Measure):
        self.doc = doc
        self.measure = measure
        self.wrapper = _Wrapper(measure)
        margins = doc.page.margins
        self.top = margins.top
        self.bottom = doc.page.height - margins.bottom
        self.ops: dict[int, list[Op]] = defaultdict(list)
        self.last_page = 0

    # -- public ------------------------------------------------------------

    def run(self) -> list[PageLayout]:
        margins = self.doc.page.margins
        self._blocks(
            self.doc.blocks, margins.left, self.doc.page.content_width, (0, self.top)
        )
        return [
            PageLayout(index=i, ops=tuple(self.ops.get(i, ())))
            for i in range(self.last_page + 1)
        ]

    # -- cursor helpers ----------------------------------------------------

    def _emit(self, page: int, op: Op) -> None:
        self.ops[page].append(op)
        self.last_page = max(self.last_page, page)

    def _ensure(self, cursor: Cursor, height: float) -> Cursor:
        page, y = cursor
        if y + height > self.bottom + _EPS and y > self.top + _EPS:
            page += 1
            y = self.top
            self.last_page = max(self.last_page, page)
        return page, y

    # -- blocks ------------------------------------------------------------

    def _blocks(
        self, blocks: tuple[Block, ...], x: float, width: float, cursor: Cursor
    ) -> Cursor:
        for i, block in enumerate(blocks):
            following = blocks[i + 1] if i + 1 < len(blocks) else None
            cursor = self._block(block, x, width, cursor, following)
        return cursor

    def _block(
        self,
        block: Block,
        x: float,
        width: float,
        cursor: Cursor,
        following: Block | None,
    ) -> Cursor:
        if isinstance(block, Paragraph):
            return self._paragraph(block, x, width, cursor)
        if isinstance(block, Bullet):
            return self._bullet(block, x, width, cursor)
        if isinstance(block, Heading):
            return self._heading(block, x, width, cursor, following)
        if isinstance(block, Rule):
            return self._rule(block, x, width, cursor)
        if isinstance(block, Spacer):
            return cursor[0], cursor[1] + block.height
        if isinstance(block, IconText):
            return self._icon_text(block, x, width, cursor)
        if isinstance(block, LanguageRow):
            return self._language_row(block, x, width, cursor)
        if isinstance(block, Panel):
            return self._panel(block, x, width, cursor)
        if isinstance(block, Columns):
            return self._columns(block, x, width, cursor)
        raise TypeError(f"Unsupported block: {type(block).__name__}")

    def _first_line_height(self, block: Block | None) -> float:
        if isinstance(block, (Paragraph, Bullet, IconText)):
            return block.size * block.line_height
        if isinstance(block, LanguageRow):
            return block.size * 1.4
        if isinstance(block, Heading):
            return block.size * 1.3
        if isinstance(block, Panel):
            return block.padding + self._first_line_height(
                block.children[0] if block.children else None
            )
        if isinstance(block, Columns):
            return max(
                (
                    col.padding + self._first_line_height(col.blocks[0] if col.blocks else None)
                    for col in block.columns
                ),
                default=0.0,
            )
        return 0.0

    # -- text --------------------------------------------------------------

    def _text_lines(
        self,
        runs: tuple[Run, ...],
        size: float,
        color: str,
        line_height: float,
        align: Align,
        x: float,
        width: float,
        cursor: Cursor,
    ) -> tuple[Cursor, tuple[int, float] | None]:
        """Lay out wrapped lines; returns the end cursor and the first line's top."""
        lines = self.wrapper.wrap(runs, size, color, width)
        line_h = size * line_height
        first: tuple[int, float] | None = None
        for index, line in enumerate(lines):
            cursor = self._ensure(cursor, line_h)
            page, y = cursor
            if first is None:
                first = cursor
            baseline = y + (line_h - size) / 2 + size * _BASELINE_RATIO
            last = index == len(lines) - 1 or line.hard_break
            self._draw_line(line, page, x, width, baseline, size, align, last)
            cursor = (page, y + line_h)
        return cursor, first

    def _draw_line(
        self,
        line: _Line,
        page: int,
        x: float,
        width: float,
        baseline: float,
        size: float,
        align: Align,
        last: bool,
    ) -> None:
        gaps = [
            self.wrapper.space(prev.frags[-1].style, size)
            for prev in line.words[:-1]
        ]
        natural = sum(w.width for w in line.words) + sum(gaps)
        extra = max(0.0, width - natural)
        offset = 0.0
        stretch = 0.0
        if align == "C":
            offset = extra / 2
        elif align == "R":
            offset = extra
        elif align == "J" and not last and gaps:
            stretch = extra / len(gaps)

        if stretch:
            cx = x
            for i, word in enumerate(line.words):
                for frag in word.frags:
                    self._emit(page, TextOp(cx, baseline, frag.text, frag.style, size, frag.color))
                    cx += frag.width
                if i < len(gaps):
                    cx += gaps[i] + stretch
            return

        # Merge same-style neighbours so a plain line is a single text op.
        segments: list[list] = []
        for i, word in enumerate(line.words):
            for j, frag in enumerate(word.frags):
                lead = " " if i > 0 and j == 0 else ""
                lead_w = gaps[i - 1] if lead else 0.0
                if segments and segments[-1][1] == frag.style and segments[-1][2] == frag.color:
                    segments[-1][0] += lead + frag.text
                    segments[-1][3] += lead_w + frag.width
                else:
                    if segments and lead:
                        segments[-1][0] += lead
                        segments[-1][3] += lead_w
                    segments.append([frag.text, frag.style, frag.color, frag.width])
        cx = x + offset
        for text, style, color, w in segments:
            self._emit(page, TextOp(cx, baseline, text.rstrip(" "), style, size, color))
            cx += w

    def _paragraph(self, block: Paragraph, x: float, width: float, cursor: Cursor) -> Cursor:
        if not any(run.text.strip() for run in block.runs):
            return cursor
        cursor = (cursor[0], cursor[1] + block.space_before)
        cursor, _ = self._text_lines(
            block.runs,
            block.size,
            block.color,
            block.line_height,
            block.align,
            x + block.indent,
            width - block.indent,
            cursor,
        )
        return cursor[0], cursor[1] + block.space_after

    def _bullet(self, block: Bullet, x: float, width: float, cursor: Cursor) -> Cursor:
        if not any(run.text.strip() for run in block.runs):
            return cursor
        cursor, first = self._text_lines(
            block.runs,
            block.size,
            block.color,
            block.line_height,
            block.align,
            x + block.indent,
            width - block.indent,
            cursor,
        )
        if first is not None:
            page, y = first
            color = block.marker_color or block.color
            cy = y + block.size * block.line_height / 2
            mx = x + block.indent * 0.4
            if block.marker == "dot":
                self._emit(page, CircleOp(mx, cy, block.size * 0.14, fill=color))
            elif block.marker == "square":
                s = block.size * 0.26
                self._emit(page, RectOp(mx - s / 2, cy - s / 2, s, s, fill=color))
            else:
                half = block.size * 0.22
                self._emit(page, LineOp(mx - half, cy, mx + half, cy, color, block.size * 0.07))
        return cursor[0], cursor[1] + block.space_after

    def _heading(
        self,
        block: Heading,
        x: float,
        width: float,
        cursor: Cursor,
        following: Block | None,
    ) -> Cursor:
        if not block.text.strip():
            return cursor
        runs = (Run(block.text, bold=True),)
        pad = block.size * 0.35 if block.fill else 0.0
        text_x = x + pad
        icon_size = block.size * 0.95
        if block.icon is not None:
            text_x += icon_size + block.size * 0.45
        text_w = x + width - pad - text_x
        lines = max(1, len(self.wrapper.wrap(runs, block.size, block.color, text_w)))
        line_h = block.size * 1.3
        box_h = lines * line_h + 2 * pad

        height = block.space_before + box_h + block.space_after
        cursor = self._ensure(cursor, height + self._first_line_height(following))
        page, y = cursor
        y += block.space_before
        if block.fill:
            self._emit(page, RectOp(x, y, width, box_h, fill=block.fill))
        if block.icon is not None:
            self._emit(
                page,
                IconOp(
                    block.icon,
                    x + pad,
                    y + pad + (line_h - icon_size) / 2,
                    icon_size,
                    block.icon_color or block.color,
                ),
            )
        self._text_lines(
            runs, block.size, block.color, 1.3, block.align, text_x, text_w, (page, y + pad)
        )
        y += box_h
        if block.rule_color:
            self._emit(page, LineOp(x, y + 1, x + width, y + 1, block.rule_color, 0.7))
            y += 1.5
        return page, y + block.space_after

    def _rule(self, block: Rule, x: float, width: float, cursor: Cursor) -> Cursor:
        page, y = self._ensure(cursor, block.space_before + block.thickness)
        y += block.space_before + block.thickness / 2
        self._emit(page, LineOp(x, y, x + width, y, block.color, block.thickness))
        return page, y + block.thickness / 2 + block.space_after

    def _icon_text(self, block: IconText, x: float, width: float, cursor: Cursor) -> Cursor:
        if not any(run.text.strip() for run in block.runs):
            return cursor
        icon_size = block.size * 0.95
        text_x = x + icon_size + block.size * 0.5
        cursor, first = self._text_lines(
            block.runs,
            block.size,
            block.color,
            block.line_height,
            "L",
            text_x,
            x + width - text_x,
            cursor,
        )
        if first is not None:
            page, y = first
            top = y + (block.size * block.line_height - icon_size) / 2
            self._emit(page, IconOp(block.icon, x, top, icon_size, block.icon_color))
        return cursor[0], cursor[1] + block.space_after

    def _language_row(self, block: LanguageRow, x: float, width: float, cursor: Cursor) -> Cursor:
        size = block.size
        flag_w, flag_h = size * 1.35, size * 0.9
        dot_r, dot_step = size * 0.2, size * 0.55
        dots_w = dot_step * 4 + 2 * dot_r
        text_x = x + flag_w + size * 0.5
        text_w = max(size * 4, width - (text_x - x) - dots_w - size * 0.5)

        runs: tuple[Run, ...] = (Run(block.name, bold=True),)
        if block.level_label:
            runs += (Run(f" ({block.level_label})", color=block.muted),)
        cursor, first = self._text_lines(
            runs, size, block.color, 1.4, "L", text_x, text_w, cursor
        )
        if first is not None:
            page, y = first
            mid = y + size * 0.7
            self._emit(page, FlagOp(block.flag, x, mid - flag_h / 2, flag_w, flag_h))
            start = x + width - dots_w + dot_r
            for i in range(5):
                filled = i < block.level
                self._emit(
                    page,
                    CircleOp(
                        start + i * dot_step,
                        mid,
                        dot_r,
                        fill=block.dot_color if filled else block.dot_empty,
                    ),
                )
        return cursor[0], cursor[1] + block.space_after

    # -- containers --------------------------------------------------------

    def _fill_segments(
        self,
        start: Cursor,
        end: Cursor,
        start_index: int,
        x: float,
        width: float,
        fill: str | None,
        accent: str | None = None,
    ) -> None:
        """Insert background rectangles under content already laid out."""
        for page in range(start[0], end[0] + 1):
            top = start[1] if page == start[0] else self.top
            bottom = end[1] if page == end[0] else self.bottom
            if bottom - top <= _EPS:
                continue
            index = start_index if page == start[0] else 0
            ops: list[Op] = []
            if fill:
                ops.append(RectOp(x, top, width, bottom - top, fill=fill))
            if accent:
                ops.append(RectOp(x, top, 2.5, bottom - top, fill=accent))
            self.ops[page][index:index] = ops

    def _panel(self, block: Panel, x: float, width: float, cursor: Cursor) -> Cursor:
        if not block.children:
            return cursor
        pad = block.padding
        cursor = self._ensure(cursor, 2 * pad + self._first_line_height(block.children[0]))
        start = cursor
        start_index = len(self.ops[start[0]])
        inner_x = x + pad + (2.5 if block.accent else 0.0)
        inner_w = width - 2 * pad - (2.5 if block.accent else 0.0)
        end = self._blocks(block.children, inner_x, inner_w, (start[0], start[1] + pad))
        end = (end[0], end[1] + pad)
        if block.fill or block.accent:
            self._fill_segments(start, end, start_index, x, width, block.fill, block.accent)
        return end[0], end[1] + block.space_after

    def _columns(self, block: Columns, x: float, width: float, cursor: Cursor) -> Cursor:
        if not block.columns:
            return cursor
        gaps = block.gap * (len(block.columns) - 1)
        fixed = sum(col.width for col in block.columns if col.width is not None)
        flexible = [col for col in block.columns if col.width is None]
        share = (width - gaps - fixed) / len(flexible) if flexible else 0.0

        cursor = self._ensure(cursor, self._first_line_height(block))
        end = cursor
        cx = x
        for col in block.columns:
            col_w = col.width if col.width is not None else share
            start_index = len(self.ops[cursor[0]])
            col_start = (cursor[0], cursor[1] + col.padding)
            col_end = self._blocks(
                col.blocks, cx + col.padding, col_w - 2 * col.padding, col_start
            )
            col_end = (col_end[0], col_end[1] + col.padding)
            if col.fill:
                self._fill_segments(cursor, col_end, start_index, cx, col_w, col.fill)
            end = max(end, col_end)
            cx += col_w + block.gap
        return end[0], end[1] + block.space_after


def layout_document(doc: LayoutDocument, measure: Measure) -> list[PageLayout]:
    pages = LayoutEngine(doc, measure).run()
    logger.debug("Laid out %d page(s)", len(pages))
    return pages
