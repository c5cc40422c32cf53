"""Tests for the flow layout engine (with fake text metrics)."""

import pytest

from cvpress.export.layout_engine import (
    CircleOp,
    FlagOp,
    LineOp,
    RectOp,
    TextOp,
    layout_document,
)
from cvpress.layout.document import (
    Bullet,
    Column,
    Columns,
    Flag,
    Heading,
    LanguageRow,
    LayoutDocument,
    Margins,
    PageSpec,
    Panel,
    Paragraph,
    Rule,
    Run,
    Spacer,
    plain_text,
)

INK = "#000000"
TOP = 20
BOTTOM = 841.89 - 20


def _doc(*blocks, width: float | None = None) -> LayoutDocument:
    """A4 document with 20pt margins, or a content area ``width`` points wide."""
    right = 20 if width is None else 595.28 - 20 - width
    return LayoutDocument(page=PageSpec(margins=Margins(20, TOP, right, 20)), blocks=blocks)


def _para(text: str, size: float = 10, align: str = "L", **kw) -> Paragraph:
    return Paragraph(runs=(Run(text),), size=size, color=INK, align=align, **kw)


def _ops(pages, kind, page: int | None = None):
    return [
        op
        for p in pages
        if page is None or p.index == page
        for op in p.ops
        if isinstance(op, kind)
    ]


class TestParagraphs:
    def test_single_line(self, fake_measure):
        pages = layout_document(_doc(_para("Hello world")), fake_measure)
        assert len(pages) == 1
        texts = _ops(pages, TextOp)
        assert [t.text for t in texts] == ["Hello world"]
        assert texts[0].x == 20
        assert TOP < texts[0].y < TOP + 12

    def test_wrapping_stays_in_width(self, fake_measure):
        doc = _doc(_para(" ".join(["word"] * 100)), width=100)
        texts = _ops(layout_document(doc, fake_measure), TextOp)
        assert len(texts) == 25
        assert all(t.text == "word word word word" for t in texts)
        for t in texts:
            assert t.x + fake_measure(t.text, t.style, t.size) <= 120 + 0.01

    def test_long_word_is_split(self, fake_measure):
        texts = _ops(layout_document(_doc(_para("x" * 300)), fake_measure), TextOp)
        assert len(texts) == 3
        assert "".join(t.text for t in texts) == "x" * 300

    def test_hard_line_breaks(self, fake_measure):
        texts = _ops(layout_document(_doc(_para("one\ntwo")), fake_measure), TextOp)
        assert [t.text for t in texts] == ["one", "two"]
        assert texts[1].y > texts[0].y

    def test_justified_lines_fill_width(self, fake_measure):
        doc = _doc(_para("aaa bbb ccc ddd eee fff", align="J"), width=100)
        texts = _ops(layout_document(doc, fake_measure), TextOp)
        assert [t.text for t in texts] == ["aaa", "bbb", "ccc", "ddd", "eee", "fff"]
        assert texts[4].x + 15 == pytest.approx(120)
        # Last line is not stretched.
        assert texts[5].x == 20

    def test_centered(self, fake_measure):
        texts = _ops(layout_document(_doc(_para("ab", align="C")), fake_measure), TextOp)
        assert texts[0].x == pytest.approx(20 + (555.28 - 10) / 2)

    def test_mixed_runs_keep_styles(self, fake_measure):
        para = Paragraph(
            runs=(Run("Bold", bold=True), Run(" plain", color="#ff0000")),
            size=10,
            color=INK,
        )
        texts = _ops(layout_document(_doc(para), fake_measure), TextOp)
        assert [(t.text, t.style, t.color) for t in texts] == [
            ("Bold", "B", INK),
            ("plain", "", "#ff0000"),
        ]

    def test_empty_paragraph_draws_nothing(self, fake_measure):
        pages = layout_document(_doc(_para("   ")), fake_measure)
        assert len(pages) == 1
        assert pages[0].ops == ()

    def test_empty_document_is_one_page(self, fake_measure):
        assert len(layout_document(_doc(), fake_measure)) == 1


class TestPagination:
    def test_overflow_creates_pages(self, fake_measure):
        doc = _doc(*(_para(f"line {i}") for i in range(200)))
        pages = layout_document(doc, fake_measure)
        assert len(pages) == 4
        for t in _ops(pages, TextOp):
            assert TOP <= t.y <= BOTTOM

    def test_reading_order_preserved(self, fake_measure):
        doc = _doc(*(_para(f"line {i}") for i in range(100)))
        texts = _ops(layout_document(doc, fake_measure), TextOp)
        assert [t.text for t in texts] == [f"line {i}" for i in range(100)]

    def test_heading_kept_with_next(self, fake_measure):
        heading = Heading(text="Experience", size=10, color=INK)
        doc = _doc(Spacer(780), heading, _para("First entry"))
        pages = layout_document(doc, fake_measure)
        assert len(pages) == 2
        assert _ops(pages, TextOp, page=0) == []
        assert [t.text for t in _ops(pages, TextOp, page=1)] == ["Experience", "First entry"]


class TestBlocks:
    @pytest.mark.parametrize(
        "marker, kind", [("dot", CircleOp), ("square", RectOp), ("dash", LineOp)]
    )
    def test_bullet_markers(self, fake_measure, marker, kind):
        bullet = Bullet(runs=(Run("item"),), size=10, color=INK, marker=marker)
        pages = layout_document(_doc(bullet), fake_measure)
        assert len(_ops(pages, kind)) == 1
        assert _ops(pages, TextOp)[0].x == 30

    def test_language_row(self, fake_measure):
        row = LanguageRow(
            name="Anglais",
            level_label="Courant",
            flag=Flag.EN,
            level=4,
            size=9,
            color=INK,
            muted="#666666",
            dot_color="#2563eb",
            dot_empty="#e2e8f0",
        )
        pages = layout_document(_doc(row), fake_measure)
        flags = _ops(pages, FlagOp)
        dots = _ops(pages, CircleOp)
        assert [f.flag for f in flags] == [Flag.EN]
        assert len(dots) == 5
        assert [d.fill for d in dots].count("#2563eb") == 4
        assert [t.text for t in _ops(pages, TextOp)] == ["Anglais", "(Courant)"]

    def test_rule_spans_content_width(self, fake_measure):
        doc = _doc(Rule(color="#cccccc", thickness=1, space_before=4), width=200)
        (line,) = _ops(layout_document(doc, fake_measure), LineOp)
        assert (line.x1, line.x2) == (20, pytest.approx(220))
        assert line.y1 == line.y2 == pytest.approx(TOP + 4.5)

    def test_panel_fill_is_drawn_under_text(self, fake_measure):
        panel = Panel(children=(_para("inside"),), fill="#eeeeee", padding=6)
        ops = layout_document(_doc(panel), fake_measure)[0].ops
        fill_index = next(i for i, op in enumerate(ops) if isinstance(op, RectOp))
        text_index = next(i for i, op in enumerate(ops) if isinstance(op, TextOp))
        assert fill_index < text_index
        assert ops[fill_index].fill == "#eeeeee"
        assert ops[text_index].x == 26

    def test_columns_start_at_same_height(self, fake_measure):
        columns = Columns(
            columns=(Column((_para("left"),), width=100), Column((_para("right"),))),
            gap=10,
        )
        texts = _ops(layout_document(_doc(columns), fake_measure), TextOp)
        left, right = texts
        assert left.y == right.y
        assert left.x == 20
        assert right.x == 130

    def test_column_fill_spans_pages(self, fake_measure):
        column = Column(tuple(_para(f"row {i}") for i in range(100)), width=150, fill="#dddddd")
        pages = layout_document(_doc(Columns(columns=(column, Column(())))), fake_measure)
        assert len(pages) == 2
        for page in pages:
            fills = [op for op in page.ops if isinstance(op, RectOp) and op.fill == "#dddddd"]
            assert len(fills) == 1

    def test_plain_text_walks_containers(self):
        doc = _doc(
            Heading(text="Title", size=10, color=INK),
            Panel(children=(_para("in panel"),)),
            Columns(columns=(Column((_para("col a"),)), Column((_para("col b"),)))),
        )
        assert plain_text(doc) == "Title\nin panel\ncol a\ncol b"
