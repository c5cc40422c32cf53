"""Layout document types shared by templates and the render backend."""

from cvpress.layout.document import (
    A4_HEIGHT,
    A4_WIDTH,
    Band,
    Block,
    Bullet,
    Column,
    Columns,
    Decoration,
    Disc,
    Flag,
    Heading,
    Icon,
    IconText,
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
    texts,
)

__all__ = [
    "A4_HEIGHT",
    "A4_WIDTH",
    "Band",
    "Block",
    "Bullet",
    "Column",
    "Columns",
    "Decoration",
    "Disc",
    "Flag",
    "Heading",
    "Icon",
    "IconText",
    "LanguageRow",
    "LayoutDocument",
    "Margins",
    "PageSpec",
    "Panel",
    "Paragraph",
    "Rule",
    "Run",
    "Spacer",
    "plain_text",
    "texts",
]
