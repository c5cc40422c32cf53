"""Tests for PDF merging."""

from io import BytesIO

import pytest
from pypdf import PdfReader

from cvpress.errors import MergeError
from cvpress.export import count_pages, merge_documents, render_to_bytes
from cvpress.layout.document import LayoutDocument, Margins, PageSpec, Paragraph, Run


def _pdf(lines: int) -> bytes:
    doc = LayoutDocument(
        page=PageSpec(margins=Margins(40, 40, 40, 40)),
        blocks=tuple(
            Paragraph(runs=(Run(f"Ligne {i}"),), size=12, color="#000000")
            for i in range(lines)
        ),
    )
    return render_to_bytes(doc)


@pytest.fixture(scope="module")
def one_page() -> bytes:
    return _pdf(5)


@pytest.fixture(scope="module")
def two_pages() -> bytes:
    return _pdf(70)


class TestMerge:
    def test_page_counts_add_up(self, one_page, two_pages):
        assert count_pages(two_pages) == 2
        merged = merge_documents([one_page, two_pages, one_page])
        assert count_pages(merged) == 4

    def test_single_document_unchanged(self, one_page):
        assert merge_documents([one_page]) == one_page

    def test_accepts_bytearray(self, one_page):
        merged = merge_documents([bytearray(one_page), one_page])
        assert count_pages(merged) == 2

    def test_zero_documents(self):
        with pytest.raises(MergeError):
            merge_documents([])

    def test_unreadable_input(self, one_page):
        with pytest.raises(MergeError, match="Document 1"):
            merge_documents([one_page, b"garbage"])

    def test_merge_error_is_value_error(self):
        with pytest.raises(ValueError):
            merge_documents([])

    def test_order_preserved(self):
        first = _pdf(1)
        second = render_to_bytes(
            LayoutDocument(
                page=PageSpec(margins=Margins(40, 40, 40, 40)),
                blocks=(Paragraph(runs=(Run("Second document"),), size=12, color="#000000"),),
            )
        )
        reader = PdfReader(BytesIO(merge_documents([first, second])))
        assert "Ligne 0" in reader.pages[0].extract_text()
        assert "Second document" in reader.pages[1].extract_text()
