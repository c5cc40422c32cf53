"""PDF export module for cvpress."""
from cvpress.export.fonts import FontRegistry, FontTable, get_fonts
from cvpress.export.merge import merge_documents
from cvpress.export.pdf_backend import count_pages, render_to_bytes

__all__ = [
    "render_to_bytes",
    "count_pages",
    "merge_documents",
    "FontRegistry",
    "FontTable",
    "get_fonts",
]
