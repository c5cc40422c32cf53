"""Structural concatenation of independently rendered PDFs."""

from __future__ import annotations

import logging
from io import BytesIO
from typing import Sequence

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PyPdfError

from cvpress.errors import MergeError

logger = logging.getLogger(__name__)


def merge_documents(blobs: Sequence[bytes]) -> bytes:
    """Copy every page of every input, in order, into one PDF.

    No re-layout happens: pages are copied as they are. A single input is
    returned unchanged.

    Raises:
        MergeError: ``blobs`` is empty or one of the inputs is not a readable PDF.
    """
    if not blobs:
        raise MergeError("Cannot merge zero documents")
    if len(blobs) == 1:
        return bytes(blobs[0])

    writer = PdfWriter()
    for index, blob in enumerate(blobs):
        try:
            reader = PdfReader(BytesIO(blob))
            for page in reader.pages:
                writer.add_page(page)
        except (PyPdfError, ValueError, OSError) as exc:
            raise MergeError(f"Document {index} is not a readable PDF: {exc}") from exc

    buf = BytesIO()
    writer.write(buf)
    data = buf.getvalue()
    logger.debug("Merged %d documents into %d page(s)", len(blobs), len(writer.pages))
    return data
