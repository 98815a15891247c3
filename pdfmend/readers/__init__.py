"""PDF reading module.

Extraction passes and tagged blocks come from PyMuPDF.
"""

from pdfmend.readers.pdf_reader import (
    PAGE_TAG,
    PageData,
    PDFReader,
    RawDocument,
)

__all__ = [
    "PDFReader",
    "RawDocument",
    "PageData",
    "PAGE_TAG",
]
