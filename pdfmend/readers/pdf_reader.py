"""
PDF Reader using PyMuPDF (fitz).

Produces what the repair pipeline consumes:
- several independent extraction passes of the document text, each a
  list of lines, used to build the document vocabulary
- the primary extraction as tagged text blocks (one per PyMuPDF text
  block) between page boundaries

Repair itself happens in pdfmend.repair; this module only extracts.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

import fitz  # PyMuPDF

from pdfmend.config import EXTRACTION_MODES
from pdfmend.exceptions import ConfigurationError, ExtractionError
from pdfmend.models import InputItem, TagEvent, TextBlock

logger = logging.getLogger(__name__)

PAGE_TAG = "page"


@dataclass
class PageData:
    """Raw data extracted from a single PDF page."""

    index: int  # 0-based page index
    label: str  # Page label (e.g., "42", "xiv", "A64")
    blocks: list[TextBlock]  # Primary extraction
    passes: dict[str, list[str]] = field(default_factory=dict)  # mode -> lines


@dataclass
class RawDocument:
    """Raw extracted data from a PDF, before repair."""

    source_path: Path
    page_count: int
    pages: list[PageData]
    metadata: dict[str, str | None]

    def extraction_pass(self, mode: str) -> list[str]:
        """All lines of one extraction pass, in page order."""
        lines: list[str] = []
        for page in self.pages:
            lines.extend(page.passes.get(mode, []))
        return lines

    @property
    def primary_lines(self) -> list[str]:
        """Lines of the primary (block) extraction."""
        return [line for page in self.pages for block in page.blocks for line in block.lines]

    def iter_items(self) -> Iterator[InputItem]:
        """Page tags around the primary text blocks, in document order."""
        for page in self.pages:
            yield TagEvent.start(PAGE_TAG, id=page.label)
            yield from page.blocks
            yield TagEvent.end(PAGE_TAG)


class PDFReader:
    """Extracts passes and tagged blocks from PDFs using PyMuPDF.

    Usage:
        reader = PDFReader(modes=("text", "words"))
        raw = reader.read("/path/to/file.pdf")
        # raw.extraction_pass("text"), raw.iter_items(), ...
    """

    def __init__(
        self,
        *,
        modes: tuple[str, ...] = EXTRACTION_MODES,
        preserve_ligatures: bool = True,
    ):
        """Initialize the PDF reader.

        Args:
            modes: Extraction passes to produce for every page.
            preserve_ligatures: Keep ligature glyphs in the primary
                extraction instead of letting PyMuPDF expand them.
        """
        unknown = [mode for mode in modes if mode not in EXTRACTION_MODES]
        if unknown:
            raise ConfigurationError(f"Unknown extraction modes: {unknown!r}")
        self.modes = tuple(modes)
        self.preserve_ligatures = preserve_ligatures

    def read(self, path: str | Path) -> RawDocument:
        """Read a PDF file and extract raw data.

        Args:
            path: Path to PDF file.

        Returns:
            RawDocument with pages, passes and metadata.

        Raises:
            FileNotFoundError: If file doesn't exist.
            ExtractionError: If file is not a valid PDF.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"PDF not found: {path}")

        try:
            doc = fitz.open(path)
        except Exception as e:
            raise ExtractionError(f"Failed to open PDF: {e}") from e

        try:
            pages = [self._extract_page(doc[i], i) for i in range(len(doc))]
            metadata = self._extract_metadata(doc)
            logger.info("Read %d pages from %s", len(pages), path)
            return RawDocument(
                source_path=path,
                page_count=len(doc),
                pages=pages,
                metadata=metadata,
            )
        finally:
            doc.close()

    def _extract_page(self, page: fitz.Page, page_idx: int) -> PageData:
        """Extract data from a single page."""
        label = page.get_label() or str(page_idx + 1)
        passes = {mode: self._extract_pass(page, mode) for mode in self.modes}
        return PageData(
            index=page_idx,
            label=label,
            blocks=self._extract_blocks(page, page_idx),
            passes=passes,
        )

    def _extract_pass(self, page: fitz.Page, mode: str) -> list[str]:
        """One independent extraction of the page as lines."""
        if mode == "text":
            return page.get_text("text").splitlines()
        if mode == "sorted":
            return page.get_text("text", sort=True).splitlines()
        # "words": (x0, y0, x1, y1, word, block_no, line_no, word_no)
        lines: dict[tuple[int, int], list[str]] = {}
        for w in page.get_text("words"):
            lines.setdefault((w[5], w[6]), []).append(w[4])
        return [" ".join(words) for _key, words in sorted(lines.items())]

    def _extract_blocks(self, page: fitz.Page, page_idx: int) -> list[TextBlock]:
        """Extract text blocks as lines of joined spans."""
        flags = fitz.TEXT_PRESERVE_WHITESPACE
        if self.preserve_ligatures:
            flags |= fitz.TEXT_PRESERVE_LIGATURES
        page_dict = page.get_text("dict", flags=flags)

        blocks = []
        for block in page_dict.get("blocks", []):
            # Skip image blocks
            if block.get("type") != 0:
                continue
            lines = []
            for line in block.get("lines", []):
                text = "".join(span.get("text", "") for span in line.get("spans", []))
                if text.strip():
                    lines.append(text)
            if lines:
                blocks.append(TextBlock(lines=tuple(lines), page_index=page_idx))
        return blocks

    def _extract_metadata(self, doc: fitz.Document) -> dict[str, str | None]:
        """Extract PDF metadata, blank values as None."""
        raw = doc.metadata or {}
        return {key: (value or None) for key, value in raw.items()}
