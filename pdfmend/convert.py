"""
Document conversion orchestrator.

This module provides the main `convert()` function that turns a PDF into
a RepairedDocument by wiring together:
- PDFReader (extraction passes + primary blocks)
- RepairPipeline (vocabulary, segmentation, repair, paragraphs)
- XMLWriter (serialization, via RepairedDocument.save)
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from pdfmend.config import ConversionConfig
from pdfmend.exceptions import (
    ExtractionError,
    PdfMendError,
    SegmentationInvariantViolation,
    UnsupportedFormatError,
)
from pdfmend.models import RepairedDocument
from pdfmend.readers.pdf_reader import PDFReader, RawDocument
from pdfmend.repair.pipeline import RepairPipeline

logger = logging.getLogger(__name__)


def build_document(raw_doc: RawDocument, config: ConversionConfig) -> RepairedDocument:
    """
    Repair a RawDocument.

    Every configured extraction pass, and finally the primary extraction
    itself, is added to the vocabulary before any block is segmented.

    Args:
        raw_doc: The raw extracted PDF data
        config: Conversion configuration

    Returns:
        A RepairedDocument with the output event stream
    """
    pipeline = RepairPipeline(config.repair)
    warnings: list[str] = []

    for mode in config.passes:
        lines = raw_doc.extraction_pass(mode)
        if not lines:
            warnings.append(f"Extraction pass '{mode}' produced no text")
            continue
        pipeline.add_pass(lines)
    primary = raw_doc.primary_lines
    pipeline.add_pass(primary)

    pipeline.load_configured_lexicons("\n".join(primary))
    events = pipeline.process(raw_doc.iter_items())

    return RepairedDocument(
        events=events,
        source_path=str(raw_doc.source_path),
        metadata={**raw_doc.metadata, "page_count": raw_doc.page_count},
        stats=pipeline.stats,
        warnings=warnings,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════════════════


def convert(
    source: str | Path,
    config: ConversionConfig | None = None,
) -> RepairedDocument:
    """
    Convert a PDF to a repaired document.

    Args:
        source: Path to document file
        config: Conversion configuration (uses defaults if None)

    Returns:
        RepairedDocument with events, text and statistics

    Raises:
        FileNotFoundError: If source doesn't exist
        UnsupportedFormatError: If format not supported
        ExtractionError: If extraction fails (when on_extraction_error="raise")
        SegmentationInvariantViolation: Always; output would be corrupt
        VocabularyLoadError: If a configured lexicon cannot be read

    Example:
        >>> doc = convert("article.pdf")
        >>> print(doc.text[:100])
        >>> doc.save("article.xml")
    """
    source = Path(source)
    config = config or ConversionConfig()

    if not source.exists():
        raise FileNotFoundError(f"Source file not found: {source}")

    detect_format(source)

    try:
        raw_doc = PDFReader(modes=config.passes).read(source)
    except ExtractionError as e:
        if config.on_extraction_error == "warn":
            logger.warning("Extraction error for %s: %s", source, e)
            return RepairedDocument(
                events=[],
                source_path=str(source),
                warnings=[f"Extraction failed: {e}"],
            )
        raise

    return build_document(raw_doc, config)


def convert_batch(
    sources: list[str | Path],
    config: ConversionConfig | None = None,
    parallel: bool = False,
) -> Iterator[tuple[Path, RepairedDocument | Exception]]:
    """
    Convert multiple documents, yielding results as completed.

    Each document gets its own vocabulary; nothing is shared between them.

    Args:
        sources: Paths to document files
        config: Conversion configuration
        parallel: Accepted for API stability; processing is sequential

    Yields:
        (path, result) tuples where result is RepairedDocument or Exception
    """
    config = config or ConversionConfig()

    if parallel:
        logger.warning("Parallel processing not implemented, falling back to sequential")

    for source in sources:
        source = Path(source)
        try:
            yield (source, convert(source, config))
        except SegmentationInvariantViolation:
            raise
        except (PdfMendError, OSError) as e:
            if config.on_extraction_error == "skip":
                logger.info("Skipping %s: %s", source, e)
                continue
            yield (source, e)


def detect_format(path: str | Path) -> str:
    """
    Detect document format from file extension or magic bytes.

    Args:
        path: Path to document file

    Returns:
        Format string, one of supported_formats().

    Raises:
        UnsupportedFormatError: If the file is not in a supported format
    """
    path = Path(path)

    if path.suffix.lower() == ".pdf":
        return "pdf"

    # Try magic bytes for PDF
    try:
        with open(path, "rb") as f:
            if f.read(8).startswith(b"%PDF"):
                return "pdf"
    except OSError:
        pass

    raise UnsupportedFormatError(
        f"Format of '{path.name}' is not supported. Supported: {', '.join(supported_formats())}"
    )


def supported_formats() -> list[str]:
    """Return list of currently supported input formats."""
    return ["pdf"]
