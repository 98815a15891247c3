"""
pdfmend: Repair word segmentation in text extracted from PDFs.

PDF extractors split words into spaced letters, glue words together,
drop ligatures and break words at line ends. pdfmend builds a vocabulary
of the document from several independent extraction passes and uses it
to re-segment the text into the most probable sequence of real words.

Example:
    >>> import pdfmend
    >>> doc = pdfmend.convert("article.pdf")
    >>> print(doc.text)
    >>> doc.save("article.xml")

    >>> # Repair already extracted text
    >>> events = pdfmend.repair_text(
    ...     passes=[["R A P P E L", "rappel du cours"]],
    ...     items=[pdfmend.TextBlock(("R A P P E L",))],
    ... )

See README.md for the command line and configuration options.
"""

from pdfmend.config import ConversionConfig, RepairConfig
from pdfmend.convert import (
    convert,
    convert_batch,
    detect_format,
    supported_formats,
)
from pdfmend.exceptions import (
    ConfigurationError,
    ExtractionError,
    InputEncodingError,
    PdfMendError,
    SegmentationInvariantViolation,
    UnsupportedFormatError,
    VocabularyLoadError,
)
from pdfmend.models import (
    RepairedDocument,
    TagEvent,
    TextBlock,
    WordRun,
)
from pdfmend.repair import (
    Dehyphenator,
    LanguageModel,
    LigatureRepairer,
    LigatureTable,
    ParagraphAssembler,
    RepairPipeline,
    Segmenter,
    Vocabulary,
    repair_text,
)

__version__ = "0.1.0"
__all__ = [
    # Main API
    "convert",
    "convert_batch",
    "detect_format",
    "supported_formats",
    "repair_text",
    # Configuration
    "ConversionConfig",
    "RepairConfig",
    # Models
    "RepairedDocument",
    "TextBlock",
    "TagEvent",
    "WordRun",
    # Engine
    "RepairPipeline",
    "Vocabulary",
    "LanguageModel",
    "Segmenter",
    "Dehyphenator",
    "LigatureTable",
    "LigatureRepairer",
    "ParagraphAssembler",
    # Exceptions
    "PdfMendError",
    "ConfigurationError",
    "VocabularyLoadError",
    "SegmentationInvariantViolation",
    "InputEncodingError",
    "UnsupportedFormatError",
    "ExtractionError",
]
