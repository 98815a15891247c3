"""
Configuration for pdfmend text repair and document conversion.

See README.md for a description of every option.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from pdfmend.exceptions import ConfigurationError

# Extraction passes the PDF reader knows how to produce
EXTRACTION_MODES = ("text", "sorted", "words")


@dataclass
class RepairConfig:
    """
    Behavioural flags for the segmentation and repair engine.

    All options have sensible defaults; the engine merges, splits and
    dehyphenates unless told otherwise.

    Example:
        >>> config = RepairConfig(repair_ligatures=True, verbose_trace=True)
        >>> pipeline = RepairPipeline(config)
    """

    # Vocabulary
    lowercase_fold: bool = True
    lexicon_path: Path | None = None  # Plain, .gz, .bz2 or .xz word list
    builtin_lexicon: str | None = None  # pyspellchecker language code or "auto"

    # Repair stages
    skip_merge: bool = False  # Pass tokens through unchanged
    skip_dehyphenation: bool = False
    force_character_split: bool = False
    repair_ligatures: bool = False  # Primary source is known to drop ligatures

    # Paragraph assembly
    auto_merge_paragraphs: bool = True
    never_split_paragraphs: bool = False  # Close only at non-paragraph tags

    # Diagnostics (pdfmend.trace logger, never the primary output)
    verbose_trace: bool = False

    def __post_init__(self):
        """Validate configuration."""
        if self.force_character_split and self.skip_merge:
            raise ConfigurationError(
                "force_character_split requires merging; "
                "it cannot be combined with skip_merge"
            )
        if self.never_split_paragraphs and not self.auto_merge_paragraphs:
            raise ConfigurationError(
                "never_split_paragraphs needs auto_merge_paragraphs enabled"
            )
        if self.lexicon_path is not None:
            self.lexicon_path = Path(self.lexicon_path)


@dataclass
class ConversionConfig:
    """
    Configuration for converting a PDF into repaired XML.

    Example:
        >>> config = ConversionConfig(
        ...     passes=("text", "words"),
        ...     repair=RepairConfig(repair_ligatures=True),
        ... )
        >>> doc = pdfmend.convert("article.pdf", config)
    """

    # Extraction passes feeding the document vocabulary
    passes: tuple[str, ...] = EXTRACTION_MODES

    # Error handling
    on_extraction_error: Literal["raise", "warn", "skip"] = "warn"

    repair: RepairConfig = field(default_factory=RepairConfig)

    def __post_init__(self):
        """Validate configuration."""
        self.passes = tuple(self.passes)
        unknown = [mode for mode in self.passes if mode not in EXTRACTION_MODES]
        if unknown:
            raise ConfigurationError(
                f"passes must be drawn from {EXTRACTION_MODES}, got {unknown!r}"
            )

        valid_error_policies = ("raise", "warn", "skip")
        if self.on_extraction_error not in valid_error_policies:
            raise ConfigurationError(
                f"on_extraction_error must be one of {valid_error_policies}, "
                f"got {self.on_extraction_error!r}"
            )
