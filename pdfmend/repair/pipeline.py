"""
Repair Pipeline Orchestrator.

This module provides the main pipeline that repairs one document:
1. Collection: extraction passes (and lexicons) fill the vocabulary
2. Segmentation: each primary block is dehyphenated and re-segmented
3. Ligature repair: greedy clean-up for sources that drop ligatures
4. Assembly: blocks are merged into paragraphs

The vocabulary is created per document and shared by every stage.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Sequence
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from pdfmend.config import RepairConfig
from pdfmend.exceptions import InputEncodingError
from pdfmend.models import InputItem, OutputEvent, TagEvent, TextBlock
from pdfmend.repair.dehyphenate import Dehyphenator
from pdfmend.repair.lexicon import builtin_lexicon, detect_language, load_lexicon
from pdfmend.repair.ligature_repair import LigatureRepairer
from pdfmend.repair.ligatures import DEFAULT_LIGATURES, LigatureTable
from pdfmend.repair.paragraphs import ParagraphAssembler
from pdfmend.repair.segmenter import Segmenter
from pdfmend.repair.vocabulary import Vocabulary

logger = logging.getLogger(__name__)


# =============================================================================
# DATA STRUCTURES
# =============================================================================


@dataclass
class PipelineStats:
    """Aggregate statistics for one document."""

    passes_added: int = 0
    vocabulary_size: int = 0
    max_word_length: int = 1
    blocks_processed: int = 0
    tokens_in: int = 0
    words_out: int = 0
    merges: int = 0
    splits: int = 0  # Words added beyond the input token count
    line_joins_dehyphenated: int = 0
    words_dehyphenated: int = 0
    ligature_repairs: int = 0
    paragraphs: int = 0
    processing_time_ms: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# =============================================================================
# REPAIR PIPELINE
# =============================================================================


@dataclass
class RepairPipeline:
    """
    Main segmentation and repair pipeline for one document.

    Attributes:
        config: Behavioural flags.
        vocabulary: Document vocabulary; created empty when not given.
        table: Ligature table used for normalization and repair.

    Example:
        >>> pipeline = RepairPipeline()
        >>> pipeline.add_pass(["The combustion of fuel", "is fast."])
        >>> pipeline.repair_block(TextBlock(("The com bus tion of fuel",)))
        ['The', 'combustion', 'of', 'fuel']
    """

    config: RepairConfig | None = field(default_factory=RepairConfig)
    vocabulary: Vocabulary | None = None
    table: LigatureTable = DEFAULT_LIGATURES

    def __post_init__(self) -> None:
        """Initialize pipeline components around one shared vocabulary."""
        if self.config is None:
            self.config = RepairConfig()
        if self.vocabulary is None:
            self.vocabulary = Vocabulary(lowercase=self.config.lowercase_fold)

        trace = self.config.verbose_trace
        self.segmenter = Segmenter(self.vocabulary, trace=trace)
        self.dehyphenator = Dehyphenator(self.segmenter, trace=trace)
        self.ligature_repairer = LigatureRepairer(self.segmenter, self.table, trace=trace)
        self.stats = PipelineStats()

    # -------------------------------------------------------------------------
    # Collection
    # -------------------------------------------------------------------------

    def add_pass(self, lines: Iterable[str]) -> None:
        """
        Add one extraction pass of the document and rebuild the model.

        Tokens run across line ends, so a line-final hyphenated fragment
        is paired with the first word of the next line.
        """
        tokens: list[str] = []
        for line in lines:
            tokens.extend(self.table.expand(_ensure_text(line)).split())
        self.vocabulary.add_pass(tokens)
        self.stats.passes_added += 1
        self._refresh()

    def load_lexicon(self, path: str | Path) -> None:
        """Add an external word-list file to the vocabulary."""
        self.vocabulary.add_lexicon(load_lexicon(path))
        self._refresh()

    def load_builtin_lexicon(self, language: str, sample_text: str = "") -> str:
        """
        Add pyspellchecker's word list for a language.

        Args:
            language: Language code, or "auto" to detect it from sample_text.
            sample_text: Document text used for detection.

        Returns:
            The language whose lexicon was loaded.
        """
        if language == "auto":
            language = detect_language(sample_text)
            logger.info("Detected document language: %s", language)
        self.vocabulary.add_lexicon(builtin_lexicon(language))
        self._refresh()
        return language

    def load_configured_lexicons(self, sample_text: str = "") -> None:
        """Load whichever lexicons the configuration names."""
        if self.config.lexicon_path is not None:
            self.load_lexicon(self.config.lexicon_path)
        if self.config.builtin_lexicon:
            self.load_builtin_lexicon(self.config.builtin_lexicon, sample_text)

    def _refresh(self) -> None:
        model = self.segmenter.refresh()
        self.stats.vocabulary_size = len(self.vocabulary)
        self.stats.max_word_length = model.max_word_length

    # -------------------------------------------------------------------------
    # Repair
    # -------------------------------------------------------------------------

    def repair_block(self, block: TextBlock) -> list[str]:
        """
        Repair the text of one block into a word list.

        Args:
            block: Primary-extraction block with its raw lines.

        Returns:
            Repaired words in order.

        Raises:
            InputEncodingError: If the block content is not valid text.
            SegmentationInvariantViolation: If segmentation fails internally.
        """
        lines = [self.table.expand(_ensure_text(line)) for line in block.lines]
        tokens_in = sum(len(line.split()) for line in lines)

        if self.config.skip_merge:
            words = [token for line in lines for token in line.split()]
        elif self.config.skip_dehyphenation:
            words = []
            for line in lines:
                result = self.segmenter.segment_text(
                    line, force_chars=self.config.force_character_split
                )
                words.extend(result.words)
        else:
            words = self.dehyphenator.segment_lines(
                lines, force_chars=self.config.force_character_split
            )

        if not self.config.skip_dehyphenation:
            words = self.dehyphenator.apply(words)

        if self.config.repair_ligatures and not self.config.skip_merge:
            words = self.ligature_repairer.repair(words)

        self.stats.blocks_processed += 1
        self.stats.tokens_in += tokens_in
        self.stats.words_out += len(words)
        self.stats.splits += max(0, len(words) - tokens_in)
        return words

    def process(self, items: Iterable[InputItem]) -> list[OutputEvent]:
        """
        Repair a document's tagged blocks into an output event stream.

        Args:
            items: Structural tag events and text blocks in document order.

        Returns:
            Tag events and word runs, ready for serialization.
        """
        start_time = time.time()
        assembler = ParagraphAssembler(
            auto_merge=self.config.auto_merge_paragraphs,
            never_split=self.config.never_split_paragraphs,
            trace=self.config.verbose_trace,
        )
        for item in items:
            if isinstance(item, TagEvent):
                assembler.add_tag(item)
            else:
                assembler.add_block(item, self.repair_block(item))
        events = assembler.finish()

        self.stats.paragraphs += assembler.paragraphs
        self.stats.merges = self.segmenter.stats.merges
        self.stats.line_joins_dehyphenated = self.dehyphenator.stats.line_joins_dehyphenated
        self.stats.words_dehyphenated = self.dehyphenator.stats.words_dehyphenated
        self.stats.ligature_repairs = self.ligature_repairer.stats.total
        self.stats.processing_time_ms += (time.time() - start_time) * 1000

        logger.info(
            "Repaired %d blocks: %d tokens -> %d words, %d merges, %d paragraphs",
            self.stats.blocks_processed,
            self.stats.tokens_in,
            self.stats.words_out,
            self.stats.merges,
            self.stats.paragraphs,
        )
        return events


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def _ensure_text(value: str | bytes) -> str:
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InputEncodingError(f"Block is not valid UTF-8: {e}") from e
    if not isinstance(value, str):
        raise InputEncodingError(f"Expected text, got {type(value).__name__}")
    return value


def repair_text(
    passes: Sequence[Sequence[str]],
    items: Iterable[InputItem],
    config: RepairConfig | None = None,
) -> list[OutputEvent]:
    """
    Repair text in one call.

    Args:
        passes: Extraction passes, each a sequence of lines.
        items: Tag events and text blocks of the primary extraction.
        config: Behavioural flags (defaults when None).

    Returns:
        Output event stream.
    """
    pipeline = RepairPipeline(config or RepairConfig())
    for lines in passes:
        pipeline.add_pass(lines)
    sample = "\n".join(passes[0]) if passes else ""
    pipeline.load_configured_lexicons(sample)
    return pipeline.process(items)
