"""
Line-break and interior hyphen repair.

Two heuristics:
1. Line joins: a line ending in a hyphen is segmented both with the hyphen
   kept and with it removed; the reading with strictly fewer output words
   wins (fewer words means more tokens were recognized as known words).
2. Standalone tokens: a word with an interior hyphen whose hyphen-free form
   is known is replaced by that form.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from pdfmend.repair.segmenter import Segmentation, Segmenter
from pdfmend.repair.vocabulary import HYPHEN, Vocabulary

logger = logging.getLogger(__name__)
trace_logger = logging.getLogger("pdfmend.trace")


# =============================================================================
# CONSTANTS
# =============================================================================

# At least one hyphen with a non-hyphen character on both sides
INTERIOR_HYPHEN_PATTERN = re.compile(r"[^-]-+[^-]")


# =============================================================================
# DATA STRUCTURES
# =============================================================================


@dataclass
class DehyphenationStats:
    """Statistics for dehyphenation."""

    line_joins_tried: int = 0
    line_joins_dehyphenated: int = 0
    words_dehyphenated: int = 0


# =============================================================================
# DEHYPHENATOR
# =============================================================================


class Dehyphenator:
    """
    Decides between hyphenated and dehyphenated readings of line-wrapped text.

    Attributes:
        segmenter: Segmenter shared with the rest of the pipeline.
        trace: Whether to log decisions to the pdfmend.trace logger.

    Example:
        >>> vocab = Vocabulary()
        >>> vocab.add_pass(["combustibles", "et"])
        >>> dehyphenator = Dehyphenator(Segmenter(vocab))
        >>> dehyphenator.segment_lines(["combus-", "tibles et"])
        ['combustibles', 'et']
    """

    def __init__(self, segmenter: Segmenter, trace: bool = False):
        self.segmenter = segmenter
        self.trace = trace
        self.stats = DehyphenationStats()

    @property
    def vocabulary(self) -> Vocabulary:
        return self.segmenter.vocabulary

    def segment_lines(self, lines: Iterable[str], force_chars: bool = False) -> list[str]:
        """
        Segment the lines of one block, rejoining line-wrap hyphenation.

        A line ending in a hyphen is tried against the following line,
        and the chain continues while the chosen text still ends in a
        hyphen. Trials do not teach the vocabulary; only the final
        segmentation of each chain does.

        Args:
            lines: Raw lines of one logical block.
            force_chars: Always use character-level tokens.

        Returns:
            Repaired words of the whole block.
        """
        pending = [line for line in lines if line.strip()]
        words: list[str] = []
        index = 0
        while index < len(pending):
            text = pending[index].rstrip()
            index += 1
            joined = False
            while text.endswith(HYPHEN) and index < len(pending):
                text = self._choose_join(text, pending[index].strip(), force_chars)
                index += 1
                joined = True
            if joined:
                result = self._segment(text, force_chars)
            else:
                result = self.segmenter.segment_text(text, force_chars=force_chars)
            words.extend(result.words)
        return words

    def _segment(self, text: str, force_chars: bool, learn: bool = True) -> Segmentation:
        # Joined text keeps word tokens even when the join removed its only space
        if force_chars:
            return self.segmenter.segment_text(text, force_chars=True, learn=learn)
        return self.segmenter.segment(text.split(), learn=learn)

    def _choose_join(self, text: str, next_line: str, force_chars: bool) -> str:
        hyphenated = text + "\n" + next_line
        dehyphenated = text[:-1] + next_line
        self.stats.line_joins_tried += 1

        kept = self._segment(hyphenated, force_chars, learn=False)
        dropped = self._segment(dehyphenated, force_chars, learn=False)
        if len(dropped.words) < len(kept.words):
            self.stats.line_joins_dehyphenated += 1
            if self.trace:
                trace_logger.info(
                    "dehyphenate: %r + %r -> %s", text, next_line, " ".join(dropped.words)
                )
            return dehyphenated
        if self.trace:
            trace_logger.info("keep hyphen: %r + %r", text, next_line)
        return hyphenated

    def dehyphenate_word(self, word: str) -> str:
        """
        Remove interior hyphens when the joined word is known.

        Sentence-initial capitals are tolerated by also checking the form
        with only its first letter lowercased.

        Example:
            >>> dehyphenator.dehyphenate_word("Combus-tibles")
            'Combustibles'
        """
        if not INTERIOR_HYPHEN_PATTERN.search(word):
            return word
        joined = word.replace(HYPHEN, "")
        if not joined:
            return word
        candidates = (joined, joined[0].lower() + joined[1:])
        if any(candidate in self.vocabulary for candidate in candidates):
            self.stats.words_dehyphenated += 1
            logger.debug("Dehyphenated %s -> %s", word, joined)
            if self.trace:
                trace_logger.info("dehyphenate word: %s -> %s", word, joined)
            return joined
        return word

    def apply(self, words: Iterable[str]) -> list[str]:
        """Apply the standalone-token heuristic to every word."""
        return [self.dehyphenate_word(word) for word in words]
