"""
Greedy repair pass for extractors that drop ligatures.

Some extraction tools silently lose ligature glyphs (ﬁ, ﬀ, ﬂ, ...), leaving
a word split at the spot where the glyph used to be, or clipped at its
start or end. This pass fixes such output against the document vocabulary,
one local and explainable decision at a time:

1. Anomalous words (longer than any known word, or with a lowercase letter
   directly followed by an uppercase one) are re-split at character level.
2. Adjacent pairs with an unknown member are merged when their direct
   concatenation, or their concatenation around a ligature expansion, is
   a known word.
3. Remaining unknown words are tried with each ligature expansion as a
   prefix and as a suffix.

The pass is left to right and never revisits a decision; it is not a
global optimization.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pdfmend.repair.ligatures import DEFAULT_LIGATURES, LigatureTable
from pdfmend.repair.segmenter import Segmenter
from pdfmend.repair.vocabulary import Vocabulary

logger = logging.getLogger(__name__)
trace_logger = logging.getLogger("pdfmend.trace")


# =============================================================================
# CONSTANTS
# =============================================================================

MIN_BOUNDARY_REPAIR_LENGTH = 2


# =============================================================================
# DATA STRUCTURES
# =============================================================================


@dataclass
class LigatureRepairStats:
    """Statistics for the ligature repair pass."""

    words_resplit: int = 0
    pairs_merged: int = 0
    ligatures_inserted: int = 0
    boundaries_repaired: int = 0

    @property
    def total(self) -> int:
        return self.words_resplit + self.pairs_merged + self.boundaries_repaired


# =============================================================================
# HELPERS
# =============================================================================


def has_case_break(word: str) -> bool:
    """True when a lowercase letter is immediately followed by an uppercase one."""
    return any(a.islower() and b.isupper() for a, b in zip(word, word[1:]))


# =============================================================================
# LIGATURE REPAIRER
# =============================================================================


class LigatureRepairer:
    """
    Merges and patches words around dropped ligatures.

    Attributes:
        segmenter: Segmenter used for character-level re-splits.
        table: Ligature table supplying expansion strings.
        trace: Whether to log decisions to the pdfmend.trace logger.

    Example:
        >>> vocab = Vocabulary()
        >>> vocab.add_pass(["efficient", "film"])
        >>> repairer = LigatureRepairer(Segmenter(vocab))
        >>> repairer.repair(["e", "cient", "lm"])
        ['efficient', 'film']
    """

    def __init__(
        self,
        segmenter: Segmenter,
        table: LigatureTable = DEFAULT_LIGATURES,
        trace: bool = False,
    ):
        self.segmenter = segmenter
        self.table = table
        self.trace = trace
        self.stats = LigatureRepairStats()

    @property
    def vocabulary(self) -> Vocabulary:
        return self.segmenter.vocabulary

    def is_known(self, word: str) -> bool:
        return word in self.vocabulary

    def repair(self, words: list[str]) -> list[str]:
        """
        Run the full repair pass over a segmented word list.

        Args:
            words: Words of one block, in order.

        Returns:
            Repaired words; unchanged where no repair applies.
        """
        words = self.resplit_anomalous(words)
        words = self.merge_pairs(words)
        return self.repair_boundaries(words)

    def resplit_anomalous(self, words: list[str]) -> list[str]:
        """Re-split oversized and run-on words at character level."""
        max_len = self.segmenter.max_word_length
        out: list[str] = []
        for word in words:
            if len(word) > max_len or has_case_break(word):
                pieces = self.segmenter.segment_text(word, force_chars=True).words
                if len(pieces) > 1:
                    self.stats.words_resplit += 1
                    self._trace("split: %s -> %s", word, " ".join(pieces))
                out.extend(pieces)
            else:
                out.append(word)
        return out

    def merge_pairs(self, words: list[str]) -> list[str]:
        """Merge adjacent pairs that only form a known word together."""
        out: list[str] = []
        i = 0
        while i < len(words):
            if i + 1 < len(words):
                merged = self._merge(words[i], words[i + 1])
                if merged is not None:
                    out.append(merged)
                    i += 2
                    continue
            out.append(words[i])
            i += 1
        return out

    def _merge(self, left: str, right: str) -> str | None:
        if self.is_known(left) and self.is_known(right):
            return None
        direct = left + right
        if self.is_known(direct):
            self.stats.pairs_merged += 1
            self._trace("merge: %s + %s -> %s", left, right, direct)
            return direct
        for ligature in self.table.expansions:
            candidate = left + ligature + right
            if self.is_known(candidate):
                self.stats.pairs_merged += 1
                self.stats.ligatures_inserted += 1
                self._trace("merge: %s +%s+ %s -> %s", left, ligature, right, candidate)
                return candidate
        return None

    def repair_boundaries(self, words: list[str]) -> list[str]:
        """Prefix or suffix a ligature to unknown words when that makes them known."""
        out: list[str] = []
        for word in words:
            if len(word) < MIN_BOUNDARY_REPAIR_LENGTH or self.is_known(word):
                out.append(word)
                continue
            out.append(self._patch_boundary(word))
        return out

    def _patch_boundary(self, word: str) -> str:
        for ligature in self.table.expansions:
            for candidate in (ligature + word, word + ligature):
                if self.is_known(candidate):
                    self.stats.boundaries_repaired += 1
                    self.stats.ligatures_inserted += 1
                    self._trace("ligature: %s -> %s", word, candidate)
                    return candidate
        return word

    def _trace(self, message: str, *args: str) -> None:
        logger.debug(message, *args)
        if self.trace:
            trace_logger.info(message, *args)
