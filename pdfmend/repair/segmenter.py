"""
Maximum-likelihood word segmentation.

Re-segments a token stream (whitespace words or single characters) into
the most probable sequence of words under the document's unigram model,
using a Viterbi search whose window is bounded by the longest known word.

Words chosen by merging several tokens are fed back into the live
vocabulary, so later blocks of the same document recognize them directly.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from pdfmend.exceptions import SegmentationInvariantViolation
from pdfmend.repair.vocabulary import LanguageModel, Vocabulary

logger = logging.getLogger(__name__)
trace_logger = logging.getLogger("pdfmend.trace")


# =============================================================================
# CONSTANTS
# =============================================================================

# An interior hyphen flanked by non-hyphen characters; greedy, so the last one
INTERIOR_HYPHEN_PATTERN = re.compile(r"^(.*[^-])-([^-].*)$", re.DOTALL)
WHITESPACE_PATTERN = re.compile(r"\s")


# =============================================================================
# DATA STRUCTURES
# =============================================================================


@dataclass
class Segmentation:
    """Result of segmenting one token sequence."""

    words: list[str]
    score: float
    tokens: list[str]
    merged: list[str] = field(default_factory=list)  # Words built from several tokens

    def __len__(self) -> int:
        return len(self.words)


@dataclass
class SegmenterStats:
    """Statistics for segmentation."""

    runs: int = 0
    tokens_in: int = 0
    words_out: int = 0
    merges: int = 0
    words_learned: int = 0


# =============================================================================
# TOKENIZATION
# =============================================================================


def tokenize(text: str, force_chars: bool = False) -> list[str]:
    """
    Split text into segmentation tokens.

    Text with internal whitespace is split into words; text without any
    (a sign that the extractor lost word boundaries) or any text when
    ``force_chars`` is set is split into single characters.

    Example:
        >>> tokenize("R A P P E L")
        ['R', 'A', 'P', 'P', 'E', 'L']
        >>> tokenize("thequickfox")[:3]
        ['t', 'h', 'e']
    """
    stripped = text.strip()
    if not stripped:
        return []
    if force_chars or not WHITESPACE_PATTERN.search(stripped):
        return [ch for ch in stripped if not ch.isspace()]
    return stripped.split()


# =============================================================================
# SEGMENTER
# =============================================================================


class Segmenter:
    """
    Bounded-window Viterbi segmenter over a document vocabulary.

    The model is a frozen snapshot and must be refreshed after the
    vocabulary changes materially (after each extraction pass). Words
    the segmenter itself learns between refreshes are scored against the
    snapshot's total, so they count as known immediately.

    Attributes:
        vocabulary: Live document vocabulary (also receives learned words).
        model: Current language model snapshot.
        trace: Whether to log merge decisions to the pdfmend.trace logger.

    Example:
        >>> vocab = Vocabulary()
        >>> vocab.add_pass(["rappel"] * 5)
        >>> segmenter = Segmenter(vocab)
        >>> segmenter.segment(list("RAPPEL")).words
        ['RAPPEL']
    """

    def __init__(
        self,
        vocabulary: Vocabulary,
        model: LanguageModel | None = None,
        trace: bool = False,
    ):
        self.vocabulary = vocabulary
        self.trace = trace
        self.stats = SegmenterStats()
        self.model = model if model is not None else vocabulary.build_model()

    def refresh(self) -> LanguageModel:
        """Rebuild the model snapshot from the current vocabulary."""
        self.model = self.vocabulary.build_model()
        logger.debug(
            "Rebuilt model: %d words, max word length %d",
            len(self.model),
            self.model.max_word_length,
        )
        return self.model

    @property
    def max_word_length(self) -> int:
        return max(self.model.max_word_length, 1)

    def _logprob(self, key: str) -> float | None:
        logprob = self.model.logprob(key)
        if logprob is not None:
            return logprob
        count = self.vocabulary.counts.get(key, 0)
        if count:
            return self.model.logprob_for_count(count)
        return None

    def _is_known(self, key: str) -> bool:
        return key in self.model or key in self.vocabulary.counts

    def normalize_hyphen(self, span: str) -> str:
        """Drop an interior hyphen when the joined form is a known word."""
        match = INTERIOR_HYPHEN_PATTERN.match(span)
        if match:
            joined = match.group(1) + match.group(2)
            if self._is_known(self.vocabulary.normalize(joined)):
                return joined
        return span

    def segment(self, tokens: list[str], learn: bool = True) -> Segmentation:
        """
        Find the most probable partition of tokens into words.

        Cut point 0 is a virtual start. For every cut ``j`` the best
        predecessor ``i`` (``j - i <= max_word_length``) is kept; on equal
        scores the first writer wins. Spans longer than one token are only
        admissible when known; a single unknown token is charged the
        backoff probability.

        Args:
            tokens: Atomic tokens in order.
            learn: Add chosen multi-token words to the vocabulary and count
                the run in stats. Trial runs pass False.

        Returns:
            Segmentation with words in left-to-right order.

        Raises:
            SegmentationInvariantViolation: If no path reaches the end.
        """
        n = len(tokens)
        if n == 0:
            return Segmentation(words=[], score=0.0, tokens=[])

        max_len = self.max_word_length
        unknown = self.model.unknown_logprob
        scores: list[float | None] = [None] * (n + 1)
        back: list[int] = [-1] * (n + 1)
        scores[0] = 0.0

        for j in range(1, n + 1):
            for i in range(max(0, j - max_len), j):
                base = scores[i]
                if base is None:
                    continue
                single = j - i == 1
                span = "".join(tokens[i:j])
                if len(span) > max_len:
                    if not single:
                        continue
                    logprob = None
                else:
                    key = self.vocabulary.normalize(self.normalize_hyphen(span))
                    logprob = self._logprob(key)
                if logprob is None:
                    if not single:
                        continue
                    logprob = unknown
                score = base + logprob
                current = scores[j]
                if current is None or score > current:
                    scores[j] = score
                    back[j] = i

        if scores[n] is None:
            raise SegmentationInvariantViolation(
                f"No segmentation path reaches token {n} "
                f"(max word length {max_len}, {len(self.model)} known words)"
            )

        spans: list[tuple[int, int]] = []
        j = n
        while j > 0:
            i = back[j]
            if i < 0 or i >= j:
                raise SegmentationInvariantViolation(f"Broken predecessor chain at cut {j}")
            spans.append((i, j))
            j = i
        spans.reverse()

        words: list[str] = []
        merged: list[str] = []
        for i, j in spans:
            word = self.normalize_hyphen("".join(tokens[i:j]))
            words.append(word)
            if j - i > 1:
                merged.append(word)
                if learn:
                    self.vocabulary.add(word)
                    self.stats.words_learned += 1
                if self.trace:
                    trace_logger.info("merge: %s -> %s", " ".join(tokens[i:j]), word)

        if learn:
            self.stats.runs += 1
            self.stats.tokens_in += n
            self.stats.words_out += len(words)
            self.stats.merges += len(merged)
        return Segmentation(words=words, score=scores[n], tokens=list(tokens), merged=merged)

    def segment_text(
        self,
        text: str,
        force_chars: bool = False,
        learn: bool = True,
    ) -> Segmentation:
        """
        Tokenize and segment text.

        In character mode, consecutive unknown single characters on the
        winning path are glued back together so an unknown word stays one
        opaque word instead of falling apart into letters.
        """
        stripped = text.strip()
        char_mode = force_chars or (bool(stripped) and not WHITESPACE_PATTERN.search(stripped))
        tokens = tokenize(text, force_chars=force_chars)
        result = self.segment(tokens, learn=learn)
        if char_mode and len(result.words) > 1:
            result.words = self._rejoin_unknown_chars(result.words)
        return result

    def _rejoin_unknown_chars(self, words: list[str]) -> list[str]:
        out: list[str] = []
        pending = ""
        for word in words:
            if len(word) == 1 and not self._is_known(self.vocabulary.normalize(word)):
                pending += word
                continue
            if pending:
                out.append(pending)
                pending = ""
            out.append(word)
        if pending:
            out.append(pending)
        return out
