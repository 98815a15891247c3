"""
Document vocabulary and unigram language model.

The vocabulary is a multiset of word counts collected from several
independent extraction passes over the same document (and optionally an
external lexicon). The language model is an immutable log-probability
snapshot of it with additive smoothing and a single backoff value for
unknown words.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

SMOOTHING = 0.1
UNKNOWN_KEY = "__unknown__"
HYPHEN = "-"


# =============================================================================
# LANGUAGE MODEL
# =============================================================================


@dataclass(frozen=True)
class LanguageModel:
    """
    Frozen unigram snapshot of a Vocabulary.

    ``prob(w) = log(count(w)) - log(total + SMOOTHING)`` where
    ``total = SMOOTHING + sum(counts)``; the reserved ``__unknown__`` entry
    is ``log(SMOOTHING) - log(total)``.

    Attributes:
        logprobs: Log-probability per (already case-folded) word.
        total: Smoothed total count the snapshot was taken with.
        max_word_length: Longest word in the snapshot, at least 1.
    """

    logprobs: Mapping[str, float]
    total: float
    max_word_length: int = 1

    @classmethod
    def from_counts(cls, counts: Mapping[str, int]) -> LanguageModel:
        total = SMOOTHING + sum(counts.values())
        denominator = math.log(total + SMOOTHING)
        logprobs = {word: math.log(count) - denominator for word, count in counts.items()}
        logprobs[UNKNOWN_KEY] = math.log(SMOOTHING) - math.log(total)
        longest = max((len(word) for word in counts), default=1)
        return cls(
            logprobs=MappingProxyType(logprobs),
            total=total,
            max_word_length=max(longest, 1),
        )

    @property
    def unknown_logprob(self) -> float:
        return self.logprobs[UNKNOWN_KEY]

    def logprob(self, word: str) -> float | None:
        """Log-probability of a known word, None when unknown."""
        if word == UNKNOWN_KEY:
            return None
        return self.logprobs.get(word)

    def logprob_for_count(self, count: int) -> float:
        """Score a count against this snapshot's frozen total."""
        return math.log(count) - math.log(self.total + SMOOTHING)

    def __contains__(self, word: str) -> bool:
        return word != UNKNOWN_KEY and word in self.logprobs

    def __len__(self) -> int:
        return len(self.logprobs) - 1


# =============================================================================
# VOCABULARY
# =============================================================================


@dataclass
class Vocabulary:
    """
    Mutable multiset of word occurrences for one document.

    Counts are always at least 1 for a present key; absence means
    unknown. With ``lowercase`` set every insertion and lookup is folded
    to lower case.

    Example:
        >>> vocab = Vocabulary()
        >>> vocab.add_pass(["Com-", "bustion", "and", "combustion"])
        >>> vocab["combustion"]
        2
        >>> vocab.longest_word_length()
        10
    """

    lowercase: bool = True
    counts: Counter[str] = field(default_factory=Counter)

    def normalize(self, word: str) -> str:
        return word.lower() if self.lowercase else word

    def add(self, word: str, count: int = 1) -> None:
        """Increment a word's count."""
        if not word or count < 1:
            return
        self.counts[self.normalize(word)] += count

    def add_pass(self, tokens: Iterable[str]) -> None:
        """
        Add one extraction pass.

        Every token is counted; a token ending in a hyphen additionally
        registers its de-hyphenated join with the following token, which
        captures line-wrapped words printed literally by an extractor.

        Args:
            tokens: Whitespace-delimited tokens in document order.
        """
        previous: str | None = None
        added = 0
        for token in tokens:
            self.add(token)
            added += 1
            if previous is not None and len(previous) > 1 and previous.endswith(HYPHEN):
                self.add(previous[:-1] + token)
            previous = token
        logger.debug("Added pass of %d tokens; vocabulary size %d", added, len(self.counts))

    def add_lexicon(self, entries: Iterable[str]) -> None:
        """Add words from an external lexicon with the same increment semantics."""
        before = len(self.counts)
        for entry in entries:
            self.add(entry)
        logger.info("Lexicon added %d new words", len(self.counts) - before)

    def build_model(self) -> LanguageModel:
        """Build a language model snapshot; idempotent for an unchanged vocabulary."""
        return LanguageModel.from_counts(self.counts)

    def longest_word_length(self) -> int:
        return max((len(word) for word in self.counts), default=1) or 1

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def most_common(self, n: int | None = None) -> list[tuple[str, int]]:
        return self.counts.most_common(n)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.normalize(word) in self.counts

    def __getitem__(self, word: str) -> int:
        return self.counts.get(self.normalize(word), 0)

    def __len__(self) -> int:
        return len(self.counts)

    def __iter__(self) -> Iterator[str]:
        return iter(self.counts)
