"""
External lexicon sources for the document vocabulary.

- Word-list files: whitespace-delimited words, plain or compressed
  (.gz, .bz2, .xz), one or more per line.
- Built-in word lists shipped with pyspellchecker, one per language.
- Language detection (langdetect) to pick the built-in list automatically.
"""

from __future__ import annotations

import bz2
import gzip
import logging
import lzma
from collections.abc import Iterator
from pathlib import Path
from typing import IO

from pdfmend.exceptions import VocabularyLoadError

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# Languages pyspellchecker ships dictionaries for
SUPPORTED_LANGUAGES = {"en", "es", "fr", "pt", "de", "it", "ru", "ar", "lv", "eu", "nl", "fa"}
DEFAULT_LANGUAGE = "en"
MIN_DETECTION_LENGTH = 20

_OPENERS = {
    ".gz": gzip.open,
    ".bz2": bz2.open,
    ".xz": lzma.open,
    ".lzma": lzma.open,
}


# =============================================================================
# WORD-LIST FILES
# =============================================================================


def _open_text(path: Path) -> IO[str]:
    opener = _OPENERS.get(path.suffix.lower())
    if opener is None:
        return open(path, encoding="utf-8")
    return opener(path, "rt", encoding="utf-8")


def iter_lexicon(path: str | Path) -> Iterator[str]:
    """
    Yield the words of a lexicon file in order.

    Args:
        path: Plain or compressed word-list file.

    Yields:
        Whitespace-delimited words.

    Raises:
        VocabularyLoadError: If the file is missing, unreadable or corrupt.
    """
    path = Path(path)
    if not path.exists():
        raise VocabularyLoadError(f"Lexicon not found: {path}")

    try:
        with _open_text(path) as f:
            for line in f:
                yield from line.split()
    except (OSError, EOFError, lzma.LZMAError, UnicodeDecodeError) as e:
        raise VocabularyLoadError(f"Failed to read lexicon {path}: {e}") from e


def load_lexicon(path: str | Path) -> list[str]:
    """Read a whole lexicon file into memory."""
    words = list(iter_lexicon(path))
    logger.info("Loaded %d lexicon entries from %s", len(words), path)
    return words


# =============================================================================
# BUILT-IN WORD LISTS
# =============================================================================


def builtin_lexicon(language: str = DEFAULT_LANGUAGE) -> list[str]:
    """
    Words of pyspellchecker's dictionary for a language.

    Args:
        language: Two-letter language code.

    Returns:
        Known words in dictionary order.

    Raises:
        VocabularyLoadError: If no dictionary exists for the language.
    """
    if language not in SUPPORTED_LANGUAGES:
        raise VocabularyLoadError(
            f"No built-in lexicon for {language!r}; supported: {sorted(SUPPORTED_LANGUAGES)}"
        )

    from spellchecker import SpellChecker

    try:
        spell = SpellChecker(language=language)
    except (ValueError, OSError) as e:
        raise VocabularyLoadError(f"Failed to load built-in lexicon {language!r}: {e}") from e

    words = list(spell.word_frequency.keys())
    logger.info("Loaded %d built-in lexicon entries for %s", len(words), language)
    return words


# =============================================================================
# LANGUAGE DETECTION
# =============================================================================


def detect_language(text: str) -> str:
    """
    Detect the dominant language of text using langdetect.

    Falls back to English for short text or languages without a
    built-in lexicon.
    """
    from langdetect import DetectorFactory
    from langdetect import detect as langdetect_detect
    from langdetect.lang_detect_exception import LangDetectException

    # Make language detection deterministic
    DetectorFactory.seed = 0

    if len(text.strip()) < MIN_DETECTION_LENGTH:
        return DEFAULT_LANGUAGE
    try:
        lang = langdetect_detect(text)
    except LangDetectException as e:
        logger.warning("Language detection failed: %s", e)
        return DEFAULT_LANGUAGE
    return lang if lang in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE
