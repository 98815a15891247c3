"""
Pytest configuration and fixtures for pdfmend tests.
"""

from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture(scope="session")
def sample_config():
    """Return a sample RepairConfig for testing."""
    from pdfmend import RepairConfig

    return RepairConfig()


@pytest.fixture
def make_vocabulary():
    """Build a Vocabulary from a word -> count mapping."""
    from pdfmend.repair.vocabulary import Vocabulary

    def _make(counts: dict[str, int], lowercase: bool = True) -> Vocabulary:
        vocab = Vocabulary(lowercase=lowercase)
        for word, count in counts.items():
            vocab.add(word, count)
        return vocab

    return _make


@pytest.fixture
def make_pdf(tmp_path) -> Callable[..., Path]:
    """Write a small PDF with one text insertion per block, one list per page."""
    import fitz

    def _make(pages: list[list[str]], name: str = "sample.pdf") -> Path:
        path = tmp_path / name
        doc = fitz.open()
        for blocks in pages:
            page = doc.new_page()
            y = 72
            for text in blocks:
                page.insert_text((72, y), text, fontsize=11)
                y += 14 * (text.count("\n") + 1) + 40
        doc.save(path)
        doc.close()
        return path

    return _make
