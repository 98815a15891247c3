"""
Unit tests for line-break and interior hyphen repair.
"""

import pytest

from pdfmend.repair.dehyphenate import Dehyphenator
from pdfmend.repair.segmenter import Segmenter


@pytest.fixture
def make_dehyphenator(make_vocabulary):
    def _make(counts, lowercase=True):
        return Dehyphenator(Segmenter(make_vocabulary(counts, lowercase=lowercase)))

    return _make


class TestLineJoins:
    """Tests for Dehyphenator.segment_lines."""

    def test_unknown_word_rejoined(self, make_dehyphenator):
        """Dropping the hyphen wins when it yields fewer words."""
        dehyphenator = make_dehyphenator({"et": 1})

        words = dehyphenator.segment_lines(["combus-", "tibles et"])

        assert words == ["combustibles", "et"]
        assert dehyphenator.stats.line_joins_tried == 1
        assert dehyphenator.stats.line_joins_dehyphenated == 1

    def test_known_word_rejoined(self, make_dehyphenator):
        dehyphenator = make_dehyphenator({"combustibles": 1, "et": 1})

        assert dehyphenator.segment_lines(["combus-", "tibles et"]) == ["combustibles", "et"]

    def test_compound_hyphen_kept(self, make_dehyphenator):
        """On a tie the hyphenated reading is kept."""
        dehyphenator = make_dehyphenator({"well-known": 2})

        words = dehyphenator.segment_lines(["well-", "known"])

        assert words == ["well-known"]
        assert dehyphenator.stats.line_joins_dehyphenated == 0

    def test_chained_hyphens(self, make_dehyphenator):
        """Joins continue while the chosen text still ends in a hyphen."""
        dehyphenator = make_dehyphenator({"q": 1})

        words = dehyphenator.segment_lines(["ex-", "tra-", "ordinary"])

        assert words == ["extraordinary"]
        assert dehyphenator.stats.line_joins_tried == 2

    def test_joined_word_not_split_into_characters(self, make_dehyphenator):
        """A join that leaves no space is still compared word for word."""
        dehyphenator = make_dehyphenator({"a": 5, "an": 5})

        words = dehyphenator.segment_lines(["ban-", "ana"])

        assert words == ["banana"]
        assert dehyphenator.stats.line_joins_dehyphenated == 1

    def test_trailing_hyphen_on_last_line(self, make_dehyphenator):
        dehyphenator = make_dehyphenator({"et": 1})

        assert dehyphenator.segment_lines(["combus-"]) == ["combus-"]

    def test_blank_lines_ignored(self, make_dehyphenator):
        dehyphenator = make_dehyphenator({"et": 1})

        words = dehyphenator.segment_lines(["combus-", "   ", "tibles et"])

        assert words == ["combustibles", "et"]

    def test_lines_without_hyphen_segmented_separately(self, make_dehyphenator):
        dehyphenator = make_dehyphenator({"annual": 1, "report": 1})

        words = dehyphenator.segment_lines(["an nual", "re port"])

        assert words == ["annual", "report"]
        assert dehyphenator.stats.line_joins_tried == 0

    def test_trials_do_not_learn(self, make_dehyphenator):
        """Only the final segmentation of a join teaches the vocabulary."""
        dehyphenator = make_dehyphenator({"combustibles": 1, "et": 1})

        words = dehyphenator.segment_lines(["com bus-", "tibles et"])

        assert words == ["combustibles", "et"]
        assert dehyphenator.vocabulary["combustibles"] == 2


class TestWordDehyphenation:
    """Tests for Dehyphenator.dehyphenate_word."""

    def test_known_joined_form(self, make_dehyphenator):
        dehyphenator = make_dehyphenator({"combustibles": 1})

        assert dehyphenator.dehyphenate_word("combus-tibles") == "combustibles"
        assert dehyphenator.stats.words_dehyphenated == 1

    def test_capitalized_first_letter_tolerated(self, make_dehyphenator):
        """Without case folding, the lowercased-initial form is also checked."""
        dehyphenator = make_dehyphenator({"combustibles": 1}, lowercase=False)

        assert dehyphenator.dehyphenate_word("Combus-tibles") == "Combustibles"

    def test_unknown_joined_form_unchanged(self, make_dehyphenator):
        dehyphenator = make_dehyphenator({"ray": 1})

        assert dehyphenator.dehyphenate_word("x-ray") == "x-ray"

    def test_edge_hyphens_unchanged(self, make_dehyphenator):
        """Leading or trailing hyphens are not interior hyphens."""
        dehyphenator = make_dehyphenator({"word": 1})

        assert dehyphenator.dehyphenate_word("-word") == "-word"
        assert dehyphenator.dehyphenate_word("word-") == "word-"
        assert dehyphenator.dehyphenate_word("--") == "--"

    def test_apply(self, make_dehyphenator):
        dehyphenator = make_dehyphenator({"combustibles": 1})

        words = dehyphenator.apply(["les", "combus-tibles", "well-known"])

        assert words == ["les", "combustibles", "well-known"]
