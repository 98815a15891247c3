"""
Unit tests for the ligature table and the ligature repair pass.
"""

from pdfmend.repair.ligature_repair import LigatureRepairer, has_case_break
from pdfmend.repair.ligatures import DEFAULT_LIGATURES, LigatureTable, expand_ligatures
from pdfmend.repair.segmenter import Segmenter

# =============================================================================
# LigatureTable Tests
# =============================================================================


class TestLigatureTable:
    """Tests for LigatureTable class."""

    def test_default_table_size(self):
        assert len(DEFAULT_LIGATURES) == 8

    def test_expand(self):
        assert expand_ligatures("ﬁnal eﬃcient ﬂow") == "final efficient flow"

    def test_expand_all_entries(self):
        table = LigatureTable()
        assert table.expand("Ĳĳﬀﬁﬂﬃﬄﬆ") == "IJijfffifl" + "ffifflst"

    def test_expand_plain_text_unchanged(self):
        text = "nothing to do here"
        assert LigatureTable().expand(text) is text

    def test_expansions_longest_first(self):
        expansions = LigatureTable().expansions
        assert expansions[:2] == ("ffi", "ffl")
        assert set(expansions[2:]) == {"IJ", "ij", "ff", "fi", "fl", "st"}

    def test_contains(self):
        table = LigatureTable()
        assert "ﬁ" in table
        assert "f" not in table

    def test_custom_table(self):
        table = LigatureTable({"æ": "ae"})
        assert table.expand("encyclopædia") == "encyclopaedia"
        assert table.expansions == ("ae",)

    def test_hashable(self):
        assert hash(LigatureTable()) == hash(DEFAULT_LIGATURES)


# =============================================================================
# LigatureRepairer Tests
# =============================================================================


class TestHasCaseBreak:
    def test_detects_lower_upper(self):
        assert has_case_break("theReport")

    def test_plain_words(self):
        assert not has_case_break("Report")
        assert not has_case_break("NASA")
        assert not has_case_break("")


class TestLigatureRepairer:
    """Tests for LigatureRepairer class."""

    def _repairer(self, make_vocabulary, counts):
        return LigatureRepairer(Segmenter(make_vocabulary(counts)))

    def test_dropped_ligatures_restored(self, make_vocabulary):
        repairer = self._repairer(make_vocabulary, {"efficient": 1, "film": 1})

        assert repairer.repair(["e", "cient", "lm"]) == ["efficient", "film"]

    def test_direct_merge(self, make_vocabulary):
        repairer = self._repairer(make_vocabulary, {"report": 1})

        assert repairer.merge_pairs(["re", "port"]) == ["report"]
        assert repairer.stats.pairs_merged == 1
        assert repairer.stats.ligatures_inserted == 0

    def test_known_pair_not_merged(self, make_vocabulary):
        """Two known words stay apart even if their join is known."""
        repairer = self._repairer(make_vocabulary, {"in": 1, "to": 1, "into": 1})

        assert repairer.merge_pairs(["in", "to"]) == ["in", "to"]

    def test_ligature_merge(self, make_vocabulary):
        repairer = self._repairer(make_vocabulary, {"official": 1})

        assert repairer.merge_pairs(["o", "cial"]) == ["official"]
        assert repairer.stats.ligatures_inserted == 1

    def test_prefix_repair(self, make_vocabulary):
        repairer = self._repairer(make_vocabulary, {"final": 1})

        assert repairer.repair_boundaries(["nal"]) == ["final"]
        assert repairer.stats.boundaries_repaired == 1

    def test_suffix_repair(self, make_vocabulary):
        repairer = self._repairer(make_vocabulary, {"stuff": 1})

        assert repairer.repair_boundaries(["stu"]) == ["stuff"]

    def test_no_match_unchanged(self, make_vocabulary):
        """Words that no ligature makes known are left alone."""
        repairer = self._repairer(make_vocabulary, {"report": 1})

        assert repairer.repair(["report", "zzq", "a"]) == ["report", "zzq", "a"]
        assert repairer.stats.total == 0

    def test_run_on_word_resplit(self, make_vocabulary):
        repairer = self._repairer(make_vocabulary, {"the": 2, "report": 2})

        assert repairer.resplit_anomalous(["theReport"]) == ["the", "Report"]
        assert repairer.stats.words_resplit == 1
