"""
Vocabulary-driven segmentation and repair engine.

This module re-segments noisy PDF text using a unigram model of the
document's own vocabulary:
- Vocabulary / LanguageModel: counts from several extraction passes
- Segmenter: bounded-window Viterbi segmentation
- Dehyphenator: line-wrap and interior hyphen repair
- LigatureRepairer: greedy merge pass for sources that drop ligatures
- ParagraphAssembler: paragraph continuation across blocks

Example:
    >>> from pdfmend.repair import RepairPipeline
    >>> pipeline = RepairPipeline()
    >>> pipeline.add_pass(["presentation du rappel"])
    >>> pipeline.repair_block(TextBlock(("R A P P E L",)))
    ['RAPPEL']
"""

from pdfmend.repair.dehyphenate import DehyphenationStats, Dehyphenator
from pdfmend.repair.lexicon import (
    builtin_lexicon,
    detect_language,
    iter_lexicon,
    load_lexicon,
)
from pdfmend.repair.ligature_repair import LigatureRepairer, LigatureRepairStats
from pdfmend.repair.ligatures import (
    DEFAULT_LIGATURES,
    LIGATURES,
    LigatureTable,
    expand_ligatures,
)
from pdfmend.repair.paragraphs import ParagraphAssembler
from pdfmend.repair.pipeline import PipelineStats, RepairPipeline, repair_text
from pdfmend.repair.segmenter import Segmentation, Segmenter, SegmenterStats, tokenize
from pdfmend.repair.vocabulary import LanguageModel, Vocabulary

__all__ = [
    # Pipeline
    "RepairPipeline",
    "PipelineStats",
    "repair_text",
    # Vocabulary
    "Vocabulary",
    "LanguageModel",
    "load_lexicon",
    "iter_lexicon",
    "builtin_lexicon",
    "detect_language",
    # Segmentation
    "Segmenter",
    "Segmentation",
    "SegmenterStats",
    "tokenize",
    # Dehyphenation
    "Dehyphenator",
    "DehyphenationStats",
    # Ligatures
    "LigatureTable",
    "LIGATURES",
    "DEFAULT_LIGATURES",
    "expand_ligatures",
    "LigatureRepairer",
    "LigatureRepairStats",
    # Paragraphs
    "ParagraphAssembler",
]
