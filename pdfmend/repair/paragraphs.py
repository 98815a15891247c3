"""
Paragraph assembly across extracted blocks.

Extractors break paragraphs at column and page ends. A block whose first
word starts with a lowercase letter is taken to continue the open
paragraph; a paragraph closes when its last word ends a sentence or when
a non-paragraph element starts or ends.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pdfmend.models import PARAGRAPH_TAG, OutputEvent, TagEvent, TextBlock, WordRun

logger = logging.getLogger(__name__)
trace_logger = logging.getLogger("pdfmend.trace")

TERMINAL_PUNCTUATION = (".", "?", "!")


class ParagraphAssembler:
    """
    Turns repaired blocks and structural tags into an output event stream.

    Attributes:
        auto_merge: Merge lowercase-initial blocks into the open paragraph.
        never_split: Keep paragraphs open until a non-paragraph tag.
        trace: Whether to log decisions to the pdfmend.trace logger.

    Example:
        >>> assembler = ParagraphAssembler()
        >>> assembler.add_block(TextBlock(("the annual report",)), ["the", "annual", "report"])
        >>> assembler.add_block(TextBlock(("continues here.",)), ["continues", "here."])
        >>> [e.text for e in assembler.finish() if isinstance(e, WordRun)]
        ['the annual report', 'continues here.']
    """

    def __init__(self, auto_merge: bool = True, never_split: bool = False, trace: bool = False):
        self.auto_merge = auto_merge
        self.never_split = never_split
        self.trace = trace
        self.events: list[OutputEvent] = []
        self.paragraph_open = False
        self.paragraphs = 0

    def add_tag(self, event: TagEvent) -> None:
        """Pass a structural tag through, closing any open paragraph first."""
        self._close()
        self.events.append(event)

    def add_block(self, block: TextBlock, words: Sequence[str]) -> None:
        """Place the repaired words of one block."""
        if not words:
            return
        if not block.is_paragraph:
            self._close()
            self.events.append(TagEvent.start(block.tag))
            self.events.append(WordRun(tuple(words)))
            self.events.append(TagEvent.end(block.tag))
            return

        if self.paragraph_open and self._continues(words[0]):
            self.events.append(WordRun(tuple(words), continuation=True))
            if self.trace:
                trace_logger.info("paragraph continues with %r", words[0])
        else:
            self._close()
            self._open()
            self.events.append(WordRun(tuple(words)))

        if not self.auto_merge:
            self._close()
        elif not self.never_split and words[-1].endswith(TERMINAL_PUNCTUATION):
            self._close()

    def _continues(self, first_word: str) -> bool:
        if self.never_split:
            return True
        return first_word[:1].islower()

    def _open(self) -> None:
        self.events.append(TagEvent.start(PARAGRAPH_TAG))
        self.paragraph_open = True
        self.paragraphs += 1

    def _close(self) -> None:
        if self.paragraph_open:
            self.events.append(TagEvent.end(PARAGRAPH_TAG))
            self.paragraph_open = False

    def finish(self) -> list[OutputEvent]:
        """Close the open paragraph and return all events."""
        self._close()
        logger.debug("Assembled %d paragraphs", self.paragraphs)
        return self.events
