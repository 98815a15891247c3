"""
Data models for pdfmend.

Blocks and tag events flow into the repair pipeline; tag events and
word runs flow out of it and into the XML writer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal, Union

if TYPE_CHECKING:
    from pdfmend.repair.pipeline import PipelineStats

PARAGRAPH_TAG = "p"


@dataclass(frozen=True)
class TextBlock:
    """Text content between two tag boundaries of the primary extraction.

    Lines are kept separate so that line-wrap hyphenation can be
    judged at the line boundary.
    """

    lines: tuple[str, ...]
    tag: str = PARAGRAPH_TAG
    page_index: int = 0

    @property
    def text(self) -> str:
        """Block text with original line breaks."""
        return "\n".join(self.lines)

    @property
    def is_paragraph(self) -> bool:
        return self.tag == PARAGRAPH_TAG


@dataclass(frozen=True)
class TagEvent:
    """Opening or closing of a structural element."""

    kind: Literal["start", "end"]
    name: str
    attributes: dict[str, str] = field(default_factory=dict, compare=False)

    @classmethod
    def start(cls, name: str, **attributes: str) -> TagEvent:
        return cls("start", name, dict(attributes))

    @classmethod
    def end(cls, name: str) -> TagEvent:
        return cls("end", name)


@dataclass(frozen=True)
class WordRun:
    """A repaired word sequence.

    When ``continuation`` is set the run continues the currently open
    element after a single space.
    """

    words: tuple[str, ...]
    continuation: bool = False

    @property
    def text(self) -> str:
        return " ".join(self.words)


InputItem = Union[TagEvent, TextBlock]
OutputEvent = Union[TagEvent, WordRun]


@dataclass
class RepairedDocument:
    """
    The main output type for users.

    Holds the repaired event stream together with the source
    information and diagnostics collected during conversion.

    Example:
        >>> doc = pdfmend.convert("article.pdf")
        >>> print(doc.text)
        >>> doc.save("article.xml")
    """

    events: list[OutputEvent]
    source_path: str
    metadata: dict[str, Any] = field(default_factory=dict)
    stats: PipelineStats | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        """Plain text with one paragraph per line."""
        paragraphs: list[str] = []
        current: list[str] = []
        for event in self.events:
            if isinstance(event, WordRun):
                current.append(event.text)
            elif event.kind == "end" and current:
                paragraphs.append(" ".join(current))
                current = []
        if current:
            paragraphs.append(" ".join(current))
        return "\n".join(paragraphs)

    def to_xml(self) -> str:
        """Render the event stream as an XML string."""
        from pdfmend.writers.xml_writer import XMLWriter

        return XMLWriter().render(self.events)

    def save(self, path: str | Path) -> None:
        """
        Save XML to file.

        Args:
            path: Output file path
        """
        Path(path).write_text(self.to_xml(), encoding="utf-8")

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the document
        """
        return {
            "text": self.text,
            "metadata": self.metadata,
            "source_path": self.source_path,
            "warnings": self.warnings,
            "stats": self.stats.to_dict() if self.stats else None,
        }
