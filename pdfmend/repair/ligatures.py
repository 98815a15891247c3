"""
Ligature table.

PDF extractors either pass ligature glyphs through (ﬁ, ﬀ, ...), expand
them, or silently drop them. The table normalizes the first case and
supplies the candidate strings used to guess where the last one happened.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

# =============================================================================
# CONSTANTS
# =============================================================================

LIGATURES: dict[str, str] = {
    "Ĳ": "IJ",
    "ĳ": "ij",
    "ﬀ": "ff",
    "ﬁ": "fi",
    "ﬂ": "fl",
    "ﬃ": "ffi",
    "ﬄ": "ffl",
    "ﬆ": "st",
}


# =============================================================================
# LIGATURE TABLE
# =============================================================================


@dataclass(frozen=True)
class LigatureTable:
    """
    Immutable mapping of ligature characters to their expansions.

    Example:
        >>> table = LigatureTable()
        >>> table.expand("ﬁnal eﬃcient")
        'final efficient'
        >>> table.expansions[:2]
        ('ffi', 'ffl')
    """

    mapping: dict[str, str] = field(default_factory=lambda: dict(LIGATURES))

    def __hash__(self) -> int:
        return hash(tuple(self.mapping.items()))

    @property
    def pattern(self) -> re.Pattern[str]:
        return re.compile("[" + "".join(re.escape(ch) for ch in self.mapping) + "]")

    def expand(self, text: str) -> str:
        """Replace every ligature character in text by its expansion."""
        if not any(ch in text for ch in self.mapping):
            return text
        return self.pattern.sub(lambda m: self.mapping[m.group(0)], text)

    @property
    def expansions(self) -> tuple[str, ...]:
        """Distinct expansion strings, longest first, table order within a length."""
        seen: list[str] = []
        for expansion in self.mapping.values():
            if expansion not in seen:
                seen.append(expansion)
        return tuple(sorted(seen, key=len, reverse=True))

    def __contains__(self, char: str) -> bool:
        return char in self.mapping

    def __len__(self) -> int:
        return len(self.mapping)


DEFAULT_LIGATURES = LigatureTable()


def expand_ligatures(text: str) -> str:
    """Expand ligatures using the default table."""
    return DEFAULT_LIGATURES.expand(text)
