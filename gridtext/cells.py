"""Cell classification and line construction.

A cell holds one rendered grapheme cluster. Clustering here is a coarse
heuristic rather than full Unicode segmentation: any code point above the
7-bit range may anchor a cluster, and only the combining diacritical marks
block plus a fixed set of Devanagari signs merge into the cell before them.
"""

from .constants import EngineConstants
from .tabs import pad_to_tab_stop

# Devanagari vowel signs, nasalization marks and the virama
DEVANAGARI_COMBINING_MARKS = frozenset([
    0x900, 0x901, 0x902, 0x903, 0x93a, 0x93b, 0x93c, 0x93e, 0x93f, 0x940,
    0x941, 0x942, 0x943, 0x944, 0x945, 0x946, 0x947, 0x948, 0x949, 0x94a,
    0x94b, 0x94c, 0x94d, 0x94e, 0x94f, 0x955, 0x956, 0x957, 0x962, 0x963,
])

COMBINING_DIACRITICS_FIRST = 0x300
COMBINING_DIACRITICS_LAST = 0x36f


def is_combinable_base(codepoint: int) -> bool:
    """Return True if a combining mark may attach to ``codepoint``."""
    return codepoint > 128


def is_combining_mark(codepoint: int) -> bool:
    """Return True if ``codepoint`` merges into the preceding cell."""
    if COMBINING_DIACRITICS_FIRST <= codepoint <= COMBINING_DIACRITICS_LAST:
        return True
    return codepoint in DEVANAGARI_COMBINING_MARKS


def extend_cells(row: list[str], text: str) -> None:
    """Append ``text`` to ``row`` one cluster at a time.

    Tabs expand to padding cells followed by a single tab glyph cell so that
    the glyph sits just before the next tab stop. A combining mark is merged
    into the last cell when that cell was started by a combinable code point
    during this same pass; otherwise it becomes a cell of its own.
    """
    combinable = False
    for char in text:
        if char == EngineConstants.TAB_GLYPH:
            pad_to_tab_stop(row)
        codepoint = ord(char)
        if row and combinable and is_combining_mark(codepoint):
            row[-1] += char
        else:
            combinable = is_combinable_base(codepoint)
            row.append(char)


def cells_from_text(text: str) -> list[str]:
    """Build a fresh line of cells from plain text."""
    row: list[str] = []
    extend_cells(row, text)
    return row
