"""Tab stop arithmetic shared by paste and the Tab keystroke."""

from .constants import EngineConstants

TAB_WIDTH = EngineConstants.TAB_WIDTH
_TAB_MASK = TAB_WIDTH - 1


def padding_needed(n: int) -> int:
    """Return how many padding cells follow ``n`` cells before a tab glyph.

    This is the smallest ``k >= 0`` such that ``(n + k) % TAB_WIDTH`` equals
    ``TAB_WIDTH - 1``, so that the glyph appended afterwards lands on the last
    column before a tab stop.
    """
    return (_TAB_MASK - (n & _TAB_MASK)) & _TAB_MASK


def pad_to_tab_stop(row: list[str]) -> int:
    """Append padding cells to ``row`` ahead of a tab glyph.

    The caller appends the glyph itself. Returns the number of cells added.
    """
    count = padding_needed(len(row))
    row.extend([EngineConstants.PADDING] * count)
    return count


def is_tab_stop(x: int) -> bool:
    return (x & _TAB_MASK) == 0


def is_tab_terminator_column(x: int) -> bool:
    """True for the column that holds the glyph of a tab run."""
    return (x & _TAB_MASK) == _TAB_MASK


def next_tab_stop(x: int) -> int:
    """Column reached by a Tab keystroke starting at ``x``."""
    return (x | _TAB_MASK) + 1
