import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from .cells import cells_from_text

logger = logging.getLogger(__name__)


@dataclass
class CursorPosition:
    line_index: int = 0
    cell_index: int = 0

    def __lt__(self, other):
        if self.line_index != other.line_index:
            return self.line_index < other.line_index
        return self.cell_index < other.cell_index


@dataclass
class TextRange:
    """A selection between two cursors, in either order."""
    start: CursorPosition = field(default_factory=CursorPosition)
    end: CursorPosition = field(default_factory=CursorPosition)

    @classmethod
    def from_xy(cls, x0: int, y0: int, x1: int, y1: int) -> "TextRange":
        return cls(CursorPosition(y0, x0), CursorPosition(y1, x1))

    def normalized(self) -> "TextRange":
        """Return the range with start <= end in row-major order."""
        if self.end < self.start:
            return TextRange(self.end, self.start)
        return TextRange(self.start, self.end)


class Document:
    """Ordered lines of cells; the single source of truth for edits.

    A cell is one grapheme cluster, or the empty string for tab padding.
    The document does no locking of its own; ``Engine`` serializes access.
    """

    lines: list[list[str]]

    def __init__(self, lines: Optional[list[list[str]]] = None):
        self.lines = lines if lines is not None else [[]]

    @classmethod
    def from_strings(cls, strings: Iterable[str]) -> "Document":
        """Build a document from plain text lines, clustering each one."""
        lines = [cells_from_text(s) for s in strings]
        return cls(lines or [[]])

    def __len__(self) -> int:
        return len(self.lines)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def line_length(self, line_index: int) -> int:
        return len(self.lines[line_index])

    def has_line(self, line_index: int) -> bool:
        return 0 <= line_index < len(self.lines)

    def contains(self, position: CursorPosition) -> bool:
        """True if ``position`` is a valid insertion point.

        The cell index may equal the line length (end of line).
        """
        if not self.has_line(position.line_index):
            return False
        return 0 <= position.cell_index <= len(self.lines[position.line_index])

    def cell(self, line_index: int, cell_index: int) -> str:
        """Return the cell text, or "" when outside the document."""
        if not self.has_line(line_index):
            return ""
        line = self.lines[line_index]
        if 0 <= cell_index < len(line):
            return line[cell_index]
        return ""

    def to_strings(self) -> list[str]:
        """Plain text of every line; padding cells contribute nothing."""
        return ["".join(line) for line in self.lines]

    def snapshot(self) -> list[list[str]]:
        """Copy of the cell grid that later edits will not affect."""
        return [line[:] for line in self.lines]

    def copy_range(self, text_range: TextRange) -> list[str]:
        """Extract the text covered by ``text_range``, one segment per line.

        The range is normalized first. If either endpoint lies outside the
        document an empty list is returned; a valid but empty range yields a
        single empty segment.
        """
        text_range = text_range.normalized()
        start, end = text_range.start, text_range.end
        if not (self.contains(start) and self.contains(end)):
            logger.debug(f"Copy range out of bounds: {text_range}")
            return []

        segments = []
        for y in range(start.line_index, end.line_index + 1):
            line = self.lines[y]
            first = start.cell_index if y == start.line_index else 0
            last = end.cell_index if y == end.line_index else len(line)
            segments.append("".join(line[first:last]))
        return segments
